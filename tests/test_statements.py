import pytest

from asm14.statements import (
    data_syntax_ok,
    ends_with_comma,
    has_label,
    has_valid_charset,
    has_valid_layout,
    is_blank,
    is_comment,
    is_data_line,
    is_entry_line,
    is_extern_line,
    is_string_line,
    is_valid_symbol_name,
)


@pytest.mark.parametrize("line, expected", [(" \t\n", True), ("", True), ("mov\n", False)])
def test_is_blank(line, expected):
    assert is_blank(line) is expected


@pytest.mark.parametrize(
    "line, expected",
    [("  ; note\n", True), (";x\n", True), ("mov r1, r2 ; x\n", False), ("\n", False)],
)
def test_is_comment(line, expected):
    assert is_comment(line) is expected


@pytest.mark.parametrize(
    "line, expected",
    [("mov r1,\n", True), ("mov r1,  \n", True), ("mov r1, r2\n", False)],
)
def test_ends_with_comma(line, expected):
    assert ends_with_comma(line) is expected


@pytest.mark.parametrize(
    "line, expected",
    [
        ("prn #5\n", True),
        ("prn #-5\n", True),
        ("prn #x\n", False),
        ("MAIN: mov r1, r2\n", True),
        ("MAIN:\n", False),
        ('S: .string "#:"\n', True),
    ],
)
def test_has_valid_layout(line, expected):
    assert has_valid_layout(line) is expected


@pytest.mark.parametrize(
    "line, expected",
    [
        ("mov r1, r2\n", True),
        ("mov %1, r2\n", False),
        ('S: .string "%$"\n', True),
    ],
)
def test_has_valid_charset(line, expected):
    assert has_valid_charset(line) is expected


@pytest.mark.parametrize(
    "name, expected",
    [("MAIN", True), ("mov", False), ("stop", False), ("r3", False), ("r8", True)],
)
def test_is_valid_symbol_name(name, expected):
    assert is_valid_symbol_name(name) is expected


def test_has_label_accepts_label():
    errors = []
    assert has_label("MAIN: mov r1, r2\n", errors) is True
    assert errors == []


@pytest.mark.parametrize("line", ["mov r1, r2\n", ".extern X\n", ".entry MAIN\n", "; c: d\n"])
def test_has_label_absent_without_error(line):
    errors = []
    assert has_label(line, errors) is False
    assert errors == []


@pytest.mark.parametrize(
    "line",
    [
        "A:B: stop\n",
        ":stop\n",
        "MAIN : stop\n",
        "1ABC: stop\n",
        "mov: stop\n",
        " MAIN: stop\n",
        "A" * 31 + ": stop\n",
    ],
)
def test_has_label_rejects_bad_labels(line):
    errors = []
    assert has_label(line, errors) is False
    assert len(errors) == 1


def test_has_label_thirty_characters_allowed():
    errors = []
    assert has_label("A" * 30 + ": stop\n", errors) is True
    assert errors == []


def test_is_data_line_accepts_numbers():
    errors = []
    assert is_data_line("X: .data 5, -3, +7\n", errors) is True
    assert errors == []


def test_is_data_line_not_data():
    errors = []
    assert is_data_line("mov r1, r2\n", errors) is False
    assert errors == []


@pytest.mark.parametrize(
    "line",
    [
        ".data5\n",
        ".data 5,\n",
        ".data ,5\n",
        ".data 5, x, 6\n",
        "X: .data 5 6, 7\n",
        ".data 1,,2, 3\n",
    ],
)
def test_is_data_line_rejects(line):
    errors = []
    assert is_data_line(line, errors) is False
    assert len(errors) == 1


def test_data_syntax_ok_double_comma():
    errors = []
    assert data_syntax_ok(".data 1,,2\n", 5, errors) is False
    assert len(errors) == 1


def test_data_syntax_ok_valid_list():
    errors = []
    assert data_syntax_ok(".data 1, 2, 3\n", 5, errors) is True
    assert errors == []


def test_is_string_line_accepts():
    errors = []
    assert is_string_line('S: .string "abc"\n', errors) is True
    assert errors == []


def test_is_string_line_not_string():
    errors = []
    assert is_string_line(".data 4\n", errors) is False
    assert errors == []


@pytest.mark.parametrize(
    "line",
    ['.string "a"b"\n', '.string"ab"\n', '.string abc "d"\n', '.string "ab" x\n'],
)
def test_is_string_line_rejects(line):
    errors = []
    assert is_string_line(line, errors) is False
    assert len(errors) == 1


def test_is_entry_line_accepts():
    errors = []
    assert is_entry_line(".entry MAIN\n", errors) is True
    assert errors == []


@pytest.mark.parametrize("line", [".entry 1X\n", ".entry A B\n", ".entryX\n"])
def test_is_entry_line_rejects(line):
    errors = []
    assert is_entry_line(line, errors) is False
    assert len(errors) == 1


def test_is_entry_line_absent():
    errors = []
    assert is_entry_line("stop\n", errors) is False
    assert errors == []


def test_is_extern_line_accepts():
    errors = []
    assert is_extern_line(".extern LEN\n", errors) is True
    assert errors == []


@pytest.mark.parametrize("line", [".extern\n", ".extern  \n", ".extern A-B\n"])
def test_is_extern_line_rejects(line):
    errors = []
    assert is_extern_line(line, errors) is False
    assert len(errors) == 1


def test_errors_accumulate_across_checks():
    errors = []
    is_extern_line(".extern\n", errors)
    is_data_line(".data ,5\n", errors)
    assert len(errors) == 2
    assert all(message.startswith("Invalid syntax in line:") for message in errors)