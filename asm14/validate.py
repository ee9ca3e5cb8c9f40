"""Syntax checks for instruction statements.

Positions are indices into the raw source line, which normally still ends
with its newline. Reading past either end of the line yields a NUL
character, which is neither whitespace, a letter nor a digit.
"""

from __future__ import annotations

from asm14.encoding import REGISTERS

_WHITESPACE = " \t\n\v\f\r"
_DIGITS = "0123456789"
_LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
_NUL = "\0"

_OPERAND_COUNTS = {
    "mov": 2, "cmp": 2, "add": 2, "sub": 2, "lea": 2,
    "not": 1, "clr": 1, "inc": 1, "dec": 1, "jmp": 1,
    "bne": 1, "red": 1, "prn": 1, "jsr": 1,
    "rts": 0, "stop": 0,
}

_JUMPS = ("jmp", "bne", "jsr")
_SRC_ANY_DEST_WRITABLE = ("mov", "add", "sub")
_BOTH_ANY = ("cmp",)
_SRC_SYMBOL = ("lea",)
_DEST_WRITABLE = ("not", "clr", "inc", "dec", "red")


def _at(line: str, i: int) -> str:
    return line[i] if 0 <= i < len(line) else _NUL


def _is_space(char: str) -> bool:
    return char in _WHITESPACE


def _is_digit(char: str) -> bool:
    return char != _NUL and char in _DIGITS


def _is_letter(char: str) -> bool:
    return char != _NUL and char in _LETTERS


def _substr(line: str, start: int, end: int) -> str:
    """Characters from ``start`` up to ``end``, stopping at the line's end."""
    chars = []
    for i in range(start, end):
        char = _at(line, i)
        if char == _NUL:
            break
        chars.append(char)
    return "".join(chars)


def index_of(line: str, target: str, start: int) -> int:
    """Index of the first ``target`` at or after ``start``, or -1."""
    for i in range(max(start, 0), len(line)):
        if line[i] == target:
            return i
    return -1


def count_char(line: str, target: str) -> int:
    """Number of times ``target`` occurs in ``line``."""
    return line.count(target)


def first_char(line: str, start: int) -> int:
    """Index of the first non-whitespace character from ``start``, or -1."""
    for i in range(max(start, 0), len(line)):
        if not _is_space(line[i]):
            return i
    return -1


def last_char(line: str, end: int) -> int:
    """Index of the last non-whitespace character at or before ``end``.

    Index 0 is never reported; -1 is returned instead.
    """
    for i in range(end, 0, -1):
        if not _is_space(_at(line, i)):
            return i
    return -1


def has_spaces(line: str, start: int, end: int) -> bool:
    """True if any character in ``[start, end)`` is whitespace."""
    return any(_is_space(_at(line, i)) for i in range(start, end))


def is_register(line: str, start: int, end: int) -> bool:
    """True if ``line[start:end]`` names a register."""
    return _substr(line, start, end) in REGISTERS


def is_immediate(line: str, start: int, end: int) -> bool:
    """True if ``line[start:end]`` is an immediate operand such as ``#-5``."""
    if has_spaces(line, start, end):
        return False
    number = _substr(line, start, end)
    if _at(number, 0) != "#":
        return False
    second = _at(number, 1)
    if second not in "+-" and not _is_digit(second):
        return False
    first_digit = 1 if _is_digit(second) else 2
    # The digit check reads the line itself rather than the operand.
    return all(_is_digit(_at(line, i)) for i in range(first_digit, len(number) - 2))


def is_symbol(line: str, start: int, end: int) -> bool:
    """True if ``line[start:end]`` is a symbol name: a letter then letters or digits."""
    if is_register(line, start, end):
        return False
    if has_spaces(line, start, end):
        return False
    if not _is_letter(_at(line, start)):
        return False
    return all(
        _is_letter(_at(line, i)) or _is_digit(_at(line, i)) for i in range(start, end)
    )


def opcode_span(line: str) -> tuple[int, int]:
    """Start and end index of the mnemonic, skipping a leading label."""
    colon = line.find(":")
    search_from = 0 if colon == -1 else colon + 1
    start = 0
    for i in range(search_from, len(line)):
        if not _is_space(line[i]):
            start = i
            break
    end = start + 3 if _is_space(_at(line, start + 3)) else start + 4
    return start, end


def needed_operand_count(opcode: str) -> int:
    """Number of operands a mnemonic takes, or -1 for an unknown mnemonic."""
    return _OPERAND_COUNTS.get(opcode, -1)


def actual_operand_count(line: str, index: int) -> int:
    """Number of operands written after ``index``, judged by commas."""
    if all(_is_space(char) for char in line[max(index, 0):]):
        return 0
    return line.count(",") + 1


def check_no_operands(line: str, index: int) -> bool:
    """True if nothing but whitespace follows ``index``."""
    return all(_is_space(char) for char in line[max(index, 0):])


def check_one_operand(line: str, index: int) -> bool:
    """True if the single operand after ``index`` holds no whitespace."""
    first = -1
    for i in range(max(index, 0), len(line)):
        if not _is_space(line[i]):
            first = i
            break
    last = -1
    for i in range(len(line) - 1, first, -1):
        if not _is_space(line[i]):
            last = i
            break
    return not has_spaces(line, first, last)


def check_two_operands(line: str, index: int) -> bool:
    """True if neither of the two comma-separated operands holds whitespace."""
    comma = -1
    for i in range(max(index, 0), len(line)):
        if line[i] == ",":
            comma = i
            break
    first = -1
    last = -1
    for i in range(index, comma):
        if not _is_space(_at(line, i)):
            first = i
            break
    for i in range(comma - 1, first, -1):
        if not _is_space(_at(line, i)):
            last = i
            break
    if has_spaces(line, first, last):
        return False

    for i in range(comma + 1, len(line)):
        if not _is_space(line[i]):
            first = i
            break
    for i in range(len(line) - 2, first, -1):
        if not _is_space(_at(line, i)):
            last = i
    return not has_spaces(line, first, last)


def validate_jump(line: str, index: int) -> bool:
    """Check ``jmp LABEL`` or ``jmp LABEL(op1,op2)`` syntax after ``index``."""
    commas = count_char(line, ",")
    if commas > 1:
        return False
    if commas == 0:
        return check_one_operand(line, index)

    if count_char(line, "(") != 1 and count_char(line, ")") != 1:
        return False
    open_paren = index_of(line, "(", index)
    close_paren = index_of(line, ")", index)
    label_start = first_char(line, index)
    comma = index_of(line, ",", index)
    label_end = -1
    if open_paren - 1 > label_start:
        if _is_space(_at(line, open_paren - 1)):
            return False
        label_end = open_paren - 1
    if has_spaces(line, label_start, label_end):
        return False
    if not (open_paren < close_paren and open_paren < comma < close_paren):
        return False
    return not has_spaces(line, label_start, close_paren)


def _any_operand(line: str, start: int, end: int) -> bool:
    return (
        is_immediate(line, start, end)
        or is_symbol(line, start, end)
        or is_register(line, start, end)
    )


def _writable_operand(line: str, start: int, end: int) -> bool:
    return is_symbol(line, start, end) or is_register(line, start, end)


def validate_operand_types(line: str, opcode: str, index: int) -> bool:
    """True if the operands after ``index`` use addressing modes ``opcode`` allows."""
    comma = index_of(line, ",", index)
    first_start = first_char(line, index)
    second_start = -1
    second_end = -1
    if comma != -1:
        first_end = last_char(line, comma - 1)
        second_start = first_char(line, comma + 1)
        second_end = last_char(line, len(line) - 2)
    else:
        first_end = last_char(line, len(line) - 2)

    if opcode in _SRC_ANY_DEST_WRITABLE:
        if not _any_operand(line, first_start, first_end + 1):
            return False
        return _writable_operand(line, second_start, second_end)

    if opcode in _BOTH_ANY:
        if not _any_operand(line, first_start, first_end + 1):
            return False
        return _any_operand(line, second_start, second_end + 1)

    if opcode in _SRC_SYMBOL:
        if not is_symbol(line, first_start, first_end + 1):
            return False
        return _writable_operand(line, second_start, second_end + 1)

    if opcode in _DEST_WRITABLE:
        return _writable_operand(line, first_start, first_end + 1)

    if opcode in _JUMPS:
        if comma == -1:
            return _writable_operand(line, first_start, first_end + 1)
        open_paren = index_of(line, "(", 0)
        close_paren = index_of(line, ")", 0)
        param_comma = index_of(line, ",", 0)
        if not _any_operand(line, open_paren + 1, param_comma):
            return False
        return _writable_operand(line, param_comma + 1, close_paren)

    return True


def is_valid_opcode_line(line: str) -> bool:
    """True if an instruction statement has valid operand count, layout and types."""
    start, end = opcode_span(line)
    opcode = _substr(line, start, end)
    needed = needed_operand_count(opcode)
    actual = actual_operand_count(line, end)

    if opcode not in _JUMPS and needed != actual:
        return False

    if opcode in _JUMPS:
        layout_ok = validate_jump(line, end)
    elif actual == 0:
        layout_ok = check_no_operands(line, end)
    elif actual == 1:
        layout_ok = check_one_operand(line, end)
    else:
        layout_ok = check_two_operands(line, end)
    if not layout_ok:
        return False

    return validate_operand_types(line, opcode, end)