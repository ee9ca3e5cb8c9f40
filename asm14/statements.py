"""Recognition and checking of individual source statements.

Checks that find a problem append a message to ``errors``, a list that
collects the messages of a whole file, and report False. Positions are
indices into the raw source line, which normally still ends with its
newline; reading past either end of the line yields a NUL character.
"""

from __future__ import annotations

from asm14.encoding import INSTRUCTIONS, REGISTERS
from asm14.validate import count_char, first_char, has_spaces, index_of, last_char

_WHITESPACE = " \t\n\v\f\r"
_DIGITS = "0123456789"
_LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
_NUL = "\0"
_CHARSET_EXTRA = ".#+-,:()\""
MAX_SYMBOL_SPAN = 30


def _at(line: str, i: int) -> str:
    return line[i] if 0 <= i < len(line) else _NUL


def _is_space(char: str) -> bool:
    return char != _NUL and char in _WHITESPACE


def _is_digit(char: str) -> bool:
    return char != _NUL and char in _DIGITS


def _is_letter(char: str) -> bool:
    return char != _NUL and char in _LETTERS


def _is_alnum(char: str) -> bool:
    return _is_letter(char) or _is_digit(char)


def _substr(line: str, start: int, end: int) -> str:
    """Characters from ``start`` up to ``end``, stopping at the line's end."""
    chars = []
    for i in range(start, end):
        char = _at(line, i)
        if char == _NUL:
            break
        chars.append(char)
    return "".join(chars)


def _syntax_error(line: str, errors: list[str]) -> bool:
    errors.append(f"Invalid syntax in line: {line.rstrip()}")
    return False


def is_blank(line: str) -> bool:
    """True if the line holds only whitespace."""
    return all(_is_space(char) for char in line)


def is_comment(line: str) -> bool:
    """True if the first non-whitespace character is ``;``."""
    stripped = line.lstrip(_WHITESPACE)
    return stripped.startswith(";")


def ends_with_comma(line: str) -> bool:
    """True if the last non-whitespace character before the newline is a comma."""
    for i in range(len(line) - 2, 0, -1):
        if _is_space(line[i]):
            continue
        return line[i] == ","
    return False


def has_valid_layout(line: str) -> bool:
    """Check that ``#`` starts a number and that a label is followed by a statement."""
    if ".string" in line:
        return True
    valid = True
    hash_index = line.find("#")
    if hash_index != -1:
        after = _at(line, hash_index + 1)
        if not (_is_digit(after) or after in ("-", "+")):
            valid = False
    colon = index_of(line, ":", 0)
    if colon != -1:
        following = _at(line, first_char(line, colon + 1))
        if not (_is_letter(following) or _is_digit(following) or following == "."):
            valid = False
    return valid


def has_valid_charset(line: str) -> bool:
    """True if the line, up to its last two characters, uses only allowed characters."""
    if ".string" in line:
        return True
    return all(
        _is_letter(char) or _is_digit(char) or _is_space(char) or char in _CHARSET_EXTRA
        for char in line[: max(len(line) - 2, 0)]
    )


def is_valid_symbol_name(name: str) -> bool:
    """True unless ``name`` is an instruction mnemonic or a register."""
    return name not in INSTRUCTIONS and name not in REGISTERS


def has_label(line: str, errors: list[str]) -> bool:
    """True if the line starts with a well-formed label such as ``MAIN:``."""
    if _at(line, 0) == ";":
        return False
    colons = count_char(line, ":")
    if ".extern" in line or ".entry" in line:
        return False
    if colons == 0:
        return False
    if colons > 1:
        errors.append(f"Invalid syntax, only 1 colon allowed - {line.rstrip()}")
        return False
    colon = index_of(line, ":", 0)
    if colon == 0:
        return _syntax_error(line, errors)
    if line[colon - 1] == " ":
        return _syntax_error(line, errors)

    last_space = -1
    first = 0
    found_first = False
    error_found = False
    for i, char in enumerate(line[:colon]):
        if char == " ":
            last_space = i
        if _is_alnum(char):
            if not found_first:
                first = i
                found_first = True
        else:
            error_found = True

    if not _is_letter(_at(line, first)):
        error_found = True
    if colon - first > MAX_SYMBOL_SPAN:
        error_found = True
    if last_space > first:
        error_found = True
    if not is_valid_symbol_name(_substr(line, first, colon)):
        error_found = True

    if error_found:
        errors.append(f"Invalid symbol declaration in line: {line.rstrip()}")
        return False
    return True


def data_syntax_ok(line: str, end_index: int, errors: list[str]) -> bool:
    """Check the number list that follows ``.data`` (ending at ``end_index``)."""
    temp = ""
    for i in range(end_index, len(line) - 2):
        char = line[i]
        if _is_digit(char):
            has_number = any(_is_digit(c) for c in temp)
            if temp and has_number and not _is_digit(temp[-1]):
                return _syntax_error(line, errors)
            temp += char
        elif char in (" ", "\t"):
            if not temp or _is_digit(temp[-1]) or temp[-1] in (" ", "\t"):
                temp += char
            else:
                return _syntax_error(line, errors)
        elif char in ("+", "-"):
            only_white = all(_is_space(c) for c in temp[: max(len(temp) - 2, 0)])
            if not temp or only_white:
                temp += char
            else:
                return _syntax_error(line, errors)
        else:
            if not temp or not any(_is_digit(c) for c in temp):
                return _syntax_error(line, errors)
            temp = ""
    return True


def is_data_line(line: str, errors: list[str]) -> bool:
    """True if the line is a well-formed ``.data`` directive."""
    start = line.find(".data")
    if start == -1:
        return False
    end = start + 5
    if _at(line, end) not in (" ", "\t"):
        return _syntax_error(line, errors)

    tail_end = len(line) - 2
    for i in range(end, tail_end):
        char = line[i]
        if char in (" ", "\t", "\n"):
            continue
        if not _is_digit(char) and char not in (",", "-", "+"):
            return _syntax_error(line, errors)

    for i in range(end, tail_end):
        if _is_space(line[i]):
            continue
        if line[i] == ",":
            return _syntax_error(line, errors)
        break

    for i in range(tail_end, end, -1):
        char = _at(line, i)
        if _is_space(char):
            continue
        if char in (",", "-", "+"):
            return _syntax_error(line, errors)
        break

    return data_syntax_ok(line, end, errors)


def is_string_line(line: str, errors: list[str]) -> bool:
    """True if the line is a well-formed ``.string`` directive."""
    start = line.find(".string")
    if start == -1:
        return False
    end = start + 7
    if _at(line, end) not in (" ", "\t"):
        return _syntax_error(line, errors)
    if line[end:].count('"') != 2:
        return _syntax_error(line, errors)

    tail_end = len(line) - 2
    for i in range(end, tail_end):
        if _is_space(line[i]):
            continue
        if line[i] != '"':
            return _syntax_error(line, errors)
        break

    for i in range(tail_end, end, -1):
        char = _at(line, i)
        if _is_space(char):
            continue
        if char != '"':
            return _syntax_error(line, errors)
        break
    return True


def _is_declaration(line: str, keyword: str, errors: list[str]) -> bool:
    start = line.find(keyword)
    if start == -1:
        return False
    end = start + len(keyword)
    if _at(line, end) not in (" ", "\t"):
        return _syntax_error(line, errors)

    last = last_char(line, len(line) - 2)
    first = first_char(line, len(keyword))
    error_found = False
    if not _is_letter(_at(line, first)):
        error_found = True
    if not all(_is_alnum(_at(line, i)) for i in range(first, last + 1)):
        error_found = True
    if last - first > MAX_SYMBOL_SPAN:
        error_found = True
    if has_spaces(line, first, last):
        error_found = True
    if not is_valid_symbol_name(_substr(line, first, last)):
        error_found = True

    if error_found:
        return _syntax_error(line, errors)
    return True


def is_entry_line(line: str, errors: list[str]) -> bool:
    """True if the line is a well-formed ``.entry`` directive."""
    return _is_declaration(line, ".entry", errors)


def is_extern_line(line: str, errors: list[str]) -> bool:
    """True if the line is a well-formed ``.extern`` directive."""
    return _is_declaration(line, ".extern", errors)