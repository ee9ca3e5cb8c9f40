"""First pass: validate statements, collect symbols and encode what is known."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from asm14.encoding import INSTRUCTIONS, encode_line
from asm14.statements import (
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
)
from asm14.tables import AssemblyError, BinaryTable, SymbolKind, SymbolTable
from asm14.validate import first_char, is_valid_opcode_line, last_char

INSTRUCTION_START = 100
"""Address of the first instruction word."""

_WHITESPACE = " \t\n\v\f\r"
_LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"


@dataclass
class FirstPassResult:
    """Tables built by the first pass of a source file."""

    symbols: SymbolTable = field(default_factory=SymbolTable)
    instructions: BinaryTable = field(
        default_factory=lambda: BinaryTable(counter=INSTRUCTION_START)
    )
    data: BinaryTable = field(default_factory=BinaryTable)


def _syntax_error(line: str) -> str:
    return f"Invalid syntax in line: {line.rstrip()}"


def count_substring(text: str, sub: str) -> int:
    """Number of non-overlapping occurrences of ``sub`` in ``text``."""
    if not sub:
        return 0
    return text.count(sub)


def valid_instruction(line: str) -> bool:
    """True if the mnemonic after an optional label is a single, known instruction."""
    colon = line.find(":")
    search_from = 0 if colon == -1 else colon + 1
    start = -1
    end = max(search_from, len(line))
    for i in range(search_from, len(line)):
        char = line[i]
        if char in _WHITESPACE:
            if start == -1:
                continue
            end = i
            break
        if start == -1:
            start = i
        if char not in _LETTERS:
            return False
    if start == -1:
        return False
    opcode = line[start:end]
    if opcode not in INSTRUCTIONS:
        return False
    return count_substring(line, opcode) == 1


def _declared_name(line: str, keyword_length: int) -> str:
    start = first_char(line, first_char(line, 0) + keyword_length)
    end = last_char(line, len(line) - 1) + 1
    return line[start:end] if start >= 0 else ""


def _add(symbols: SymbolTable, name: str, address: int, kind: SymbolKind,
         is_data: bool, errors: list[str]) -> None:
    try:
        symbols.add(name, address, kind, is_data)
    except AssemblyError as exc:
        errors.append(f"Error: {exc}")


def add_extern_entry_symbol(symbols: SymbolTable, line: str, address: int,
                            errors: list[str]) -> None:
    """Declare the symbol named by an ``.extern`` or ``.entry`` line."""
    if ".extern" in line:
        kind = SymbolKind.EXTERN
        name = _declared_name(line, len(".extern"))
    else:
        kind = SymbolKind.ENTRY
        name = _declared_name(line, len(".entry"))
    _add(symbols, name, address, kind, False, errors)


def add_symbol(symbols: SymbolTable, line: str, address: int, is_data: bool,
               errors: list[str]) -> None:
    """Declare the label that starts ``line`` at ``address``."""
    if ".extern" in line or ".entry" in line:
        add_extern_entry_symbol(symbols, line, address, errors)
        return
    start = next((i for i, c in enumerate(line) if c not in _WHITESPACE), len(line))
    stop = max(start + 1, len(line))
    for i in range(start + 1, len(line)):
        if line[i] in _WHITESPACE:
            stop = i
            break
    name = line[start:stop - 1]
    _add(symbols, name, address, SymbolKind.LOCAL, is_data, errors)


def first_pass(lines: Iterable[str]) -> FirstPassResult:
    """Run the first pass over macro-expanded source lines.

    Raises AssemblyError listing every problem found when the source has errors.
    """
    result = FirstPassResult()
    symbols = result.symbols
    instructions = result.instructions
    data = result.data
    errors: list[str] = []

    for line in lines:
        if is_blank(line) or is_comment(line):
            continue
        if ends_with_comma(line):
            errors.append(_syntax_error(line))
            continue

        before = len(errors)
        if not has_valid_layout(line) or not has_valid_charset(line):
            errors.append(_syntax_error(line))
            continue

        label = has_label(line, errors)
        data_line = is_data_line(line, errors)
        string_line = is_string_line(line, errors)
        entry_line = is_entry_line(line, errors)
        extern_line = is_extern_line(line, errors)

        if data_line or string_line:
            if label:
                address = 0 if extern_line else data.counter
                add_symbol(symbols, line, address, True, errors)
        elif entry_line or extern_line:
            if extern_line:
                add_extern_entry_symbol(symbols, line, 0, errors)
            continue
        elif label:
            add_symbol(symbols, line, instructions.counter, False, errors)

        if len(errors) == before and not (data_line or string_line):
            if not valid_instruction(line) or not is_valid_opcode_line(line):
                errors.append(_syntax_error(line))

        if len(errors) == before:
            try:
                encode_line(line, instructions, data)
            except AssemblyError as exc:
                errors.append(str(exc))

    final_ic = instructions.counter
    for word in data:
        word.address += final_ic
    for symbol in symbols:
        if symbol.is_data:
            symbol.address += final_ic

    if errors:
        raise AssemblyError("\n".join(errors))
    return result