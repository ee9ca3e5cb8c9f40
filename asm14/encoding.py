"""Encoding of source lines into 14-bit machine words."""

from __future__ import annotations

import re

from asm14.tables import AssemblyError, BinaryTable

INSTRUCTIONS = (
    "mov", "cmp", "add", "sub", "not", "clr", "lea", "inc",
    "dec", "jmp", "bne", "red", "prn", "jsr", "rts", "stop",
)
REGISTERS = ("r0", "r1", "r2", "r3", "r4", "r5", "r6", "r7")

TWO_OPERANDS = ("mov", "cmp", "add", "sub", "lea")
ONE_OPERAND = ("not", "clr", "inc", "dec", "jmp", "bne", "red", "prn", "jsr")
NO_OPERANDS = ("rts", "stop")

WORD_BITS = 14
ZERO_WORD = "0" * WORD_BITS

_WHITESPACE = " \t\n\v\f\r"
_SEPARATORS = frozenset(_WHITESPACE + ",()")
_INT_PREFIX = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


def _atoi(text: str) -> int:
    """Leading integer of ``text``, or 0 when it does not start with one."""
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def to_binary(value: int, width: int) -> str:
    """Two's-complement bit string of ``value`` with ``width`` digits."""
    return format(value & ((1 << width) - 1), f"0{width}b")


def find_index(names, name: str) -> int:
    """Position of ``name`` in ``names``, or -1 if it is absent."""
    for index, candidate in enumerate(names):
        if candidate == name:
            return index
    return -1


def opcode_bits(opcode: str) -> str:
    """Four-bit code of an instruction mnemonic."""
    return to_binary(find_index(INSTRUCTIONS, opcode), 4)


def next_word(text: str, position: int) -> tuple[str | None, int]:
    """Next word at or after ``position`` and the position just past it.

    Words are separated by whitespace, commas and parentheses; the word is
    None when nothing is left.
    """
    end = len(text)
    i = position
    while i < end and text[i] in _SEPARATORS:
        i += 1
    start = i
    while i < end and text[i] not in _SEPARATORS:
        i += 1
    return (text[start:i] or None), i


def is_label(word: str) -> bool:
    """True if ``word`` is a label declaration such as ``MAIN:``."""
    return word.endswith(":")


def _addressing(operand: str) -> str:
    if operand in REGISTERS:
        return "11"
    if operand.startswith("#"):
        return "00"
    return "01"


def addressing_bits(src: str | None, dest: str) -> str:
    """Four addressing-mode bits for a source and destination operand."""
    src_bits = "00" if src is None else _addressing(src)
    return src_bits + _addressing(dest)


def string_words(line: str, data_table: BinaryTable) -> None:
    """Add one word per character of the quoted string, then a zero word."""
    opening = line.find('"')
    if opening == -1:
        raise AssemblyError(f"missing string literal: {line.rstrip()}")
    closing = line.find('"', opening + 1)
    if closing == -1:
        raise AssemblyError(f"unterminated string literal: {line.rstrip()}")
    for char in line[opening + 1:closing]:
        data_table.add(to_binary(ord(char), WORD_BITS))
    data_table.add(ZERO_WORD)


def data_words(line: str, position: int, data_table: BinaryTable) -> int:
    """Add one word per number after ``position``; return the final position."""
    while True:
        word, position = next_word(line, position)
        if word is None:
            return position
        data_table.add(to_binary(_atoi(word), WORD_BITS))


def _register_number(register: str) -> str:
    return to_binary(_atoi(register[1:]), 6)


def register_word(src: str | None, dest: str | None) -> str:
    """Word that holds a source and/or destination register number."""
    if src is None and dest is None:
        raise AssemblyError("a register word needs at least one register")
    src_bits = "000000" if src is None else _register_number(src)
    dest_bits = "000000" if dest is None else _register_number(dest)
    return src_bits + dest_bits + "00"


def _operand_word(operand: str, is_source: bool) -> str:
    if operand in REGISTERS:
        return register_word(operand, None) if is_source else register_word(None, operand)
    if operand.startswith("#"):
        return to_binary(_atoi(operand[1:]), 12) + "00"
    return "?" + operand


def operand_words(src: str | None, dest: str, table: BinaryTable) -> None:
    """Add the extra words of an instruction's operands to ``table``.

    Symbols are left as ``?NAME`` placeholders for the second pass; two
    register operands share one word.
    """
    if src is None:
        table.add(_operand_word(dest, is_source=False))
        return
    if src in REGISTERS and dest in REGISTERS:
        table.add(register_word(src, dest))
        return
    table.add(_operand_word(src, is_source=True))
    table.add(_operand_word(dest, is_source=False))


def _require(word: str | None, line: str) -> str:
    if word is None:
        raise AssemblyError(f"missing operand: {line.rstrip()}")
    return word


def encode_line(line: str, instructions_table: BinaryTable, data_table: BinaryTable) -> None:
    """Encode one statement into the instruction or data table."""
    opcode, position = next_word(line, 0)
    opcode = _require(opcode, line)
    if is_label(opcode):
        opcode, position = next_word(line, position)
        opcode = _require(opcode, line)

    if opcode in NO_OPERANDS:
        instructions_table.add("0000" + opcode_bits(opcode) + "0000" + "00")
    elif opcode in ONE_OPERAND:
        first, position = next_word(line, position)
        first = _require(first, line)
        param, position = next_word(line, position)
        if param is not None:
            dest, position = next_word(line, position)
            dest = _require(dest, line)
            instructions_table.add(
                addressing_bits(param, dest) + opcode_bits(opcode) + "0010" + "00"
            )
            instructions_table.add("?" + first)
            operand_words(param, dest, instructions_table)
        else:
            instructions_table.add(
                "0000" + opcode_bits(opcode) + addressing_bits(None, first) + "00"
            )
            operand_words(None, first, instructions_table)
    elif opcode in TWO_OPERANDS:
        src, position = next_word(line, position)
        src = _require(src, line)
        dest, position = next_word(line, position)
        dest = _require(dest, line)
        instructions_table.add(
            "0000" + opcode_bits(opcode) + addressing_bits(src, dest) + "00"
        )
        operand_words(src, dest, instructions_table)
    elif opcode == ".string":
        string_words(line, data_table)
    elif opcode == ".data":
        data_words(line, position, data_table)