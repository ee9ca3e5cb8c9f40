"""Second pass: check entry declarations and resolve symbol references."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from asm14.encoding import to_binary
from asm14.first_pass import add_extern_entry_symbol
from asm14.statements import is_blank, is_comment
from asm14.tables import AssemblyError, BinaryTable, SymbolTable

EXTERNAL_ARE = "01"
RELOCATABLE_ARE = "10"


@dataclass
class SecondPassResult:
    """Entry and extern listings produced by the second pass."""

    entries: list[tuple[str, int]] = field(default_factory=list)
    externals: list[tuple[str, int]] = field(default_factory=list)


def collect_entries(lines: Iterable[str]) -> tuple[list[str], list[str]]:
    """Names declared by ``.entry`` lines, and any errors found among them."""
    entries = SymbolTable()
    errors: list[str] = []
    for line in lines:
        if is_blank(line) or is_comment(line):
            continue
        if ".data" in line or ".string" in line or ".extern" in line:
            continue
        if ".entry" in line:
            add_extern_entry_symbol(entries, line, 0, errors)
    return [symbol.name for symbol in entries], errors


def extern_references(instructions: BinaryTable, symbols: SymbolTable) -> list[tuple[str, int]]:
    """Every unresolved word that refers to an external symbol, with its address."""
    references = []
    for word in instructions:
        if not word.bits.startswith("?"):
            continue
        name = word.bits[1:]
        symbol = symbols.find(name)
        if symbol is not None and symbol.is_extern:
            references.append((name, word.address))
    return references


def entry_lines(symbols: SymbolTable) -> list[tuple[str, int]]:
    """Name and address of every symbol marked as an entry, in declaration order."""
    return [(symbol.name, symbol.address) for symbol in symbols if symbol.is_entry]


def resolve_symbols(instructions: BinaryTable, symbols: SymbolTable) -> None:
    """Replace every ``?NAME`` placeholder word with the symbol's address word.

    An undeclared name takes the address and kind of the previously resolved
    symbol (address 0, relocatable, when there is none).
    """
    address, external = 0, False
    for word in instructions:
        if not word.bits.startswith("?"):
            continue
        symbol = symbols.find(word.bits[1:])
        if symbol is not None:
            address, external = symbol.address, symbol.is_extern
        word.bits = to_binary(address, 12) + (EXTERNAL_ARE if external else RELOCATABLE_ARE)


def second_pass(lines: Iterable[str], symbols: SymbolTable,
                instructions: BinaryTable) -> SecondPassResult:
    """Run the second pass over macro-expanded source lines.

    Marks declared entries, lists extern references and resolves symbols in
    ``instructions``. Raises AssemblyError when the source has errors.
    """
    names, errors = collect_entries(lines)
    for name in names:
        symbol = symbols.find(name)
        if symbol is None:
            errors.append(f"Error: declared entry symbol '{name}' without initialzing it.")
        else:
            symbol.is_entry = True

    if errors:
        errors.append("Errors found in file. Terminating program.")
        raise AssemblyError("\n".join(errors))

    result = SecondPassResult(
        entries=entry_lines(symbols) if names else [],
        externals=extern_references(instructions, symbols),
    )
    resolve_symbols(instructions, symbols)
    return result