"""Symbol and machine-word tables shared by the assembler passes."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterator

WORD_SIZE = 14
"""Number of characters kept from every word added to a binary table."""


class AssemblyError(Exception):
    """Raised when a source file cannot be assembled."""


class SymbolKind(enum.Enum):
    """How a symbol was declared."""

    LOCAL = 0
    EXTERN = 1
    ENTRY = 2


@dataclass
class Symbol:
    """A named address in the program."""

    name: str
    address: int
    is_extern: bool = False
    is_entry: bool = False
    is_data: bool = False


@dataclass
class SymbolTable:
    """Symbols in the order they were declared, looked up by name."""

    _symbols: dict[str, Symbol] = field(default_factory=dict)

    def add(self, name: str, address: int, kind: SymbolKind, is_data: bool) -> Symbol:
        """Declare a new symbol; a name may only be declared once."""
        if name in self._symbols:
            raise AssemblyError(f"multiple definitions of symbol '{name}'")
        symbol = Symbol(
            name=name,
            address=address,
            is_extern=kind is SymbolKind.EXTERN,
            is_entry=kind is SymbolKind.ENTRY,
            is_data=bool(is_data),
        )
        self._symbols[name] = symbol
        return symbol

    def find(self, name: str) -> Symbol | None:
        """Return the symbol called ``name``, or None if it is not declared."""
        return self._symbols.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._symbols

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self._symbols.values())

    def __len__(self) -> int:
        return len(self._symbols)


@dataclass
class BinaryLine:
    """One machine word and the address it is placed at."""

    address: int
    bits: str


@dataclass
class BinaryTable:
    """Machine words in address order; ``counter`` is the next free address."""

    counter: int = 0
    lines: list[BinaryLine] = field(default_factory=list)

    def add(self, bits: str) -> BinaryLine:
        """Append a word at the next address, keeping its first 14 characters."""
        line = BinaryLine(address=self.counter, bits=bits[:WORD_SIZE])
        self.lines.append(line)
        self.counter += 1
        return line

    def __iter__(self) -> Iterator[BinaryLine]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)