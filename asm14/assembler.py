"""Command-line driver: assemble ``.as`` files into object, entry and extern files."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

from asm14.first_pass import first_pass
from asm14.macros import expand_macros
from asm14.second_pass import second_pass
from asm14.tables import AssemblyError, BinaryTable

WORD_SIZE = 14
_ENCODING = "latin-1"
_SYMBOLS = {"0": ".", "1": "/"}


def to_dots_slashes(bits: str) -> str:
    """Write a bit string with ``.`` for 0 and ``/`` for 1."""
    try:
        return "".join(_SYMBOLS[bit] for bit in bits)
    except KeyError:
        raise AssemblyError("Invalid input string!") from None


def object_lines(instructions: BinaryTable, data: BinaryTable) -> Iterator[str]:
    """Object-file lines: four-digit address, a tab and the encoded word."""
    for table in (instructions, data):
        for word in table:
            yield f"{word.address:04d}\t{to_dots_slashes(word.bits[:WORD_SIZE])}"


def _write(path: Path, lines) -> None:
    try:
        path.write_text("".join(f"{line}\n" for line in lines), encoding=_ENCODING)
    except OSError as exc:
        raise AssemblyError(f"Error: Could not open file {path}") from exc


def assemble_file(base) -> list[Path]:
    """Assemble ``<base>.as`` and return the paths of the files written.

    Always writes ``<base>.am`` with macros expanded; on success also writes
    ``<base>.ob`` and, when needed, ``<base>.ext`` and ``<base>.ent``.
    Raises AssemblyError when the source cannot be read or has errors.
    """
    base = str(base)
    source = Path(f"{base}.as")
    try:
        with source.open(encoding=_ENCODING) as handle:
            lines = handle.readlines()
    except OSError as exc:
        raise AssemblyError(f"Error: Could not open file {source}") from exc

    expanded = expand_macros(lines)
    expanded_path = Path(f"{base}.am")
    try:
        expanded_path.write_text("".join(expanded), encoding=_ENCODING)
    except OSError as exc:
        raise AssemblyError(f"Error: Could not open file {expanded_path}") from exc
    written = [expanded_path]

    first = first_pass(expanded)
    second = second_pass(expanded, first.symbols, first.instructions)

    if second.externals:
        extern_path = Path(f"{base}.ext")
        _write(extern_path, (f"{name}\t{address}" for name, address in second.externals))
        written.append(extern_path)
    if second.entries:
        entry_path = Path(f"{base}.ent")
        _write(entry_path, (f"{name}\t{address}" for name, address in second.entries))
        written.append(entry_path)

    object_path = Path(f"{base}.ob")
    _write(object_path, list(object_lines(first.instructions, first.data)))
    written.append(object_path)
    return written


def main(argv=None) -> int:
    """Assemble every base name given on the command line."""
    names = sys.argv[1:] if argv is None else argv
    for name in names:
        try:
            assemble_file(name)
        except AssemblyError as exc:
            print(exc)
        except OSError as exc:
            print(f"Error: {exc}")
    return 0