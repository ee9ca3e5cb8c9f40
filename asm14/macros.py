"""Macro expansion performed before the assembler passes."""

from __future__ import annotations

from typing import Iterable

MACRO_START = "mcr"
MACRO_END = "endmcr"


def expand_macros(lines: Iterable[str]) -> list[str]:
    """Return the source lines with every macro definition removed and every call expanded.

    A definition starts with a ``mcr NAME`` line and ends with an ``endmcr``
    line. A line holding nothing but a defined macro's name is replaced by the
    macro's body. When a name is defined twice, the first definition is kept.
    """
    macros: dict[str, tuple[str, ...]] = {}
    output: list[str] = []
    name = ""
    body: list[str] = []
    in_macro = False

    for line in lines:
        words = line.split()[:2]
        if len(words) == 1 and words[0] in macros:
            output.extend(macros[words[0]])
        elif len(words) == 2 and words[0] == MACRO_START:
            name = words[1]
            in_macro = True
        elif len(words) == 1 and words[0] == MACRO_END:
            macros.setdefault(name, tuple(body))
            name = ""
            body = []
            in_macro = False
        elif in_macro:
            body.append(line)
        else:
            output.append(line)
    return output