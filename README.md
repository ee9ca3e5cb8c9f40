# asm14

An assembler for a small 14-bit teaching machine. It reads assembly source,
expands macros, runs two passes over the program and writes an object file
in which every 14-bit word is spelled with dots (`0`) and slashes (`1`).

## Installing

```
pip install .
```

## Running

Pass one or more base names, without the `.as` suffix:

```
asm14 prog other
```

For each base name `prog` the assembler:

1. reads `prog.as` and writes `prog.am`, the source with every macro
   (`mcr NAME` … `endmcr`) expanded where it is called. `prog.am` is
   written even when the program later turns out to have errors;
2. runs the first pass over the expanded lines, validating each line,
   building the symbol table and encoding what it can. Instructions start at
   address 100 and data is placed after the last instruction;
3. runs the second pass, checking that every `.entry` symbol is defined and
   filling in symbol addresses;
4. writes `prog.ob`, one line per word: a four-digit address, a tab, and the
   word in dots and slashes, instruction words first, then data words;
5. writes `prog.ent` when the program declares entry symbols (each line a
   symbol name, a tab and its address), and `prog.ext` when instructions
   refer to external symbols (each line a symbol name, a tab and the address
   of the word that refers to it).

Errors are printed on standard output together with the offending line. A
file with errors gets no object, entry or extern file; the remaining base
names are still processed. The command always exits with status 0.

## Source language

- Labels: `NAME:` at the start of a line, a letter followed by letters or
  digits, up to 30 characters, not an opcode or register name.
- Directives: `.data 7, -57, +17`, `.string "abc"`, `.entry NAME`,
  `.extern NAME`.
- Opcodes: `mov cmp add sub lea` (two operands), `not clr inc dec jmp bne
  red prn jsr` (one operand), `rts stop` (none).
- Operands: immediates `#-5`, registers `r0`–`r7`, and symbols.
  `jmp`, `bne` and `jsr` also accept `LABEL(op1,op2)`.
- Lines whose first non-blank character is `;` are comments; blank lines
  are ignored.
- Macros: a `mcr NAME` line starts a definition and an `endmcr` line ends
  it; a line holding only `NAME` is replaced by the body. If a name is
  defined twice, the first definition is kept.

## Using it from Python

```python
from asm14.assembler import assemble_file
from asm14.tables import AssemblyError

try:
    written = assemble_file("prog")   # list of paths: prog.am, prog.ob, ...
except AssemblyError as exc:
    print(exc)
```

The stages are available on their own:

- `asm14.macros.expand_macros(lines)` returns the lines with macros expanded.
- `asm14.first_pass.first_pass(lines)` returns a `FirstPassResult` with
  `symbols` (a `SymbolTable`), `instructions` and `data` (`BinaryTable`s).
- `asm14.second_pass.second_pass(lines, symbols, instructions)` resolves
  symbol references in place and returns a `SecondPassResult` with
  `entries` and `externals`, each a list of `(name, address)` pairs.
- `asm14.assembler.object_lines(instructions, data)` yields the object-file
  lines, and `to_dots_slashes(bits)` spells a bit string with dots and
  slashes.

Both passes raise `AssemblyError` whose message lists every problem found.

## Limitations

- A reference to a symbol that is never declared is not reported as an
  error; the word is given the address and kind of the previously resolved
  symbol (address 0, relocatable, when there is none).
- Source files are read and written as Latin-1 text.