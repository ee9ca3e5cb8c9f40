import pytest

from asm14.tables import (
    AssemblyError,
    BinaryLine,
    BinaryTable,
    Symbol,
    SymbolKind,
    SymbolTable,
)


def test_add_and_find_local_symbol():
    table = SymbolTable()
    added = table.add("MAIN", 100, SymbolKind.LOCAL, False)
    found = table.find("MAIN")
    assert found is added
    assert found == Symbol("MAIN", 100, False, False, False)


def test_find_missing_returns_none():
    table = SymbolTable()
    table.add("X", 0, SymbolKind.LOCAL, True)
    assert table.find("Y") is None


def test_kind_sets_flags():
    table = SymbolTable()
    ext = table.add("EXT", 0, SymbolKind.EXTERN, False)
    ent = table.add("ENT", 0, SymbolKind.ENTRY, False)
    assert (ext.is_extern, ext.is_entry) == (True, False)
    assert (ent.is_extern, ent.is_entry) == (False, True)


def test_data_flag_is_kept():
    table = SymbolTable()
    table.add("LIST", 3, SymbolKind.LOCAL, 1)
    assert table.find("LIST").is_data is True


def test_duplicate_symbol_raises():
    table = SymbolTable()
    table.add("LOOP", 104, SymbolKind.LOCAL, False)
    with pytest.raises(AssemblyError):
        table.add("LOOP", 110, SymbolKind.LOCAL, False)
    assert len(table) == 1


def test_contains_len_and_order():
    table = SymbolTable()
    for name in ("B", "A", "C"):
        table.add(name, 0, SymbolKind.LOCAL, False)
    assert "A" in table
    assert "D" not in table
    assert len(table) == 3
    assert [s.name for s in table] == ["B", "A", "C"]


def test_symbol_address_is_mutable():
    table = SymbolTable()
    table.add("STR", 2, SymbolKind.LOCAL, True)
    for symbol in table:
        symbol.address += 100
    assert table.find("STR").address == 102


def test_binary_table_assigns_consecutive_addresses():
    table = BinaryTable(counter=100)
    first = table.add("00000000000000")
    second = table.add("11111111111111")
    assert first == BinaryLine(100, "00000000000000")
    assert second.address == first.address + 1
    assert table.counter == second.address + 1
    assert len(table) == 2
    assert list(table) == [first, second]


def test_binary_table_default_counter_starts_at_zero():
    table = BinaryTable()
    line = table.add("00000000000000")
    assert line.address == 0


def test_binary_table_keeps_fourteen_characters():
    table = BinaryTable()
    long_word = "?AVERYLONGSYMBOLNAME"
    line = table.add(long_word)
    assert len(line.bits) == 14
    assert long_word.startswith(line.bits)


def test_binary_table_keeps_short_words_whole():
    table = BinaryTable()
    line = table.add("?K")
    assert line.bits == "?K"