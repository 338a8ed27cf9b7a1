# =============================================================================
# test_symbols.py - Symbol Table Tests
# =============================================================================

import pytest

from hack_sdk.assembler.symbols import SymbolTable
from hack_sdk.errors import UndefinedSymbolError


EXPECTED_PREDEFINED = {
    "SP": 0, "LCL": 1, "ARG": 2, "THIS": 3, "THAT": 4,
    "R0": 0, "R1": 1, "R2": 2, "R3": 3, "R4": 4, "R5": 5, "R6": 6, "R7": 7,
    "R8": 8, "R9": 9, "R10": 10, "R11": 11, "R12": 12, "R13": 13, "R14": 14,
    "R15": 15, "SCREEN": 16384, "KBD": 24576,
}


class TestPredefinedSymbols:
    """A fresh table holds exactly the machine's built-in symbols."""

    @pytest.mark.parametrize("name,address", sorted(EXPECTED_PREDEFINED.items()))
    def test_predefined_address(self, name, address):
        table = SymbolTable()
        assert table.contains(name)
        assert table.get_address(name) == address

    def test_no_other_symbols(self):
        table = SymbolTable()
        assert len(table) == 23
        assert table.to_dict() == EXPECTED_PREDEFINED

    def test_is_predefined(self):
        table = SymbolTable()
        table.add_entry("LOOP", 3)
        assert table.is_predefined("KBD")
        assert not table.is_predefined("LOOP")

    def test_tables_are_independent(self):
        first = SymbolTable()
        first.add_entry("x", 16)
        assert not SymbolTable().contains("x")


class TestAddEntry:
    """Test inserting and overwriting bindings."""

    def test_add_and_lookup(self):
        table = SymbolTable()
        table.add_entry("LOOP", 4)
        assert "LOOP" in table
        assert table.get_address("LOOP") == 4

    def test_same_binding_twice_is_idempotent(self):
        table = SymbolTable()
        table.add_entry("i", 16)
        table.add_entry("i", 16)
        assert table.get_address("i") == 16
        assert len(table) == 24

    def test_rebinding_overwrites(self):
        table = SymbolTable()
        table.add_entry("END", 10)
        table.add_entry("END", 12)
        assert table.get_address("END") == 12

    def test_names_are_case_sensitive(self):
        table = SymbolTable()
        table.add_entry("loop", 1)
        assert not table.contains("LOOP")
        assert not table.contains("sp")

    def test_negative_address_rejected(self):
        table = SymbolTable()
        with pytest.raises(ValueError):
            table.add_entry("bad", -1)


class TestLookup:
    """Test lookups of unknown names."""

    def test_missing_symbol(self):
        table = SymbolTable()
        with pytest.raises(UndefinedSymbolError) as exc_info:
            table.get_address("nowhere")
        assert exc_info.value.symbol == "nowhere"
        assert "not found" in str(exc_info.value)
