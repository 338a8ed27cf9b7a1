# =============================================================================
# test_opcodes.py - Instruction Field Encoder Tests
# =============================================================================
# Tests for the Hack encoding tables and field encoders.
#
# Test coverage includes:
#   - dest and jump tables (every entry)
#   - comp table: size, a-bit convention, commutative spellings
#   - Address literal parsing and 15-bit range checks
#   - Inverse tables recover canonical mnemonics
# =============================================================================

import pytest

from hack_sdk.assembler import opcodes
from hack_sdk.assembler.opcodes import (
    COMP_DECODE,
    COMP_TABLE,
    DEST_DECODE,
    DEST_TABLE,
    JUMP_DECODE,
    JUMP_TABLE,
    address_literal,
    comp,
    dest,
    encode_address,
    encode_compute,
    jump,
    normalize_comp,
)
from hack_sdk.errors import AddressRangeError, UnknownMnemonicError


# =============================================================================
# Dest Field
# =============================================================================

class TestDest:
    """Test the dest field encoder."""

    @pytest.mark.parametrize("mnemonic,code", [
        (None, "000"),
        ("M", "001"),
        ("D", "010"),
        ("MD", "011"),
        ("A", "100"),
        ("AM", "101"),
        ("AD", "110"),
        ("AMD", "111"),
    ])
    def test_every_entry(self, mnemonic, code):
        assert dest(mnemonic) == code

    def test_each_letter_sets_its_bit(self):
        """A is bit 2, D is bit 1, M is bit 0."""
        for mnemonic, code in DEST_TABLE.items():
            letters = mnemonic or ""
            assert code[0] == ("1" if "A" in letters else "0")
            assert code[1] == ("1" if "D" in letters else "0")
            assert code[2] == ("1" if "M" in letters else "0")

    def test_surrounding_whitespace_ignored(self):
        assert dest(" AM ") == "101"

    def test_unknown_dest(self):
        with pytest.raises(UnknownMnemonicError) as exc_info:
            dest("X")
        assert exc_info.value.field == "dest"
        assert exc_info.value.mnemonic == "X"

    def test_lowercase_rejected(self):
        with pytest.raises(UnknownMnemonicError):
            dest("d")


# =============================================================================
# Jump Field
# =============================================================================

class TestJump:
    """Test the jump field encoder."""

    @pytest.mark.parametrize("mnemonic,code", [
        (None, "000"),
        ("JGT", "001"),
        ("JEQ", "010"),
        ("JGE", "011"),
        ("JLT", "100"),
        ("JNE", "101"),
        ("JLE", "110"),
        ("JMP", "111"),
    ])
    def test_every_entry(self, mnemonic, code):
        assert jump(mnemonic) == code

    def test_unknown_jump(self):
        with pytest.raises(UnknownMnemonicError) as exc_info:
            jump("JNZ")
        assert exc_info.value.field == "jump"
        assert "JMP" in exc_info.value.hint


# =============================================================================
# Comp Field
# =============================================================================

class TestComp:
    """Test the comp field encoder."""

    def test_table_has_28_mnemonics(self):
        assert len(COMP_TABLE) == 28

    def test_codes_are_unique_and_seven_bits(self):
        codes = list(COMP_TABLE.values())
        assert len(set(codes)) == len(codes)
        assert all(len(code) == 7 and set(code) <= {"0", "1"} for code in codes)

    def test_a_bit_set_exactly_for_memory_operand(self):
        for mnemonic, code in COMP_TABLE.items():
            assert code[0] == ("1" if "M" in mnemonic else "0"), mnemonic

    @pytest.mark.parametrize("mnemonic,code", [
        ("0", "0101010"),
        ("1", "0111111"),
        ("-1", "0111010"),
        ("D", "0001100"),
        ("!A", "0110001"),
        ("D+1", "0011111"),
        ("D-A", "0010011"),
        ("A-D", "0000111"),
        ("D&A", "0000000"),
        ("D|A", "0010101"),
        ("M", "1110000"),
        ("-M", "1110011"),
        ("D-M", "1010011"),
        ("M-D", "1000111"),
        ("D|M", "1010101"),
    ])
    def test_known_codes(self, mnemonic, code):
        assert comp(mnemonic) == code

    def test_m_minus_d_is_seven_bits(self):
        assert comp("M-D") == "1000111"

    @pytest.mark.parametrize("canonical,swapped", [
        ("D+A", "A+D"),
        ("D&A", "A&D"),
        ("D|A", "A|D"),
        ("D+M", "M+D"),
        ("D&M", "M&D"),
        ("D|M", "M|D"),
        ("D+1", "1+D"),
        ("A+1", "1+A"),
        ("M+1", "1+M"),
    ])
    def test_commutative_operand_order(self, canonical, swapped):
        assert comp(swapped) == comp(canonical)
        assert normalize_comp(swapped) == canonical

    def test_subtraction_is_not_commutative(self):
        assert comp("D-A") != comp("A-D")
        assert comp("D-M") != comp("M-D")

    def test_whitespace_removed(self):
        assert comp(" D + A ") == comp("D+A")
        assert comp("M -\t1") == comp("M-1")

    @pytest.mark.parametrize("mnemonic", ["D+2", "A+M", "D*A", "1-D", "", "m"])
    def test_unknown_comp(self, mnemonic):
        with pytest.raises(UnknownMnemonicError) as exc_info:
            comp(mnemonic)
        assert exc_info.value.field == "comp"


# =============================================================================
# Address Encoding
# =============================================================================

class TestAddress:
    """Test address literal parsing and encoding."""

    def test_decimal_literal(self):
        assert address_literal("5") == 5
        assert address_literal("0") == 0
        assert address_literal("32767") == 32767

    def test_leading_zeros(self):
        assert address_literal("007") == 7

    @pytest.mark.parametrize("text", ["foo", "R1", "-1", "+5", "5a", "0x10", ""])
    def test_non_numeric_is_symbol(self, text):
        assert address_literal(text) is None

    def test_literal_out_of_range(self):
        with pytest.raises(AddressRangeError) as exc_info:
            address_literal("32768")
        assert exc_info.value.value == 32768

    def test_encode_address(self):
        assert encode_address(5) == "0000000000000101"
        assert encode_address(0) == "0000000000000000"
        assert encode_address(32767) == "0111111111111111"

    def test_encode_address_out_of_range(self):
        with pytest.raises(AddressRangeError):
            encode_address(32768)
        with pytest.raises(AddressRangeError):
            encode_address(-1)

    def test_range_error_names_symbol(self):
        with pytest.raises(AddressRangeError, match="'big'"):
            encode_address(40000, symbol="big")


# =============================================================================
# Compute Encoding
# =============================================================================

class TestEncodeCompute:
    """Test assembly of complete compute words."""

    def test_all_fields(self):
        assert encode_compute("D", "D+1", "JGT") == "1110011111010001"

    def test_unconditional_jump(self):
        assert encode_compute(None, "0", "JMP") == "1110101010000111"

    def test_store_only(self):
        assert encode_compute("M", "D", None) == "1110001100001000"

    def test_word_layout(self):
        word = encode_compute("AMD", "M-1", "JLE")
        assert len(word) == 16
        assert word[:3] == opcodes.C_INSTRUCTION_PREFIX
        assert word[3:10] == COMP_TABLE["M-1"]
        assert word[10:13] == DEST_TABLE["AMD"]
        assert word[13:] == JUMP_TABLE["JLE"]


# =============================================================================
# Inverse Tables
# =============================================================================

class TestDecodeTables:
    """Encoding then decoding returns the canonical mnemonic."""

    def test_dest_round_trip(self):
        for mnemonic in DEST_TABLE:
            assert DEST_DECODE[dest(mnemonic)] == mnemonic

    def test_jump_round_trip(self):
        for mnemonic in JUMP_TABLE:
            assert JUMP_DECODE[jump(mnemonic)] == mnemonic

    def test_comp_round_trip(self):
        for mnemonic in COMP_TABLE:
            assert COMP_DECODE[comp(mnemonic)] == mnemonic

    def test_swapped_spelling_decodes_to_canonical(self):
        assert COMP_DECODE[comp("M|D")] == "D|M"
