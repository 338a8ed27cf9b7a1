# =============================================================================
# test_parser.py - Line Classifier Unit Tests
# =============================================================================
# Tests for classifying Hack source lines and splitting compute fields.
#
# Test coverage includes:
#   - Comment and whitespace stripping
#   - Address, label, compute and ignorable lines
#   - Malformed address operands and labels
#   - dest=comp;jump field splitting and its error conditions
#   - Line numbering and error locations
# =============================================================================

import pytest

from hack_sdk.assembler.codegen import CodeGenerator
from hack_sdk.assembler.parser import (
    Command,
    CommandType,
    SourceLine,
    classify,
    parse_source,
    split_compute,
    strip_comment,
)
from hack_sdk.errors import ClassificationError, FieldSyntaxError, SourceLocation


# =============================================================================
# Comment Stripping
# =============================================================================

class TestStripComment:
    """Test comment and whitespace removal."""

    def test_trailing_comment(self):
        assert strip_comment("D=M // load") == "D=M"

    def test_comment_only(self):
        assert strip_comment("// just a comment") == ""

    def test_indentation(self):
        assert strip_comment("\t  @i  ") == "@i"

    def test_single_slash_kept(self):
        assert strip_comment("D=M /x") == "D=M /x"


# =============================================================================
# Classification
# =============================================================================

class TestClassify:
    """Test command kind detection."""

    @pytest.mark.parametrize("line", ["", "   ", "// comment", "   // indented comment"])
    def test_ignorable_lines(self, line):
        assert classify(line).type is CommandType.IGNORE

    def test_address_literal(self):
        assert classify("@17") == Command(CommandType.ADDRESS, "17")

    def test_address_symbol(self):
        assert classify("  @LOOP // back") == Command(CommandType.ADDRESS, "LOOP")

    def test_address_symbol_characters(self):
        assert classify("@Main.loop$1:x_2").text == "Main.loop$1:x_2"

    def test_label(self):
        assert classify("(LOOP)") == Command(CommandType.LABEL, "LOOP")

    def test_label_with_comment(self):
        assert classify("(END) // stop here") == Command(CommandType.LABEL, "END")

    def test_compute(self):
        assert classify("D=D+1;JGT") == Command(CommandType.COMPUTE, "D=D+1;JGT")

    def test_compute_keeps_inner_whitespace(self):
        assert classify("  AM = M - 1  // pop").text == "AM = M - 1"

    def test_emits_instruction(self):
        assert classify("@1").emits_instruction
        assert classify("0;JMP").emits_instruction
        assert not classify("(X)").emits_instruction
        assert not classify("").emits_instruction


class TestClassifyErrors:
    """Lines that cannot be classified raise ClassificationError."""

    @pytest.mark.parametrize("line", [
        "@",
        "@   // nothing",
        "@2abc",
        "@-1",
        "@a b",
        "(",
        "(LOOP",
        "()",
        "(LOOP) D=M",
        "(1LOOP)",
    ])
    def test_malformed(self, line):
        with pytest.raises(ClassificationError):
            classify(line)

    def test_error_carries_line_number(self):
        location = SourceLocation("Prog.asm", 7, 3)
        with pytest.raises(ClassificationError) as exc_info:
            classify("  @", location)
        assert exc_info.value.line == 7
        assert "Prog.asm:7:3" in str(exc_info.value)


# =============================================================================
# Compute Field Splitting
# =============================================================================

class TestSplitCompute:
    """Test dest=comp;jump splitting."""

    @pytest.mark.parametrize("text,expected", [
        ("D=D+1;JGT", ("D", "D+1", "JGT")),
        ("0;JMP", (None, "0", "JMP")),
        ("M=D", ("M", "D", None)),
        ("D", (None, "D", None)),
        ("AM = M - 1", ("AM", "M - 1", None)),
        ("D ; JEQ", (None, "D", "JEQ")),
    ])
    def test_fields(self, text, expected):
        assert split_compute(text) == expected

    def test_only_first_equals_splits(self):
        dest, comp, jump = split_compute("D=A=M")
        assert dest == "D"
        assert comp == "A=M"
        assert jump is None

    @pytest.mark.parametrize("text", ["=D", "D=", ";JMP", "D;", "D=;JGT", " = M"])
    def test_malformed(self, text):
        with pytest.raises(FieldSyntaxError):
            split_compute(text)

    def test_error_location(self):
        location = SourceLocation("Prog.asm", 4, 1)
        with pytest.raises(FieldSyntaxError) as exc_info:
            split_compute("D;", location, "D;")
        assert exc_info.value.line == 4


# =============================================================================
# Source Lines
# =============================================================================

class TestParseSource:
    """Test splitting source into numbered lines."""

    def test_numbering_includes_blank_lines(self):
        lines = parse_source("@1\n\nD=A\n", "x.asm")
        assert [line.number for line in lines] == [1, 2, 3]
        assert lines[2] == SourceLine("D=A", 3, "x.asm")

    def test_crlf_line_endings(self):
        lines = parse_source("@1\r\nD=A\r\n")
        assert [line.text for line in lines] == ["@1", "D=A"]

    def test_empty_source(self):
        assert parse_source("") == []

    def test_missing_final_newline(self):
        lines = parse_source("@1\nD=A")
        assert [line.text for line in lines] == ["@1", "D=A"]

    @pytest.mark.parametrize("separator", ["\u2028", "\x85", "\x0b", "\x0c", "\x1e"])
    def test_only_real_line_endings_split(self, separator):
        lines = parse_source(f"@1 // note{separator}D=A\n@2\n")
        assert len(lines) == 2
        assert lines[1] == SourceLine("@2", 2, "<input>")

    def test_separator_inside_comment_emits_nothing(self):
        result = CodeGenerator().generate(parse_source("@1 // note\u2028D=A\n@2\n"))
        assert result.words == ["0000000000000001", "0000000000000010"]

    def test_location_column(self):
        line = SourceLine("   @x", 5, "p.asm")
        assert line.location == SourceLocation("p.asm", 5, 4)
