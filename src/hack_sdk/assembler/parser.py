"""
Hack Assembly Line Classifier
=============================

This module turns raw source lines into commands the code generator can
process. Hack assembly is strictly line oriented: every line holds at
most one command, so there is no separate tokenizer.

Command Types
-------------
The classifier looks at the first significant character of a line:

1. **ADDRESS**: ``@value`` or ``@symbol``
   ```asm
   @17             // literal address
   @LOOP           // label or variable
   ```

2. **LABEL**: ``(NAME)`` declares the ROM address of the next instruction
   ```asm
   (LOOP)
   ```

3. **COMPUTE**: ``dest=comp;jump`` with dest and jump optional
   ```asm
   D=M
   D;JGT
   AM=M-1
   ```

4. **IGNORE**: blank or comment-only lines

Comments start with ``//`` and run to the end of the line.

Symbols
-------
A symbol is a sequence of letters, digits, ``_``, ``.``, ``$`` and ``:``
that does not start with a digit. An address operand made only of decimal
digits is a literal.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional
import re

from hack_sdk.errors import (
    ClassificationError,
    FieldSyntaxError,
    SourceLocation,
)


COMMENT_MARKER = "//"

SYMBOL_PATTERN = re.compile(r"[A-Za-z_.$:][A-Za-z0-9_.$:]*")
LITERAL_PATTERN = re.compile(r"[0-9]+")


# =============================================================================
# Source Lines
# =============================================================================

@dataclass(frozen=True)
class SourceLine:
    """
    One line of assembly source.

    Attributes:
        text: Raw line text without its newline
        number: Line number (1-indexed)
        filename: Source file name, for error messages
    """
    text: str
    number: int
    filename: str = "<input>"

    @property
    def location(self) -> SourceLocation:
        """Location of the first significant character on the line."""
        stripped = self.text.lstrip()
        column = len(self.text) - len(stripped) + 1 if stripped else 1
        return SourceLocation(self.filename, self.number, column)


def parse_source(source: str, filename: str = "<input>") -> list[SourceLine]:
    """
    Split source text into numbered lines.

    The list is built once and re-scanned by both assembler passes. Only
    LF, CRLF and CR end a line; str.splitlines() would also break on form
    feeds and Unicode separators, even inside a comment.
    """
    texts = source.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    if texts[-1] == "":
        texts.pop()
    return [
        SourceLine(text, number, filename)
        for number, text in enumerate(texts, start=1)
    ]


# =============================================================================
# Commands
# =============================================================================

class CommandType(Enum):
    """Kinds of command a source line can hold."""
    ADDRESS = auto()    # @value
    COMPUTE = auto()    # dest=comp;jump
    LABEL = auto()      # (NAME)
    IGNORE = auto()     # blank or comment-only

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class Command:
    """
    A classified source line.

    Attributes:
        type: The command kind
        text: Payload: operand for ADDRESS, full mnemonic text for COMPUTE,
              label name for LABEL, empty for IGNORE
    """
    type: CommandType
    text: str = ""

    @property
    def emits_instruction(self) -> bool:
        """True for commands that occupy a ROM address."""
        return self.type in (CommandType.ADDRESS, CommandType.COMPUTE)


IGNORE = Command(CommandType.IGNORE)


def strip_comment(raw_line: str) -> str:
    """Drop a trailing ``//`` comment and surrounding whitespace."""
    index = raw_line.find(COMMENT_MARKER)
    if index != -1:
        raw_line = raw_line[:index]
    return raw_line.strip()


def is_symbol(text: str) -> bool:
    """Return True if ``text`` is a legal symbol name."""
    return SYMBOL_PATTERN.fullmatch(text) is not None


def classify(raw_line: str, location: Optional[SourceLocation] = None) -> Command:
    """
    Classify one raw source line.

    Args:
        raw_line: Line text, possibly with comment and indentation
        location: Where the line came from, attached to any error

    Returns:
        The classified Command

    Raises:
        ClassificationError: If the line starts like an address or label
            command but its operand is missing or malformed
    """
    text = strip_comment(raw_line)
    if not text:
        return IGNORE

    first = text[0]

    if first == "@":
        operand = text[1:].strip()
        if not operand:
            raise ClassificationError(
                "missing operand after '@'",
                location=location,
                hint="write @value or @symbol",
                source_line=raw_line,
            )
        if not LITERAL_PATTERN.fullmatch(operand) and not is_symbol(operand):
            raise ClassificationError(
                f"invalid address operand '{operand}'",
                location=location,
                hint="use a decimal number or a symbol that does not start with a digit",
                source_line=raw_line,
            )
        return Command(CommandType.ADDRESS, operand)

    if first == "(":
        close = text.find(")")
        if close == -1:
            raise ClassificationError(
                "label is missing its closing ')'",
                location=location,
                source_line=raw_line,
            )
        if text[close + 1:].strip():
            raise ClassificationError(
                "unexpected text after label",
                location=location,
                source_line=raw_line,
            )
        name = text[1:close].strip()
        if not name:
            raise ClassificationError(
                "empty label",
                location=location,
                source_line=raw_line,
            )
        if not is_symbol(name):
            raise ClassificationError(
                f"invalid label name '{name}'",
                location=location,
                hint="labels may not start with a digit",
                source_line=raw_line,
            )
        return Command(CommandType.LABEL, name)

    return Command(CommandType.COMPUTE, text)


def split_compute(
    text: str,
    location: Optional[SourceLocation] = None,
    source_line: Optional[str] = None,
) -> tuple[Optional[str], str, Optional[str]]:
    """
    Split a compute command into its (dest, comp, jump) fields.

    ``dest`` is everything before the first ``=``; ``jump`` is everything
    after the first ``;`` of the remainder. Omitted fields come back as
    None. The comp field keeps its inner whitespace; the encoder drops it.

    Raises:
        FieldSyntaxError: If a delimiter is present but the field on its
            far side is empty, or if comp is empty
    """
    dest: Optional[str] = None
    remainder = text
    if "=" in text:
        dest, remainder = text.split("=", 1)
        dest = dest.strip()
        if not dest:
            raise FieldSyntaxError(
                "empty dest before '='",
                location=location,
                source_line=source_line,
            )

    jump: Optional[str] = None
    comp = remainder
    if ";" in remainder:
        comp, jump = remainder.split(";", 1)
        jump = jump.strip()
        if not jump:
            raise FieldSyntaxError(
                "empty jump after ';'",
                location=location,
                hint="drop the ';' for an instruction that never jumps",
                source_line=source_line,
            )

    comp = comp.strip()
    if not comp:
        raise FieldSyntaxError(
            "missing comp field",
            location=location,
            hint="every compute instruction needs a comp, e.g. 0;JMP",
            source_line=source_line,
        )

    return dest, comp, jump
