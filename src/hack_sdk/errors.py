"""
Hack SDK Error Hierarchy
========================

This module defines the exception hierarchy for the entire Hack SDK.
All exceptions inherit from HackError, allowing callers to catch all
SDK-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
HackError (base)
├── ArgumentError - missing or invalid command-line input
├── AssemblyIOError - source/output file cannot be read or written
├── DisassemblyError - malformed binary word given to the disassembler
└── AssemblerError (assembler-related, carries source location)
    ├── ClassificationError - line cannot be classified
    ├── FieldSyntaxError - malformed dest=comp;jump split
    ├── UnknownMnemonicError - dest/comp/jump outside the fixed tables
    ├── AddressRangeError - address does not fit in 15 bits
    ├── UndefinedSymbolError - lookup of a symbol that is not bound
    ├── AssemblyFailedError - one or more errors stopped the run
    └── TooManyErrors - error limit reached

Design Philosophy
-----------------
Each assembler exception captures source location information (filename,
line, column) when applicable, so the caller can report the error kind
together with the 1-based line number and decide whether to abort.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class HackError(Exception):
    """
    Base exception for all Hack SDK errors.

    All exceptions in the SDK inherit from this class, allowing callers
    to catch all SDK-related errors with a single except clause:

        try:
            assembler.assemble_file("Prog.asm")
        except HackError as e:
            print(f"Error: {e}")
    """
    pass


class ArgumentError(HackError):
    """Missing or invalid command-line input."""
    pass


class AssemblyIOError(HackError):
    """
    File open, read or write failure.

    Attributes:
        path: The file that could not be accessed
        reason: Short description of the underlying OS error
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot access '{path}': {reason}")


class DisassemblyError(HackError):
    """
    Malformed machine word given to the disassembler.

    Attributes:
        word: The offending word text
        address: ROM address of the word (line index in the .hack file)
    """

    def __init__(self, message: str, word: str = "", address: Optional[int] = None):
        self.word = word
        self.address = address
        if address is not None:
            message = f"word {address}: {message}"
        super().__init__(message)


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int = 1

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(HackError):
    """
    Base exception for all assembler-related errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    kind = "AssemblerError"

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    @property
    def line(self) -> Optional[int]:
        """1-based source line number, if known."""
        return self.location.line if self.location else None

    def with_location(
        self, location: SourceLocation, source_line: Optional[str] = None
    ) -> "AssemblerError":
        """
        Attach a source location to an error raised by a location-free helper.

        The field encoder works on bare mnemonic text and knows nothing about
        lines; the driver catches its errors and pins them to the line being
        translated.
        """
        self.location = location
        if source_line is not None:
            self.source_line = source_line
        self.args = (self._format_message(),)
        return self

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            Max.asm:7:1: error: unknown comp mnemonic 'D+2'
                D=D+2
                ^
            hint: comp must be one of the 28 ALU mnemonics
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class ClassificationError(AssemblerError):
    """
    Line cannot be classified as an address, compute or label command.

    Examples:
        - "@" with nothing after it
        - "(LOOP" without a closing parenthesis
        - "()" with an empty label body
        - "@2abc" (symbols may not start with a digit)
    """

    kind = "ClassificationError"


class FieldSyntaxError(AssemblerError):
    """
    Malformed dest=comp;jump split in a compute command.

    Examples:
        - "=D+1" (empty dest before '=')
        - "D=" or ";JMP" (empty comp)
        - "D;" (empty jump after ';')
    """

    kind = "FieldSyntaxError"


class UnknownMnemonicError(AssemblerError):
    """
    Dest, comp or jump text outside the fixed encoding tables.

    Attributes:
        field: Which field failed ("dest", "comp" or "jump")
        mnemonic: The offending text
    """

    kind = "UnknownMnemonicError"

    def __init__(
        self,
        field: str,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        valid: Optional[list[str]] = None,
    ):
        self.field = field
        self.mnemonic = mnemonic
        self.valid = valid or []

        hint = None
        if self.valid:
            hint = f"{field} must be one of: {', '.join(self.valid)}"

        super().__init__(
            f"unknown {field} mnemonic '{mnemonic}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class AddressRangeError(AssemblerError):
    """
    Numeric literal or resolved symbol address outside 0..32767.

    Address instructions carry a 15-bit unsigned value; anything larger
    cannot be encoded.
    """

    kind = "AddressRangeError"

    def __init__(
        self,
        value: int,
        symbol: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.value = value
        self.symbol = symbol

        if symbol is not None:
            message = f"address {value} of symbol '{symbol}' does not fit in 15 bits"
        else:
            message = f"address {value} does not fit in 15 bits"

        super().__init__(
            message,
            location=location,
            hint="address values must be in the range 0..32767",
            source_line=source_line,
        )


class UndefinedSymbolError(AssemblerError):
    """
    Lookup of a symbol that has no binding in the symbol table.

    The driver always checks presence before looking a symbol up, so this
    only surfaces when the table is used directly.
    """

    kind = "UndefinedSymbolError"

    def __init__(self, symbol: str, location: Optional[SourceLocation] = None):
        self.symbol = symbol
        super().__init__(f"symbol '{symbol}' not found", location=location)


class AssemblyFailedError(AssemblerError):
    """
    Raised by the driver when one or more line errors were collected.

    Attributes:
        errors: The typed errors, in the order they were found
    """

    kind = "AssemblyFailedError"

    def __init__(self, errors: list[AssemblerError], report: str = ""):
        self.errors = list(errors)
        count = len(self.errors)
        word = "error" if count == 1 else "errors"
        message = f"assembly failed with {count} {word}"
        if report:
            message = f"{message}:\n\n{report}"
        super().__init__(message)

    @property
    def first(self) -> Optional[AssemblerError]:
        """The first error found, if any."""
        return self.errors[0] if self.errors else None


# =============================================================================
# Error Collection for Multiple Error Reporting
# =============================================================================

class ErrorCollector:
    """
    Collects multiple errors for batch reporting.

    The driver uses this to continue translating after a bad line,
    collecting every error before reporting them together.

    Example:
        collector = ErrorCollector(max_errors=100)

        try:
            collector.add(ClassificationError(...))
        except TooManyErrors:
            pass  # stop translating, report what we have

        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self, max_errors: int = 100):
        """
        Initialize the error collector.

        Args:
            max_errors: Maximum errors to collect before raising TooManyErrors
        """
        self.errors: list[AssemblerError] = []
        self.warnings: list[str] = []
        self.max_errors = max_errors

    def add(self, error: AssemblerError) -> None:
        """
        Add an error to the collection.

        Raises:
            TooManyErrors: If max_errors has been reached
        """
        self.errors.append(error)
        if len(self.errors) >= self.max_errors:
            raise TooManyErrors(f"too many errors ({self.max_errors}), stopping")

    def add_warning(self, message: str) -> None:
        """Add a warning message."""
        self.warnings.append(message)

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def warning_count(self) -> int:
        """Return the number of collected warnings."""
        return len(self.warnings)

    def report(self) -> str:
        """
        Format all errors and warnings for display.

        Returns:
            Formatted string with all errors and warnings
        """
        lines = []

        for error in self.errors:
            lines.append(str(error))
            lines.append("")

        if self.warnings:
            lines.append("Warnings:")
            for warning in self.warnings:
                lines.append(f"  {warning}")

        error_word = "error" if len(self.errors) == 1 else "errors"
        warning_word = "warning" if len(self.warnings) == 1 else "warnings"
        lines.append(
            f"\n{len(self.errors)} {error_word}, {len(self.warnings)} {warning_word}"
        )

        return "\n".join(lines)


class TooManyErrors(AssemblerError):
    """
    Raised when too many errors have been encountered.

    This stops the driver from piling up reports when the input is not
    Hack assembly at all.
    """

    kind = "TooManyErrors"

    def __init__(self, message: str = "too many errors"):
        super().__init__(message)
