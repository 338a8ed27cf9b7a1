"""
Hack Code Generator
===================

Translates classified source lines into 16-bit machine words in two passes:

1. **Pass 1** walks every line, counting the ROM address of each
   instruction and binding every ``(LABEL)`` to the address of the
   instruction that follows it.
2. **Pass 2** walks the same lines again, resolving ``@symbol`` operands
   (allocating RAM for new variables from address 16 upward) and encoding
   each instruction.

Two passes are needed because a label may be used before it is defined.
Pass 2 never starts before pass 1 has finished, and it does not start at
all if pass 1 found a malformed line.

All mutable state of a run (symbol table, variable cursor, collected
errors) lives in an AssemblyContext created by generate(); nothing is
carried over to the next run.
"""

from dataclasses import dataclass, field
from typing import Optional
import logging

from hack_sdk.assembler import opcodes
from hack_sdk.assembler.parser import (
    Command,
    CommandType,
    SourceLine,
    classify,
    split_compute,
)
from hack_sdk.assembler.symbols import SymbolTable
from hack_sdk.errors import (
    AssemblerError,
    AssemblyFailedError,
    ErrorCollector,
    TooManyErrors,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Results
# =============================================================================

@dataclass(frozen=True)
class EncodedInstruction:
    """
    One emitted machine word.

    Attributes:
        word: 16 characters of 0/1
        address: ROM address of the instruction
        source: The line it was translated from
    """
    word: str
    address: int
    source: SourceLine


@dataclass
class AssemblyResult:
    """
    Output of a successful run.

    Attributes:
        instructions: Emitted words in ROM order
        symbols: Final symbol bindings (predefined, labels and variables)
        labels: Label name to ROM address, in definition order
        variables: Variable name to RAM address, in allocation order
        warnings: Non-fatal diagnostics, such as a redefined label
    """
    instructions: list[EncodedInstruction] = field(default_factory=list)
    symbols: dict[str, int] = field(default_factory=dict)
    labels: dict[str, int] = field(default_factory=dict)
    variables: dict[str, int] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)

    @property
    def words(self) -> list[str]:
        """The machine words alone, in ROM order."""
        return [instr.word for instr in self.instructions]

    def to_text(self) -> str:
        """The .hack file content: one word per line, newline-terminated."""
        return "".join(f"{word}\n" for word in self.words)


# =============================================================================
# Per-run State
# =============================================================================

class AssemblyContext:
    """
    Mutable state owned by one run of the code generator.

    Attributes:
        symbols: The run's symbol table
        next_variable: Next RAM address to hand to a new variable
        errors: Errors collected so far
        labels: Labels bound in pass 1
        variables: Variables allocated in pass 2
    """

    def __init__(self, max_errors: int = 100) -> None:
        self.symbols = SymbolTable()
        self.next_variable = opcodes.VARIABLE_BASE_ADDRESS
        self.errors = ErrorCollector(max_errors=max_errors)
        self.labels: dict[str, int] = {}
        self.variables: dict[str, int] = {}

    def allocate_variable(self, name: str) -> int:
        """Bind ``name`` to the next free RAM address and advance the cursor."""
        address = self.next_variable
        self.symbols.add_entry(name, address)
        self.variables[name] = address
        self.next_variable += 1
        logger.debug(f"Allocated variable '{name}' at RAM[{address}]")
        return address

    def resolve(self, operand: str) -> tuple[int, Optional[str]]:
        """
        Resolve an address operand.

        Returns:
            (address, symbol) where symbol is None for decimal literals.
            Literals never enter the symbol table.
        """
        value = opcodes.address_literal(operand)
        if value is not None:
            return value, None
        if self.symbols.contains(operand):
            return self.symbols.get_address(operand), operand
        return self.allocate_variable(operand), operand


# =============================================================================
# Code Generator
# =============================================================================

class CodeGenerator:
    """
    Two-pass translator from Hack assembly lines to machine words.

    Usage:
        codegen = CodeGenerator()
        result = codegen.generate(parse_source(text))
        print(result.to_text())
    """

    def __init__(self, max_errors: int = 100):
        """
        Args:
            max_errors: Stop after this many errors. 1 means fail on the
                        first bad line.
        """
        if max_errors < 1:
            raise ValueError("max_errors must be at least 1")
        self._max_errors = max_errors
        self._context: Optional[AssemblyContext] = None

    @property
    def context(self) -> Optional[AssemblyContext]:
        """State of the most recent run (kept for error reports)."""
        return self._context

    def generate(self, lines: list[SourceLine]) -> AssemblyResult:
        """
        Translate a complete program.

        Args:
            lines: Every source line, in order

        Returns:
            The emitted instructions and final symbol bindings

        Raises:
            AssemblyFailedError: If any line could not be translated. The
                exception's ``errors`` list holds the typed errors with
                their line numbers.
        """
        ctx = AssemblyContext(max_errors=self._max_errors)
        self._context = ctx

        logger.debug(f"Pass 1 over {len(lines)} lines")
        try:
            self._pass1(lines, ctx)
        except TooManyErrors as e:
            ctx.errors.add_warning(e.message)
        self._raise_if_failed(ctx)

        logger.debug(f"Pass 1 bound {len(ctx.labels)} labels")

        result = AssemblyResult()
        try:
            self._pass2(lines, ctx, result)
        except TooManyErrors as e:
            ctx.errors.add_warning(e.message)
        self._raise_if_failed(ctx)

        result.symbols = ctx.symbols.to_dict()
        result.labels = dict(ctx.labels)
        result.variables = dict(ctx.variables)
        result.warnings = list(ctx.errors.warnings)

        logger.debug(
            f"Pass 2 emitted {len(result.instructions)} instructions, "
            f"allocated {len(ctx.variables)} variables"
        )
        return result

    def has_errors(self) -> bool:
        """Check if the most recent run collected errors."""
        return self._context is not None and self._context.errors.has_errors()

    def get_error_report(self) -> str:
        """Formatted report of the most recent run's errors."""
        if self._context is None:
            return ""
        return self._context.errors.report()

    # =========================================================================
    # Pass 1: Label Binding
    # =========================================================================

    def _pass1(self, lines: list[SourceLine], ctx: AssemblyContext) -> None:
        rom_address = 0
        for line in lines:
            try:
                command = classify(line.text, line.location)
            except AssemblerError as e:
                ctx.errors.add(e)
                continue

            if command.emits_instruction:
                rom_address += 1
            elif command.type is CommandType.LABEL:
                name = command.text
                if name in ctx.labels:
                    ctx.errors.add_warning(
                        f"{line.location}: label '{name}' redefined "
                        f"(was {ctx.labels[name]}, now {rom_address})"
                    )
                elif ctx.symbols.is_predefined(name):
                    ctx.errors.add_warning(
                        f"{line.location}: label '{name}' shadows a predefined symbol"
                    )
                ctx.symbols.add_entry(name, rom_address)
                ctx.labels[name] = rom_address
                logger.debug(f"Label '{name}' = ROM[{rom_address}]")

    # =========================================================================
    # Pass 2: Encoding
    # =========================================================================

    def _pass2(self, lines: list[SourceLine], ctx: AssemblyContext,
               result: AssemblyResult) -> None:
        for line in lines:
            try:
                command = classify(line.text, line.location)
                word = self._encode(command, line, ctx)
            except AssemblerError as e:
                if e.location is None:
                    e.with_location(line.location, line.text)
                ctx.errors.add(e)
                continue

            if word is not None:
                result.instructions.append(
                    EncodedInstruction(word, len(result.instructions), line)
                )

    def _encode(self, command: Command, line: SourceLine,
                ctx: AssemblyContext) -> Optional[str]:
        """Encode one command; returns None for commands that emit nothing."""
        if command.type is CommandType.ADDRESS:
            address, symbol = ctx.resolve(command.text)
            return opcodes.encode_address(address, symbol=symbol)

        if command.type is CommandType.COMPUTE:
            dest, comp, jump = split_compute(command.text, line.location, line.text)
            return opcodes.encode_compute(dest, comp, jump)

        return None

    # =========================================================================
    # Error Handling
    # =========================================================================

    def _raise_if_failed(self, ctx: AssemblyContext) -> None:
        if ctx.errors.has_errors():
            raise AssemblyFailedError(ctx.errors.errors, ctx.errors.report())
