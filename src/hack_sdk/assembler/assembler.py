"""
Hack Assembler - Main Interface
===============================

This module provides the main Assembler class, which is the primary interface
for assembling Hack source code. It reads source, runs the two-pass code
generator and writes the resulting .hack file together with optional listing
and symbol files.

Example Usage
-------------
>>> from hack_sdk.assembler import Assembler
>>>
>>> asm = Assembler()
>>> asm.assemble_string('''
... (LOOP)
...     @LOOP
...     0;JMP
... ''')
['0000000000000000', '1110101010000111']
>>>
>>> asm.write_hack("Loop.hack")

Command-Line Usage
------------------
    $ hackasm Prog.asm -o Prog.hack -l Prog.lst -s Prog.sym

Output Files
------------
Every file is written atomically: the content goes to a temporary file in
the destination directory which then replaces the target. A failed run
leaves no partial output behind.
"""

from pathlib import Path
from typing import Optional
import logging
import os
import tempfile

from hack_sdk.assembler.codegen import AssemblyResult, CodeGenerator
from hack_sdk.assembler.opcodes import PREDEFINED_SYMBOLS
from hack_sdk.assembler.parser import parse_source
from hack_sdk.errors import AssemblerError, AssemblyIOError

logger = logging.getLogger(__name__)


def write_text_atomic(filepath: str | Path, content: str) -> None:
    """
    Write ``content`` to ``filepath`` so that readers see either the old
    file or the complete new one.

    Raises:
        AssemblyIOError: If the file cannot be written. The target is left
            untouched and the temporary file is removed.
    """
    filepath = Path(filepath)
    directory = filepath.parent
    tmp_path: Optional[str] = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=directory,
            prefix=f".{filepath.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_path = tmp.name
            tmp.write(content)
        os.replace(tmp_path, filepath)
    except OSError as e:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise AssemblyIOError(str(filepath), e.strerror or str(e)) from e


class Assembler:
    """
    Main Hack assembler class.

    The assembler keeps the result of its most recent run so that the
    various output files can be written after assembly. Each run starts
    from a fresh symbol table; variables never leak between runs.

    Attributes:
        verbose: If True, log progress at INFO level
        max_errors: Errors to collect before giving up (1 = fail fast)
    """

    def __init__(self, verbose: bool = False, max_errors: int = 100):
        """
        Initialize the assembler.

        Args:
            verbose: Log progress messages
            max_errors: Maximum errors to collect before stopping a run
        """
        self._verbose = verbose
        self._max_errors = max_errors
        self._codegen = CodeGenerator(max_errors=max_errors)
        self._result: Optional[AssemblyResult] = None
        self._source_file: Optional[Path] = None

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_string(self, source: str, filename: str = "<input>") -> list[str]:
        """
        Assemble source code from a string.

        Args:
            source: Assembly source code
            filename: Virtual filename for error messages

        Returns:
            The machine words, one 16-character string per instruction

        Raises:
            AssemblyFailedError: If any line fails to assemble
        """
        self._result = None
        lines = parse_source(source, filename)

        if self._verbose:
            logger.info(f"Assembling {filename} ({len(lines)} lines)")

        self._result = self._codegen.generate(lines)

        if self._verbose:
            logger.info(
                f"Generated {len(self._result.instructions)} instructions, "
                f"{len(self._result.labels)} labels, "
                f"{len(self._result.variables)} variables"
            )

        return self._result.words

    def assemble_file(self, filepath: str | Path) -> list[str]:
        """
        Assemble source code from a file.

        Raises:
            AssemblyIOError: If the file cannot be read
            AssemblyFailedError: If any line fails to assemble
        """
        filepath = Path(filepath)
        self._source_file = filepath

        try:
            source = filepath.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
            raise AssemblyIOError(str(filepath), reason) from e

        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Output Methods
    # =========================================================================

    def _require_result(self) -> AssemblyResult:
        if self._result is None:
            raise AssemblerError("nothing assembled yet")
        return self._result

    def get_result(self) -> AssemblyResult:
        """Return the full result of the last successful run."""
        return self._require_result()

    def get_code(self) -> list[str]:
        """Return the machine words of the last run."""
        return self._require_result().words

    def get_text(self) -> str:
        """Return the .hack file content of the last run."""
        return self._require_result().to_text()

    def get_symbols(self) -> dict[str, int]:
        """
        Get the symbol table.

        Returns:
            Dictionary mapping symbol names to addresses
        """
        return dict(self._require_result().symbols)

    def get_labels(self) -> dict[str, int]:
        """Labels bound in the last run, in definition order."""
        return dict(self._require_result().labels)

    def get_variables(self) -> dict[str, int]:
        """Variables allocated in the last run, in allocation order."""
        return dict(self._require_result().variables)

    def get_warnings(self) -> list[str]:
        """Warnings from the last successful run, such as a redefined label."""
        return list(self._require_result().warnings)

    def get_listing(self) -> str:
        """
        Get the assembly listing as a string.

        Returns:
            Listing with ROM addresses, machine words and source lines,
            followed by the user-defined symbols
        """
        result = self._require_result()
        lines = []
        lines.append("Hack Assembler Listing")
        lines.append("=" * 60)
        lines.append("")
        lines.append(" ROM  Word              Line  Source")
        lines.append("-" * 60)
        for instr in result.instructions:
            lines.append(
                f"{instr.address:5d} {instr.word}  {instr.source.number:4d}  "
                f"{instr.source.text.strip()}"
            )
        lines.append("")
        lines.append("Labels")
        lines.append("-" * 30)
        for name, address in result.labels.items():
            lines.append(f"{name:20s} = {address}")
        lines.append("")
        lines.append("Variables")
        lines.append("-" * 30)
        for name, address in result.variables.items():
            lines.append(f"{name:20s} = {address}")
        return "\n".join(lines) + "\n"

    def get_symbol_file_text(self) -> str:
        """
        Symbol file content: ``name address`` per line, user symbols only.

        Predefined symbols are left out unless a label redefined them.
        """
        result = self._require_result()
        lines = ["# Symbol table", "# Generated by hackasm"]
        for name, address in sorted(result.symbols.items()):
            if PREDEFINED_SYMBOLS.get(name) == address and name not in result.labels:
                continue
            lines.append(f"{name} {address}")
        return "\n".join(lines) + "\n"

    def write_hack(self, filepath: str | Path) -> None:
        """Write the machine words to a .hack file."""
        write_text_atomic(filepath, self.get_text())
        logger.info(f"Wrote {filepath}")

    def write_listing(self, filepath: str | Path) -> None:
        """Write the assembly listing file."""
        write_text_atomic(filepath, self.get_listing())
        logger.info(f"Wrote listing to {filepath}")

    def write_symbols(self, filepath: str | Path) -> None:
        """Write the symbol table file."""
        write_text_atomic(filepath, self.get_symbol_file_text())
        logger.info(f"Wrote symbols to {filepath}")

    # =========================================================================
    # Error Handling
    # =========================================================================

    def has_errors(self) -> bool:
        """
        Check if the last run produced errors.

        Returns:
            True if errors occurred
        """
        return self._codegen.has_errors()

    def get_error_report(self) -> str:
        """
        Get formatted error report.

        Returns:
            Error report string
        """
        return self._codegen.get_error_report()


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>") -> list[str]:
    """
    Convenience function to assemble source code.

    Returns:
        The machine words

    Raises:
        AssemblerError: If assembly fails
    """
    asm = Assembler()
    return asm.assemble_string(source, filename)


def assemble_file(filepath: str | Path) -> list[str]:
    """
    Convenience function to assemble a file.

    Raises:
        AssemblyIOError: If the file cannot be read
        AssemblerError: If assembly fails
    """
    asm = Assembler()
    return asm.assemble_file(filepath)
