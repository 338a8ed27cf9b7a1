"""
Hack SDK - Assembler Toolchain for the Hack Computer
====================================================

This package provides an assembler and disassembler for the Hack computer,
the 16-bit machine built in *The Elements of Computing Systems*
(nand2tetris).

Main Components
---------------
- **assembler**: Hack assembler (hackasm)
    Converts assembly source files (.asm) to machine code (.hack)

- **disassembler**: Hack disassembler (hackdisasm)
    Converts machine code (.hack) back to assembly text

Quick Start
-----------
Assemble a program:
    >>> from hack_sdk.assembler import Assembler
    >>> asm = Assembler()
    >>> words = asm.assemble_file("Max.asm")
    >>> asm.write_hack("Max.hack")

Or use the command-line tools:
    $ hackasm Max.asm
    $ hackdisasm Max.hack

Version History
---------------
1.0.0 - Initial release with assembler and disassembler
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from hack_sdk.assembler import Assembler, SymbolTable
from hack_sdk.disassembler import HackDisassembler
from hack_sdk.errors import (
    HackError,
    ArgumentError,
    AssemblyIOError,
    AssemblerError,
    ClassificationError,
    FieldSyntaxError,
    UnknownMnemonicError,
    AddressRangeError,
    UndefinedSymbolError,
    AssemblyFailedError,
    DisassemblyError,
)

__all__ = [
    "__version__",
    # Assembler
    "Assembler",
    "SymbolTable",
    # Disassembler
    "HackDisassembler",
    # Errors
    "HackError",
    "ArgumentError",
    "AssemblyIOError",
    "AssemblerError",
    "ClassificationError",
    "FieldSyntaxError",
    "UnknownMnemonicError",
    "AddressRangeError",
    "UndefinedSymbolError",
    "AssemblyFailedError",
    "DisassemblyError",
]
