"""
Hack Assembler
==============

This module provides a complete assembler for the Hack computer, the
16-bit machine from *The Elements of Computing Systems*.

The assembler converts Hack assembly source (.asm) into the textual
machine-code format (.hack): one 16-character binary word per line.

Main Components
---------------
- **Assembler**: Main assembler class that reads source and writes output
- **classify / split_compute**: Line classifier and compute-field splitter
- **SymbolTable**: Predefined symbols, labels and variables
- **opcodes**: Dest, comp and jump encoding tables and field encoders
- **CodeGenerator**: Two-pass driver producing the machine words

Assembly Process
----------------
1. **Parsing**: split source into numbered lines once
2. **Pass 1**: classify every line, bind labels to ROM addresses
3. **Pass 2**: resolve symbols (allocating variables from RAM[16]) and
   encode each instruction

Example Usage
-------------
>>> from hack_sdk.assembler import Assembler
>>> asm = Assembler()
>>> asm.assemble_string("@2\\nD=A\\n@3\\nD=D+A\\n@0\\nM=D\\n")
['0000000000000010', '1110110000010000', '0000000000000011', '1110000010010000', '0000000000000000', '1110001100001000']
"""

from hack_sdk.assembler.assembler import Assembler, assemble, assemble_file
from hack_sdk.assembler.parser import (
    Command,
    CommandType,
    SourceLine,
    classify,
    parse_source,
    split_compute,
)
from hack_sdk.assembler.symbols import SymbolTable
from hack_sdk.assembler.codegen import (
    AssemblyContext,
    AssemblyResult,
    CodeGenerator,
    EncodedInstruction,
)
from hack_sdk.assembler.opcodes import (
    COMP_TABLE,
    DEST_TABLE,
    JUMP_TABLE,
    PREDEFINED_SYMBOLS,
)

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    # Line classifier
    "Command",
    "CommandType",
    "SourceLine",
    "classify",
    "parse_source",
    "split_compute",
    # Symbol table
    "SymbolTable",
    # Code generator
    "AssemblyContext",
    "AssemblyResult",
    "CodeGenerator",
    "EncodedInstruction",
    # Encoding tables
    "COMP_TABLE",
    "DEST_TABLE",
    "JUMP_TABLE",
    "PREDEFINED_SYMBOLS",
]
