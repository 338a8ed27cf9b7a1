"""
Hack SDK Disassembler Module
============================

This module decodes Hack machine words (the .hack text format) back into
assembly language, using the inverse of the assembler's encoding tables.

Usage:
    from hack_sdk.disassembler import HackDisassembler

    disasm = HackDisassembler()
    instructions = disasm.disassemble(["0000000000000010", "1110110000010000"])
    for instr in instructions:
        print(instr.text)   # @2, D=A
"""

from .hack import HackDisassembler, DecodedInstruction, InstructionKind

__all__ = [
    "HackDisassembler",
    "DecodedInstruction",
    "InstructionKind",
]
