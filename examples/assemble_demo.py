#!/usr/bin/env python3
"""
Hack SDK Assembler Demo
=======================

This script demonstrates how to use the Hack SDK to:
1. Assemble a source file
2. Inspect labels and variables
3. Write the .hack file and a listing
4. Disassemble the result again

Usage:
    python examples/assemble_demo.py
"""

from pathlib import Path

from hack_sdk.assembler import Assembler
from hack_sdk.disassembler import HackDisassembler
from hack_sdk.errors import AssemblyFailedError


def main():
    here = Path(__file__).parent

    # ==========================================================================
    # 1. Assemble every example program
    # ==========================================================================
    for source in sorted(here.glob("*.asm")):
        asm = Assembler()
        try:
            words = asm.assemble_file(source)
        except AssemblyFailedError as e:
            print(e)
            continue

        print(f"{source.name}: {len(words)} instructions")
        print(f"  labels:    {asm.get_labels()}")
        print(f"  variables: {asm.get_variables()}")

        # ======================================================================
        # 2. Write outputs next to the source
        # ======================================================================
        asm.write_hack(source.with_suffix(".hack"))
        asm.write_listing(source.with_suffix(".lst"))

        # ======================================================================
        # 3. Disassemble with symbol annotations
        # ======================================================================
        disasm = HackDisassembler.from_symbols(asm.get_symbols())
        for instr in disasm.disassemble(words)[:6]:
            print(f"  {instr}")
        print()


if __name__ == "__main__":
    main()
