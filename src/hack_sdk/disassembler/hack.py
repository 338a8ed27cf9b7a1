"""
Hack Disassembler
=================

Disassembles Hack machine words back into assembly language. This is the
inverse operation of the assembler's code generation and is built from
the same encoding tables, inverted.

Output uses the canonical mnemonic spellings (``D+A`` rather than
``A+D``), so disassembling assembled code gives back the source modulo
labels, variable names, comments and operand order.

Usage:
    disasm = HackDisassembler()

    # Disassemble a whole .hack file
    instructions = disasm.disassemble(Path("Max.hack").read_text().splitlines())

    # Disassemble a single word
    instr = disasm.disassemble_one("1110101010000111")
    print(instr.text)   # 0;JMP
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional
import logging

from ..assembler.opcodes import (
    COMP_DECODE,
    DEST_DECODE,
    JUMP_DECODE,
    C_INSTRUCTION_PREFIX,
    WORD_BITS,
)
from ..errors import DisassemblyError

logger = logging.getLogger(__name__)


# =============================================================================
# Data Structures
# =============================================================================

class InstructionKind(Enum):
    """Instruction format of a decoded word."""
    ADDRESS = auto()
    COMPUTE = auto()

    def __str__(self) -> str:
        return self.name.lower()


@dataclass
class DecodedInstruction:
    """
    Represents a single disassembled Hack instruction.

    Attributes:
        address: ROM address of the instruction
        word: The 16-character machine word
        kind: Address or compute instruction
        text: Assembly text (e.g. "@17", "D=D+A", "0;JMP")
        comment: Optional annotation (symbol names for known addresses)
    """
    address: int
    word: str
    kind: InstructionKind
    text: str
    comment: str = ""

    def __str__(self) -> str:
        """Format as listing line: ADDRESS: WORD  TEXT"""
        if self.comment:
            return f"{self.address:5d}: {self.word}  {self.text:<16} // {self.comment}"
        return f"{self.address:5d}: {self.word}  {self.text}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "address": self.address,
            "word": self.word,
            "kind": str(self.kind),
            "text": self.text,
            "comment": self.comment,
        }


# =============================================================================
# Hack Disassembler
# =============================================================================

class HackDisassembler:
    """
    Disassembler for Hack machine words.

    Attributes:
        _symbol_table: Optional map of address to symbol names, used to
                       annotate address instructions
    """

    def __init__(self, symbol_table: Optional[dict[int, list[str]]] = None):
        """
        Initialize the disassembler.

        Args:
            symbol_table: Optional dict mapping addresses to the names bound
                          to them. Several names may share an address.
        """
        self._symbol_table = symbol_table or {}

    @classmethod
    def from_symbols(cls, symbols: dict[str, int]) -> "HackDisassembler":
        """Build a disassembler from a name -> address mapping."""
        by_address: dict[int, list[str]] = {}
        for name, address in sorted(symbols.items()):
            by_address.setdefault(address, []).append(name)
        return cls(by_address)

    def disassemble_one(self, word: str, address: int = 0) -> DecodedInstruction:
        """
        Disassemble a single machine word.

        Raises:
            DisassemblyError: If the word is malformed or holds an unknown
                comp code
        """
        word = word.strip()
        if len(word) != WORD_BITS or set(word) - {"0", "1"}:
            raise DisassemblyError(
                f"expected {WORD_BITS} binary digits, got '{word}'", word, address
            )

        if word[0] == "0":
            value = int(word[1:], 2)
            names = self._symbol_table.get(value, [])
            return DecodedInstruction(
                address=address,
                word=word,
                kind=InstructionKind.ADDRESS,
                text=f"@{value}",
                comment=", ".join(names),
            )

        if not word.startswith(C_INSTRUCTION_PREFIX):
            raise DisassemblyError(
                f"compute instruction must start with {C_INSTRUCTION_PREFIX}", word, address
            )

        comp_bits, dest_bits, jump_bits = word[3:10], word[10:13], word[13:16]
        comp = COMP_DECODE.get(comp_bits)
        if comp is None:
            raise DisassemblyError(f"unknown comp code {comp_bits}", word, address)

        dest = DEST_DECODE[dest_bits]
        jump = JUMP_DECODE[jump_bits]

        text = comp
        if dest is not None:
            text = f"{dest}={text}"
        if jump is not None:
            text = f"{text};{jump}"

        return DecodedInstruction(
            address=address,
            word=word,
            kind=InstructionKind.COMPUTE,
            text=text,
        )

    def disassemble(self, words: Iterable[str], start_address: int = 0) -> list[DecodedInstruction]:
        """
        Disassemble a sequence of machine words.

        Blank lines are skipped and do not consume an address.

        Args:
            words: Machine words, e.g. the lines of a .hack file
            start_address: ROM address of the first word

        Returns:
            List of decoded instructions
        """
        instructions = []
        address = start_address
        for word in words:
            if not word.strip():
                continue
            instructions.append(self.disassemble_one(word, address))
            address += 1
        logger.debug(f"Disassembled {len(instructions)} words")
        return instructions

    def format(self, instructions: list[DecodedInstruction]) -> str:
        """Format decoded instructions as re-assemblable source text."""
        lines = []
        for instr in instructions:
            if instr.comment:
                lines.append(f"{instr.text:<20} // {instr.comment}")
            else:
                lines.append(instr.text)
        return "\n".join(lines) + ("\n" if lines else "")
