"""
Hack Instruction Set Definition
===============================

This module defines the encoding tables of the Hack computer's instruction
set and the field encoders the assembler builds instructions from.

Instruction Formats
-------------------
Every instruction is one 16-bit word, written as 16 characters of 0/1.

1. **Address instruction** (``@value``)::

       0 vvv vvvv vvvv vvvv
       |  `------------------ 15-bit unsigned address (0..32767)
       `--------------------- opcode bit 0

2. **Compute instruction** (``dest=comp;jump``)::

       1 1 1 a c1 c2 c3 c4 c5 c6 d1 d2 d3 j1 j2 j3
       `---' `-----------------' `------' `------'
       prefix      comp (7)       dest (3) jump (3)

   The ``a`` bit selects the ALU's second operand: 0 for the A register,
   1 for memory M (RAM[A]).

Dest Field
----------
Each letter present sets one bit: A is bit 2, D is bit 1, M is bit 0.

Jump Field
----------
A fixed enumeration, not a bit-flag scheme: null, JGT, JEQ, JGE, JLT,
JNE, JLE, JMP map to 000..111 in that order.

Comp Field
----------
28 canonical mnemonics. Whitespace is ignored and operand order is free
for the commutative operators ``+``, ``&`` and ``|`` (``A+D`` is ``D+A``,
``1+M`` is ``M+1``). Subtraction is not commutative: ``D-A`` and ``A-D``
are different instructions.

Reference
---------
- Nisan & Schocken, *The Elements of Computing Systems*, chapter 6
"""

import re
from typing import Optional

from hack_sdk.errors import AddressRangeError, UnknownMnemonicError


# =============================================================================
# Architecture Constants
# =============================================================================

WORD_BITS = 16
ADDRESS_BITS = 15
MAX_ADDRESS = (1 << ADDRESS_BITS) - 1   # 32767

A_INSTRUCTION_PREFIX = "0"
C_INSTRUCTION_PREFIX = "111"

# Symbols the machine defines before any user code is seen.
PREDEFINED_SYMBOLS: dict[str, int] = {
    "SP": 0,
    "LCL": 1,
    "ARG": 2,
    "THIS": 3,
    "THAT": 4,
    **{f"R{i}": i for i in range(16)},
    "SCREEN": 16384,
    "KBD": 24576,
}

# First RAM address handed out to variables.
VARIABLE_BASE_ADDRESS = 16


# =============================================================================
# Encoding Tables
# =============================================================================
# None stands for an omitted field ("no destination", "no jump").
# =============================================================================

DEST_TABLE: dict[Optional[str], str] = {
    None:  "000",
    "M":   "001",
    "D":   "010",
    "MD":  "011",
    "A":   "100",
    "AM":  "101",
    "AD":  "110",
    "AMD": "111",
}

JUMP_TABLE: dict[Optional[str], str] = {
    None:  "000",
    "JGT": "001",
    "JEQ": "010",
    "JGE": "011",
    "JLT": "100",
    "JNE": "101",
    "JLE": "110",
    "JMP": "111",
}

COMP_TABLE: dict[str, str] = {
    # a=0: second operand is the A register
    "0":   "0101010",
    "1":   "0111111",
    "-1":  "0111010",
    "D":   "0001100",
    "A":   "0110000",
    "!D":  "0001101",
    "!A":  "0110001",
    "-D":  "0001111",
    "-A":  "0110011",
    "D+1": "0011111",
    "A+1": "0110111",
    "D-1": "0001110",
    "A-1": "0110010",
    "D+A": "0000010",
    "D-A": "0010011",
    "A-D": "0000111",
    "D&A": "0000000",
    "D|A": "0010101",

    # a=1: second operand is memory M
    "M":   "1110000",
    "!M":  "1110001",
    "-M":  "1110011",
    "M+1": "1110111",
    "M-1": "1110010",
    "D+M": "1000010",
    "D-M": "1010011",
    "M-D": "1000111",
    "D&M": "1000000",
    "D|M": "1010101",
}

COMMUTATIVE_OPERATORS = frozenset("+&|")


def _build_comp_aliases() -> dict[str, str]:
    """
    Map every swapped-operand spelling to its canonical mnemonic.

    ``A+D`` -> ``D+A``, ``M|D`` -> ``D|M``, ``1+D`` -> ``D+1`` and so on.
    Canonical entries map to themselves.
    """
    aliases = {mnemonic: mnemonic for mnemonic in COMP_TABLE}
    for mnemonic in COMP_TABLE:
        if len(mnemonic) == 3 and mnemonic[1] in COMMUTATIVE_OPERATORS:
            swapped = mnemonic[2] + mnemonic[1] + mnemonic[0]
            aliases.setdefault(swapped, mnemonic)
    return aliases


COMP_ALIASES: dict[str, str] = _build_comp_aliases()


# =============================================================================
# Inverse Tables (used by the disassembler)
# =============================================================================

DEST_DECODE: dict[str, Optional[str]] = {code: name for name, code in DEST_TABLE.items()}
JUMP_DECODE: dict[str, Optional[str]] = {code: name for name, code in JUMP_TABLE.items()}
COMP_DECODE: dict[str, str] = {code: name for name, code in COMP_TABLE.items()}


# =============================================================================
# Field Encoders
# =============================================================================

_WHITESPACE = re.compile(r"\s+")
_DECIMAL = re.compile(r"[0-9]+")


def normalize_comp(mnemonic: str) -> str:
    """
    Return the canonical spelling of a comp mnemonic.

    Whitespace is removed and swapped operands of commutative operators
    are put back in table order. Text that is not a known comp mnemonic
    is returned with whitespace removed, unchanged otherwise.
    """
    compact = _WHITESPACE.sub("", mnemonic)
    return COMP_ALIASES.get(compact, compact)


def dest(mnemonic: Optional[str]) -> str:
    """
    Encode the dest field.

    Args:
        mnemonic: One of M, D, MD, A, AM, AD, AMD, or None for no store

    Returns:
        3-character bit string

    Raises:
        UnknownMnemonicError: If the mnemonic is not in the table
    """
    key = mnemonic.strip() if mnemonic is not None else None
    try:
        return DEST_TABLE[key]
    except KeyError:
        raise UnknownMnemonicError(
            "dest", mnemonic, valid=[m for m in DEST_TABLE if m is not None]
        ) from None


def jump(mnemonic: Optional[str]) -> str:
    """
    Encode the jump field.

    Args:
        mnemonic: One of JGT, JEQ, JGE, JLT, JNE, JLE, JMP, or None for no jump

    Returns:
        3-character bit string

    Raises:
        UnknownMnemonicError: If the mnemonic is not in the table
    """
    key = mnemonic.strip() if mnemonic is not None else None
    try:
        return JUMP_TABLE[key]
    except KeyError:
        raise UnknownMnemonicError(
            "jump", mnemonic, valid=[m for m in JUMP_TABLE if m is not None]
        ) from None


def comp(mnemonic: str) -> str:
    """
    Encode the comp field, including its leading ``a`` bit.

    Raises:
        UnknownMnemonicError: If the mnemonic is not one of the 28 ALU
            operations (in any accepted spelling)
    """
    canonical = normalize_comp(mnemonic)
    try:
        return COMP_TABLE[canonical]
    except KeyError:
        raise UnknownMnemonicError("comp", mnemonic.strip()) from None


def address_literal(text: str) -> Optional[int]:
    """
    Parse a decimal address operand.

    Returns:
        The value, or None if ``text`` is not a decimal number (in which
        case the caller treats it as a symbol name)

    Raises:
        AddressRangeError: If the number does not fit in 15 bits
    """
    if not _DECIMAL.fullmatch(text):
        return None
    value = int(text)
    if value > MAX_ADDRESS:
        raise AddressRangeError(value)
    return value


def encode_address(value: int, symbol: Optional[str] = None) -> str:
    """
    Encode an address instruction word: ``0`` followed by 15 value bits.

    Args:
        value: Address to load into A
        symbol: Symbol the value came from, for the error message

    Raises:
        AddressRangeError: If value is outside 0..32767
    """
    if value < 0 or value > MAX_ADDRESS:
        raise AddressRangeError(value, symbol=symbol)
    return f"{A_INSTRUCTION_PREFIX}{value:015b}"


def encode_compute(dest_mnemonic: Optional[str], comp_mnemonic: str,
                   jump_mnemonic: Optional[str]) -> str:
    """Assemble a compute instruction word as ``111`` + comp + dest + jump."""
    return C_INSTRUCTION_PREFIX + comp(comp_mnemonic) + dest(dest_mnemonic) + jump(jump_mnemonic)
