"""
Hack Symbol Table
=================

Maps symbol names to addresses. A fresh table already knows the machine's
predefined symbols (SP, LCL, ARG, THIS, THAT, R0-R15, SCREEN, KBD); the
assembler adds labels during pass 1 and variables during pass 2.

Names are case-sensitive. Adding a name that is already bound overwrites
its address; there is no removal.
"""

from hack_sdk.assembler.opcodes import PREDEFINED_SYMBOLS
from hack_sdk.errors import UndefinedSymbolError


class SymbolTable:
    """
    Symbol name to address mapping.

    Example:
        >>> table = SymbolTable()
        >>> table.get_address("SCREEN")
        16384
        >>> table.add_entry("LOOP", 4)
        >>> "LOOP" in table
        True
    """

    def __init__(self) -> None:
        self._table: dict[str, int] = dict(PREDEFINED_SYMBOLS)

    def add_entry(self, name: str, address: int) -> None:
        """
        Bind ``name`` to ``address``, replacing any previous binding.

        Raises:
            ValueError: If address is negative
        """
        if address < 0:
            raise ValueError(f"symbol address must be non-negative, got {address}")
        self._table[name] = address

    def contains(self, name: str) -> bool:
        """Return True if ``name`` is bound."""
        return name in self._table

    def get_address(self, name: str) -> int:
        """
        Return the address bound to ``name``.

        Raises:
            UndefinedSymbolError: If the name is not bound
        """
        try:
            return self._table[name]
        except KeyError:
            raise UndefinedSymbolError(name) from None

    def is_predefined(self, name: str) -> bool:
        """Return True if ``name`` is one of the machine's built-in symbols."""
        return name in PREDEFINED_SYMBOLS

    def to_dict(self) -> dict[str, int]:
        """Return a copy of the bindings."""
        return dict(self._table)

    def __contains__(self, name: object) -> bool:
        return name in self._table

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"SymbolTable({len(self._table)} symbols)"
