"""
Symbol table for Teleidoscope.

Holds every name the compiler knows about: the host platform's constants
and Math functions, extern declarations and user-defined functions. Each
record carries a set of classification bits, one of which ("used") is set
while parsing whenever a reference resolves to the record. The backend
only emits aliases for externs that ended up used.

Registering a name again shadows the older record; the older one stays
in the table (and is still visited by symbols()) but lookup() no longer
finds it.

Author: xwest
"""

from enum import IntFlag
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional


class SymbolKind(IntFlag):
    """Classification bits for a symbol. Bits combine additively."""
    NONE = 0
    EXTERN = 1      # provided by the host, not defined in source
    STDLIB = 2      # lives on the platform (stdlib) object
    MATH = 4        # lives on stdlib.Math
    FUNCTION = 8    # callable
    USED = 16       # referenced at least once while parsing


# Seeded names, in registration order
PLATFORM_CONSTANTS = ("Infinity", "NaN")
MATH_CONSTANTS = ("E", "LN10", "LN2", "LOG2E", "LOG10E", "PI", "SQRT1_2", "SQRT2")
MATH_FUNCTIONS = (
    "acos", "asin", "atan", "cos", "sin", "tan",
    "ceil", "floor", "exp", "log", "sqrt", "abs",
    "atan2", "pow",
)


@dataclass
class Symbol:
    """A named entry in the symbol table."""
    name: str
    kind: SymbolKind = SymbolKind.NONE

    def __str__(self) -> str:
        flags = [flag.name.lower() for flag in SymbolKind
                 if flag is not SymbolKind.NONE and flag in self.kind]
        return f"{self.name} [{', '.join(flags)}]"

    def has(self, kind: SymbolKind) -> bool:
        """Check that every bit of `kind` is set."""
        return (self.kind & kind) == kind

    def mark_used(self):
        self.kind |= SymbolKind.USED

    @property
    def is_used(self) -> bool:
        return self.has(SymbolKind.USED)

    @property
    def is_extern(self) -> bool:
        return self.has(SymbolKind.EXTERN)

    @property
    def is_stdlib(self) -> bool:
        return self.has(SymbolKind.STDLIB)

    @property
    def is_math(self) -> bool:
        return self.has(SymbolKind.MATH)

    @property
    def is_function(self) -> bool:
        return self.has(SymbolKind.FUNCTION)


class SymbolTable:
    """
    Ordered name -> symbol registry for one compilation.

    Keeps every record in registration order plus an index of the newest
    record per name, which is what lookup() returns.
    """

    def __init__(self, seed_builtins: bool = True):
        """
        Initialize the symbol table.

        Args:
            seed_builtins: Pre-register the platform constants and Math functions
        """
        self._symbols: List[Symbol] = []
        self._index: Dict[str, Symbol] = {}

        if seed_builtins:
            self._initialize_builtins()

    def _initialize_builtins(self):
        """Register the host platform namespace; nothing starts out used."""
        kind = SymbolKind.EXTERN | SymbolKind.STDLIB
        for name in PLATFORM_CONSTANTS:
            self.register(name, kind)

        kind |= SymbolKind.MATH
        for name in MATH_CONSTANTS:
            self.register(name, kind)

        kind |= SymbolKind.FUNCTION
        for name in MATH_FUNCTIONS:
            self.register(name, kind)

    def register(self, name: str, kind: SymbolKind) -> Symbol:
        """Add a new record. Always succeeds and shadows any older record of `name`."""
        symbol = Symbol(name, kind)
        self._symbols.append(symbol)
        self._index[name] = symbol
        return symbol

    def lookup(self, name: str) -> Optional[Symbol]:
        """Return the most recently registered record for `name`, or None."""
        return self._index.get(name)

    def mark_used(self, name: str) -> Optional[Symbol]:
        """Set the used bit on the visible record for `name`; no-op if unknown."""
        symbol = self.lookup(name)
        if symbol is not None:
            symbol.mark_used()
        return symbol

    def declare_extern(self, name: str) -> Symbol:
        """
        Declare an extern function.

        Only the first declaration of a name registers anything; later ones
        (and externs naming builtins) return the existing record untouched.
        """
        existing = self.lookup(name)
        if existing is not None:
            return existing
        return self.register(name, SymbolKind.EXTERN | SymbolKind.FUNCTION)

    def define_function(self, name: str) -> Symbol:
        """Register a user-defined function, shadowing any older record."""
        return self.register(name, SymbolKind.FUNCTION)

    def symbols(self) -> Iterator[Symbol]:
        """Every record, shadowed ones included, newest first."""
        return reversed(self._symbols)

    def used_externs(self) -> List[Symbol]:
        """Externs that were referenced, newest first."""
        return [symbol for symbol in self.symbols()
                if symbol.is_extern and symbol.is_used]

    def uses_foreign(self) -> bool:
        """Check if any used extern has to come from the foreign imports object."""
        return any(not symbol.is_stdlib for symbol in self.used_externs())

    def __contains__(self, name: str) -> bool:
        return name in self._index

    def __len__(self) -> int:
        return len(self._symbols)

    def __str__(self) -> str:
        return f"SymbolTable({len(self._index)} names, {len(self._symbols)} records)"
