# src/formula_guard/dialect/dialect.py
import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable

logger = logging.getLogger(__name__)

DEFAULT_RESERVED_FUNCTIONS: FrozenSet[str] = frozenset({
    "sin",
    "cos",
    "tan",
    "asin",
    "acos",
    "atan",
    "exp",
    "log",
    "sqrt",
    "abs",
    "if",
    "or",
    "and",
    "not",
    "text_file_lookup_obsoleted",
    "pi",
    "ConduitSize_Lookup_obsoleted",
    "round",
    "roundup",
    "rounddown",
    "size_lookup",
    "ln",
})

# Operators and structural characters. The double quote is deliberately absent:
# it delimits string literals, not identifiers.
DEFAULT_BOUNDARY_CHARS: FrozenSet[str] = frozenset({
    '+', '-', '*', '/', '^', '=', '>', '<', ' ', '[', ']', '(', ')', ',', '\t', '\r', '\n',
})

QUOTE_CHAR = '"'


@dataclass(frozen=True)
class FormulaDialect:
    """
    The fixed lexical configuration of a host's formula language.

    Reserved function names are compared case-insensitively; `reserved_functions`
    is normalized to lower case on construction.
    """
    reserved_functions: FrozenSet[str] = DEFAULT_RESERVED_FUNCTIONS
    boundary_chars: FrozenSet[str] = DEFAULT_BOUNDARY_CHARS
    _reserved_lower: FrozenSet[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        boundary = frozenset(self.boundary_chars)
        bad = sorted(c for c in boundary if len(c) != 1)
        if bad:
            raise ValueError(f"Boundary characters must be single characters, got: {bad}")
        if QUOTE_CHAR in boundary:
            raise ValueError("The double quote delimits string literals and cannot be a boundary character.")
        object.__setattr__(self, "boundary_chars", boundary)
        object.__setattr__(self, "reserved_functions", frozenset(self.reserved_functions))
        object.__setattr__(self, "_reserved_lower", frozenset(f.lower() for f in self.reserved_functions))

    def is_boundary(self, char: str) -> bool:
        return char in self.boundary_chars

    def is_reserved_function(self, token: str) -> bool:
        return token.lower() in self._reserved_lower

    def extended(self, reserved_functions: Iterable[str] = (), boundary_chars: Iterable[str] = ()) -> "FormulaDialect":
        """Returns a new dialect with the given names and characters added."""
        return FormulaDialect(
            reserved_functions=self.reserved_functions | frozenset(reserved_functions),
            boundary_chars=self.boundary_chars | frozenset(boundary_chars),
        )


DEFAULT_DIALECT = FormulaDialect()
