# src/formula_guard/dialect/__init__.py
from .dialect import (
    FormulaDialect,
    DEFAULT_DIALECT,
    DEFAULT_RESERVED_FUNCTIONS,
    DEFAULT_BOUNDARY_CHARS,
)
from .loader import DialectLoader
from .exceptions import DialectError, DialectParsingError, DialectSchemaError

__all__ = [
    # Configuration
    "FormulaDialect",
    "DEFAULT_DIALECT",
    "DEFAULT_RESERVED_FUNCTIONS",
    "DEFAULT_BOUNDARY_CHARS",
    # Loader and Exceptions
    "DialectLoader",
    "DialectError",
    "DialectParsingError",
    "DialectSchemaError",
]
