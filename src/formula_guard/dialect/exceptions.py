# src/formula_guard/dialect/exceptions.py
"""
Defines the diagnosable exceptions raised while loading a formula dialect.

`DialectParsingError` covers file-system and YAML syntax problems, while
`DialectSchemaError` covers structural problems found by the Cerberus schema.
Both derive from `DialectError`, so a host can catch every dialect problem
with a single `except DialectError:` block.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ..errors import DiagnosableError, format_diagnostic_report


class DialectError(DiagnosableError):
    """A local, concrete base class for all dialect loading errors."""
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Dialect Error",
            details=str(self),
            suggestion="Please check the format and content of the dialect configuration.",
            context={}
        )


@dataclass(frozen=True)
class DialectParsingError(DialectError):
    """Raised when a dialect file is missing, unreadable, or not valid YAML."""
    details: str
    file_path: Optional[Path]

    def __str__(self):
        return f"Dialect parsing error in '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Dialect File Error",
            details=self.details,
            suggestion="Ensure the file exists, is readable, and contains a YAML mapping.",
            context={'source_file': self.file_path}
        )


@dataclass(frozen=True)
class DialectSchemaError(DialectError):
    """Raised when a dialect mapping does not satisfy the schema."""
    errors: Dict[str, Any]
    file_path: Optional[Path]

    def __str__(self):
        return f"Dialect schema validation failed for '{self.file_path}': {self.errors}"

    def get_diagnostic_report(self) -> str:
        details = "\n".join(f"{key}: {value}" for key, value in sorted(self.errors.items()))
        return format_diagnostic_report(
            error_type="Dialect Schema Validation Error",
            details=details,
            suggestion=(
                "'reserved_functions' must be a list of identifiers, 'boundary_chars' a list of "
                "single characters other than '\"', and 'extend_defaults' a boolean."
            ),
            context={'source_file': self.file_path}
        )
