# src/formula_guard/dialect/loader.py
import logging
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import cerberus
import yaml

from .dialect import DEFAULT_DIALECT, QUOTE_CHAR, FormulaDialect
from .exceptions import DialectParsingError, DialectSchemaError

logger = logging.getLogger(__name__)

FUNCTION_NAME_REGEX = r"^[a-zA-Z_][a-zA-Z0-9_]*$"


class DialectValidator(cerberus.Validator):
    """Custom Cerberus validator enforcing the lexical rules of a formula dialect."""
    def __init__(self, *args, **kwargs):
        super(DialectValidator, self).__init__(*args, **kwargs)
        self.rules['single_char'] = {'schema': {'type': 'boolean'}}
        self.rules['function_name'] = {'schema': {'type': 'boolean'}}

    def _validate_single_char(self, constraint: bool, field: str, value: Any):
        """
        Boundary entries are single characters and never the string-literal quote.
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if not constraint or not isinstance(value, str):
            return
        if len(value) != 1:
            self._error(field, f"Boundary character {value!r} must be exactly one character long.")
        elif value == QUOTE_CHAR:
            self._error(field, "The double quote delimits string literals and cannot be a boundary character.")

    def _validate_function_name(self, constraint: bool, field: str, value: Any):
        """
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if constraint and isinstance(value, str) and not re.match(FUNCTION_NAME_REGEX, value):
            self._error(
                field,
                f"Function name '{value}' is invalid. Names must start with a letter or underscore "
                "and contain only letters, digits and underscores.",
            )


class DialectLoader:
    """
    Loads a `FormulaDialect` from YAML. By default the configured names and
    characters are merged into `DEFAULT_DIALECT`; `extend_defaults: false`
    replaces the defaults entirely.
    """
    _schema = {
        "extend_defaults": {"type": "boolean", "required": False, "default": True},
        "reserved_functions": {
            "type": "list", "required": False,
            "schema": {"type": "string", "empty": False, "function_name": True},
        },
        "boundary_chars": {
            "type": "list", "required": False,
            "schema": {"type": "string", "single_char": True},
        },
    }

    def __init__(self):
        self._validator = DialectValidator(self._schema)

    def load(self, path: Union[str, Path]) -> FormulaDialect:
        file_path = Path(path)
        logger.info("Loading formula dialect from '%s'.", file_path)
        try:
            with file_path.open("r", encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise DialectParsingError(details=f"File not found: {e}", file_path=file_path) from e
        except OSError as e:
            raise DialectParsingError(details=f"Could not read file: {e}", file_path=file_path) from e
        except yaml.YAMLError as e:
            raise DialectParsingError(details=f"Invalid YAML syntax: {e}", file_path=file_path) from e

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise DialectParsingError(
                details=f"Top level of a dialect file must be a mapping, got {type(raw).__name__}.",
                file_path=file_path,
            )
        return self.from_dict(raw, source=file_path)

    def from_dict(self, data: Mapping[str, Any], source: Optional[Path] = None) -> FormulaDialect:
        if not self._validator.validate(dict(data)):
            logger.error("Dialect schema validation failed for '%s': %s", source, self._validator.errors)
            raise DialectSchemaError(errors=self._validator.errors, file_path=source)

        doc: Dict[str, Any] = self._validator.document
        functions = doc.get("reserved_functions", [])
        boundaries = doc.get("boundary_chars", [])

        if doc["extend_defaults"]:
            dialect = DEFAULT_DIALECT.extended(reserved_functions=functions, boundary_chars=boundaries)
        else:
            if not boundaries:
                raise DialectSchemaError(
                    errors={"boundary_chars": ["required when 'extend_defaults' is false"]},
                    file_path=source,
                )
            dialect = FormulaDialect(reserved_functions=frozenset(functions), boundary_chars=frozenset(boundaries))

        logger.debug(
            "Dialect ready: %d reserved functions, %d boundary characters.",
            len(dialect.reserved_functions), len(dialect.boundary_chars),
        )
        return dialect
