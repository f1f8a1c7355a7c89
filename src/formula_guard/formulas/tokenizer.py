# src/formula_guard/formulas/tokenizer.py

"""
Low-level lexical analysis of formula strings.

The formula language is never fully parsed. A formula is reduced to the set of
"bare" tokens that remain once string literals are stripped, known parameter
names are masked, and the text is split on the dialect's boundary characters.
Whatever survives and is neither a number nor a reserved function is a
reference to something that does not exist.

Masking is what makes multi-word names ("Width Offset") work: the name is
blanked out as a whole before splitting, so its parts are never seen as tokens.
Names are masked longest first, otherwise "Width" would be blanked inside
"Width Offset" and leave "Offset" behind as a false unknown token.
"""

import logging
import math
import re
from typing import Iterable, List, Optional

from ..dialect import DEFAULT_DIALECT, FormulaDialect

logger = logging.getLogger(__name__)

_STRING_LITERAL_REGEX = re.compile(r'"[^"]*"')


def _unique(tokens: Iterable[str]) -> List[str]:
    """De-duplicates while keeping first-appearance order."""
    return list(dict.fromkeys(tokens))


class Tokenizer:
    """A stateless tokenizer bound to one formula dialect."""

    def __init__(self, dialect: Optional[FormulaDialect] = None):
        self.dialect = dialect or DEFAULT_DIALECT
        self._split_regex = None
        if self.dialect.boundary_chars:
            self._split_regex = re.compile(
                "[" + "".join(re.escape(c) for c in sorted(self.dialect.boundary_chars)) + "]+"
            )

    # --- Token classification ---

    @staticmethod
    def is_numeric_literal(token: str) -> bool:
        """
        True for tokens that parse as a finite decimal number ("12", "3.5", ".5", "1e3").
        'nan' and 'inf' parse as floats but are rejected here so they can still
        be reported as unknown names.
        """
        try:
            value = float(token)
        except ValueError:
            return False
        return math.isfinite(value)

    def is_reserved_function(self, token: str) -> bool:
        return self.dialect.is_reserved_function(token)

    def could_be_parameter_reference(self, token: str) -> bool:
        """
        Parameter names start with a letter or underscore by convention. Tokens
        starting with a digit are numeric literals, possibly with a unit suffix
        glued on ("0'"), and are never treated as references.
        """
        if not token:
            return False
        if token[0].isdecimal():
            return False
        if self.is_numeric_literal(token):
            return False
        if self.is_reserved_function(token):
            return False
        return True

    # --- Text transformations ---

    @staticmethod
    def strip_string_literals(formula: str) -> str:
        return _STRING_LITERAL_REGEX.sub(" ", formula)

    def split(self, text: str) -> List[str]:
        # Masked spans are blanks; a dialect that does not split on ' ' must not
        # turn them into tokens.
        parts = self._split_regex.split(text) if self._split_regex else [text]
        return [t.strip(" ") for t in parts if t.strip(" ")]

    def mask_name(self, text: str, name: str) -> str:
        """
        Returns a copy of `text` with every boundary-delimited occurrence of
        `name` replaced by blanks. The scan is a single left-to-right pass; after
        a masked match it resumes past the match, never inside it.
        """
        if not name:
            return text
        name_len = len(name)
        pieces = []
        last = 0
        i = text.find(name)
        while i != -1:
            end = i + name_len
            # A left neighbour inside the previous match has already been blanked.
            prev = " " if i - 1 < last else text[i - 1]
            left_ok = i == 0 or self.dialect.is_boundary(prev)
            right_ok = end >= len(text) or self.dialect.is_boundary(text[end])
            if left_ok and right_ok:
                pieces.append(text[last:i])
                pieces.append(" " * name_len)
                last = end
                i = text.find(name, end)
            else:
                i = text.find(name, i + 1)
        if not pieces:
            return text
        pieces.append(text[last:])
        return "".join(pieces)

    def mask_names(self, text: str, known_names: Iterable[str]) -> str:
        ordered = sorted((n for n in known_names if n), key=len, reverse=True)
        for name in ordered:
            text = self.mask_name(text, name)
        return text

    # --- Public extraction API ---

    def extract_unknown_tokens(self, formula: Optional[str], known_names: Iterable[str]) -> List[str]:
        """All tokens left after stripping literals and masking every known name."""
        if not formula or not formula.strip():
            return []
        masked = self.mask_names(self.strip_string_literals(formula), known_names)
        return self.split(masked)

    def extract_invalid_tokens(self, formula: Optional[str], known_names: Iterable[str]) -> List[str]:
        """
        Tokens that look like parameter references but match no known name.
        Returned de-duplicated in order of first appearance.
        """
        tokens = self.extract_unknown_tokens(formula, known_names)
        invalid = _unique(t for t in tokens if self.could_be_parameter_reference(t))
        if invalid:
            logger.debug("Invalid tokens in formula '%s': %s", formula, invalid)
        return invalid

    def extract_suspicious_tokens(self, formula: Optional[str], known_names: Iterable[str]) -> List[str]:
        """
        Tokens that start with a digit but are not plain numbers, e.g. "0'" or
        "12in". These are usually literals with a unit format the host does not
        accept, and are useful context when the host rejects a formula.
        """
        tokens = self.extract_unknown_tokens(formula, known_names)
        return _unique(t for t in tokens if t[0].isdecimal() and not self.is_numeric_literal(t))

    def extract_tokens(self, formula: Optional[str]) -> List[str]:
        """
        Candidate name tokens of a formula with no knowledge of existing names.
        Multi-word names come back split into their parts; prefer
        `ReferenceResolver.get_referenced_in` for validated references.
        """
        if not formula or not formula.strip():
            return []
        tokens = self.split(self.strip_string_literals(formula))
        return _unique(t for t in tokens if not self.is_numeric_literal(t) and not self.is_reserved_function(t))
