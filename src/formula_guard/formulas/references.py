# src/formula_guard/formulas/references.py
import logging
from typing import Iterable, List, Optional

from ..data_structures import ParameterLike
from ..dialect import FormulaDialect
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)


class ReferenceResolver:
    """
    Answers "which parameters does this formula reference?" against a snapshot
    of the parameter set.

    All queries are recomputed from the formula text on every call. Nothing is
    cached, because any formula edit changes the reference edges of its owner.
    Absence is always an empty result; no query raises for a missing formula.
    """

    def __init__(self, dialect: Optional[FormulaDialect] = None, tokenizer: Optional[Tokenizer] = None):
        self.tokenizer = tokenizer or Tokenizer(dialect)
        self.dialect = self.tokenizer.dialect

    def is_referenced_in(self, parameter: ParameterLike, formula: Optional[str]) -> bool:
        """
        True if the parameter's name occurs in `formula` delimited by boundary
        characters (or the ends of the string) on both sides.

        String literals are not stripped here. After an occurrence fails the
        boundary check, the search resumes one character past its start, so an
        occurrence overlapping the failed one is still found.
        """
        name = parameter.name
        if not name or not formula:
            return False

        search_start = 0
        while search_start < len(formula):
            left = formula.find(name, search_start)
            if left == -1:
                return False
            left_ok = left == 0 or self.dialect.is_boundary(formula[left - 1])
            right = left + len(name)
            right_ok = right >= len(formula) or self.dialect.is_boundary(formula[right])
            if left_ok and right_ok:
                return True
            search_start = left + 1

        return False

    def references_param(self, this: ParameterLike, other: ParameterLike) -> bool:
        """True if `this` parameter's own formula references `other`."""
        formula = this.formula
        if not formula or not formula.strip():
            return False
        return self.is_referenced_in(other, formula)

    def get_referenced_in(self, parameters: Iterable[ParameterLike], formula: Optional[str]) -> List[ParameterLike]:
        """
        All parameters of the snapshot referenced by `formula`, in snapshot order.

        Names are checked longest first and every accepted name is masked before
        shorter names are checked, so "Width" is not reported for a formula that
        only mentions "Width Offset".
        """
        if not formula or not formula.strip():
            return []
        parameters = list(parameters)
        text = formula
        found = set()
        for param in sorted(parameters, key=lambda p: len(p.name or ""), reverse=True):
            if self.is_referenced_in(param, text):
                found.add(param.id)
                text = self.tokenizer.mask_name(text, param.name)
        return [p for p in parameters if p.id in found]

    def references(self, parameters: Iterable[ParameterLike], formula: Optional[str], parameter: ParameterLike) -> bool:
        """Set-aware form of `is_referenced_in`: longer names mentioned in `formula` are masked first."""
        return any(p.id == parameter.id for p in self.get_referenced_in(parameters, formula))

    def get_invalid_references(self, parameters: Iterable[ParameterLike], formula: Optional[str]) -> List[str]:
        """
        Names used in `formula` that match no parameter of the snapshot.
        Empty when every token is a known name, a number or a reserved function.
        """
        if not formula or not formula.strip():
            return []
        known_names = [p.name for p in parameters]
        return self.tokenizer.extract_invalid_tokens(formula, known_names)

    def get_suspicious_tokens(self, parameters: Iterable[ParameterLike], formula: Optional[str]) -> List[str]:
        if not formula or not formula.strip():
            return []
        known_names = [p.name for p in parameters]
        return self.tokenizer.extract_suspicious_tokens(formula, known_names)
