# src/formula_guard/formulas/analysis.py
import logging
from dataclasses import dataclass
from typing import Hashable, Iterable, List, Optional, Set, Tuple

from ..data_structures import ParameterLike
from .exceptions import CircularReferenceError
from .references import ReferenceResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormulaChainResult:
    """Result of following a chain of single-reference formulas."""
    ultimate_source: ParameterLike
    intermediates: Tuple[ParameterLike, ...]
    source_has_constant_formula: bool


class FormulaAnalyzer:
    """Classifies formulas as constant, single-reference or complex."""

    def __init__(self, resolver: Optional[ReferenceResolver] = None):
        self.resolver = resolver or ReferenceResolver()

    def is_constant(self, parameters: Iterable[ParameterLike], formula: Optional[str]) -> bool:
        """
        True for non-empty formulas without parameter references, such as
        '20', '60 Hz', '"text"' or '2 + 5'.
        """
        if not formula or not formula.strip():
            return False
        return not self.resolver.get_referenced_in(parameters, formula)

    def try_get_single_reference(
        self, parameters: Iterable[ParameterLike], formula: Optional[str]
    ) -> Optional[ParameterLike]:
        """
        The referenced parameter when the formula is exactly one parameter name
        (surrounding whitespace ignored), otherwise None.
        """
        if not formula or not formula.strip():
            return None
        referenced = self.resolver.get_referenced_in(parameters, formula)
        if len(referenced) != 1:
            return None
        param = referenced[0]
        return param if formula.strip() == param.name else None

    def resolve_chain(self, parameter: ParameterLike, parameters: Iterable[ParameterLike]) -> FormulaChainResult:
        """
        Follows `A = B`, `B = C`, ... to the parameter the value ultimately comes
        from. The chain stops at a parameter with no formula, a constant formula
        or a complex formula.

        Raises:
            CircularReferenceError: if the chain revisits a parameter.
        """
        parameters = list(parameters)
        intermediates: List[ParameterLike] = []
        seen: Set[Hashable] = set()
        current = parameter

        while True:
            if current.id in seen:
                start = next(i for i, p in enumerate(intermediates) if p.id == current.id)
                cycle = [p.name for p in intermediates[start:]] + [current.name]
                raise CircularReferenceError(cycle=cycle)
            seen.add(current.id)

            formula = current.formula
            if not formula or not formula.strip():
                return FormulaChainResult(current, tuple(intermediates), False)
            if self.is_constant(parameters, formula):
                return FormulaChainResult(current, tuple(intermediates), True)

            next_param = self.try_get_single_reference(parameters, formula)
            if next_param is None:
                return FormulaChainResult(current, tuple(intermediates), False)

            logger.debug("Chain step: '%s' -> '%s'", current.name, next_param.name)
            intermediates.append(current)
            current = next_param
