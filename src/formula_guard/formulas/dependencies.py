# src/formula_guard/formulas/dependencies.py
import logging
from typing import Iterable, List, Optional

from ..data_structures import ParameterLike
from .references import ReferenceResolver

logger = logging.getLogger(__name__)


class DependencyNavigator:
    """
    Navigates the reference relation in both directions without building a graph.

    - Dependencies (downstream): what does my formula reference?
    - Dependents (upstream): whose formula references me?
    """

    def __init__(self, resolver: Optional[ReferenceResolver] = None):
        self.resolver = resolver or ReferenceResolver()

    def get_dependencies(self, parameter: ParameterLike, parameters: Iterable[ParameterLike]) -> List[ParameterLike]:
        return self.resolver.get_referenced_in(parameters, parameter.formula)

    def get_dependents(self, parameter: ParameterLike, parameters: Iterable[ParameterLike]) -> List[ParameterLike]:
        parameters = list(parameters)
        # Built-in parameters cannot hold formulas, so they are never dependents.
        # The cheap point query filters first; the set-aware check then drops
        # matches that are really part of a longer name.
        return [
            p for p in parameters
            if not p.is_built_in
            and self.resolver.is_referenced_in(parameter, p.formula)
            and self.resolver.references(parameters, p.formula, parameter)
        ]
