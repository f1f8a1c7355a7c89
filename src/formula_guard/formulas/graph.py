# src/formula_guard/formulas/graph.py

"""
Whole-snapshot audit of the reference relation.

The guard never needs a materialized graph: it answers one question about one
proposed edit. Hosts sometimes need the global picture as well, e.g. after
importing a model that was never validated, or to process parameters in
dependency order. `ReferenceGraph` builds a networkx `DiGraph` on demand from
one snapshot and is discarded afterwards; it is never kept across mutations.

Edges point from a parameter to the parameters its formula references
(A -> B means "A's formula mentions B").
"""

import logging
from typing import Iterable, List, Optional

import networkx as nx

from ..data_structures import ParameterLike
from .exceptions import CircularReferenceError, FormulaAnalysisError
from .references import ReferenceResolver

logger = logging.getLogger(__name__)


class ReferenceGraph:
    def __init__(self, parameters: Iterable[ParameterLike], resolver: Optional[ReferenceResolver] = None):
        self.resolver = resolver or ReferenceResolver()
        self.parameters: List[ParameterLike] = list(parameters)
        self.graph = self._build()

    def _build(self) -> nx.DiGraph:
        graph = nx.DiGraph()
        for param in self.parameters:
            graph.add_node(param.id, parameter=param)
        for param in self.parameters:
            for dep in self.resolver.get_referenced_in(self.parameters, param.formula):
                graph.add_edge(param.id, dep.id)
        logger.debug(
            "Built reference graph: %d parameters, %d references.",
            graph.number_of_nodes(), graph.number_of_edges(),
        )
        return graph

    def _param(self, node_id) -> ParameterLike:
        return self.graph.nodes[node_id]['parameter']

    def find_cycles(self) -> List[List[str]]:
        """All elementary reference cycles, each as a list of parameter names."""
        try:
            cycles = list(nx.simple_cycles(self.graph))
        except nx.NetworkXError as e:
            raise FormulaAnalysisError(f"NetworkX error during cycle check: {e}") from e
        return [[self._param(n).name for n in cycle] for cycle in cycles]

    def check_acyclic(self):
        """Raises CircularReferenceError for the first cycle found, if any."""
        cycles = self.find_cycles()
        if cycles:
            logger.warning("Snapshot contains %d reference cycle(s).", len(cycles))
            raise CircularReferenceError(cycle=cycles[0])

    def dependency_order(self) -> List[ParameterLike]:
        """
        Parameters ordered so that every parameter comes after everything its
        formula references.
        """
        try:
            order = list(nx.topological_sort(self.graph.reverse(copy=False)))
        except nx.NetworkXUnfeasible:
            self.check_acyclic()
            raise CircularReferenceError(cycle=[])
        return [self._param(n) for n in order]

    def get_all_dependents(self, parameter: ParameterLike) -> List[ParameterLike]:
        """Every parameter that depends on `parameter`, directly or transitively."""
        if parameter.id not in self.graph:
            return []
        ids = nx.ancestors(self.graph, parameter.id)
        return [p for p in self.parameters if p.id in ids]

    def get_all_dependencies(self, parameter: ParameterLike) -> List[ParameterLike]:
        """Every parameter `parameter` depends on, directly or transitively."""
        if parameter.id not in self.graph:
            return []
        ids = nx.descendants(self.graph, parameter.id)
        return [p for p in self.parameters if p.id in ids]
