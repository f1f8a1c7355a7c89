# src/formula_guard/formulas/cycles.py

"""
Pre-commit cycle detection for proposed formula edits.

Setting `target`'s formula adds edges target -> r for every parameter r the
new formula references. Those edges do not exist yet, so the search is rooted
at each r and follows the *current* formulas of the live snapshot: if some
path r -> ... -> target already exists, the new edge would close a loop.

Example: B references C and C references A. Proposing A = "B" yields
direct_reference = B and path = [B, C, A].
"""

import logging
from dataclasses import dataclass
from typing import Hashable, Iterable, Iterator, List, Optional, Set, Tuple

from ..data_structures import ParameterLike
from .references import ReferenceResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CycleResult:
    """Outcome of a cycle check. `path` runs from `direct_reference` to the target."""
    would_cycle: bool
    direct_reference: Optional[ParameterLike] = None
    path: Tuple[ParameterLike, ...] = ()

    @classmethod
    def no_cycle(cls) -> "CycleResult":
        return cls(would_cycle=False)

    @property
    def path_names(self) -> List[str]:
        return [p.name for p in self.path]

    def format_path(self) -> str:
        """Readable cycle path for error messages, e.g. 'B -> C -> A'."""
        if not self.would_cycle or not self.path:
            return ""
        return " -> ".join(self.path_names)


class CycleDetector:
    """
    Depth-first search over current formula references.

    The traversal uses an explicit stack, so reference chains of any length are
    handled without growing the interpreter stack. Nodes are entered in the
    same order a recursive search would enter them, which keeps the reported
    path stable.

    By default every root gets a fresh visited set. `share_visited=True` keeps
    one set across all roots of a single call instead; on a snapshot without
    existing cycles both settings report the same result.
    """

    def __init__(self, resolver: Optional[ReferenceResolver] = None, share_visited: bool = False):
        self.resolver = resolver or ReferenceResolver()
        self.share_visited = share_visited

    def detect_cycle(
        self,
        target: ParameterLike,
        proposed_formula: Optional[str],
        parameters: Iterable[ParameterLike],
    ) -> CycleResult:
        # Clearing a formula can never create a cycle.
        if not proposed_formula or not proposed_formula.strip():
            return CycleResult.no_cycle()

        parameters = list(parameters)
        directly_referenced = self.resolver.get_referenced_in(parameters, proposed_formula)

        shared: Set[Hashable] = set()
        for root in directly_referenced:
            visited = shared if self.share_visited else set()
            path = self._find_path(root, target, parameters, visited)
            if path is not None:
                result = CycleResult(would_cycle=True, direct_reference=root, path=tuple(path))
                logger.debug("Formula for '%s' would close the cycle %s", target.name, result.format_path())
                return result

        return CycleResult.no_cycle()

    def _references_of(self, node: ParameterLike, parameters: List[ParameterLike]) -> Iterator[ParameterLike]:
        return iter(self.resolver.get_referenced_in(parameters, node.formula))

    def _find_path(
        self,
        root: ParameterLike,
        target: ParameterLike,
        parameters: List[ParameterLike],
        visited: Set[Hashable],
    ) -> Optional[List[ParameterLike]]:
        """
        Returns the path root -> ... -> target through current formulas, or None.
        The target check precedes the visited check, so the target itself is
        never marked visited.
        """
        if root.id == target.id:
            return [root]
        if root.id in visited:
            return None
        visited.add(root.id)

        path = [root]
        stack = [self._references_of(root, parameters)]
        while stack:
            child = next(stack[-1], None)
            if child is None:
                # Exhausted: backtrack so a failed branch does not stay on the path.
                stack.pop()
                path.pop()
                continue
            if child.id == target.id:
                path.append(child)
                return path
            if child.id in visited:
                continue
            visited.add(child.id)
            path.append(child)
            stack.append(self._references_of(child, parameters))

        return None
