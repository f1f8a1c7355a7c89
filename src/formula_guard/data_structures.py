# src/formula_guard/data_structures.py
"""
Plain data structures describing the external parameter model.

The analysis services never create or destroy parameters. They read a
snapshot of the host's parameters through the `ParameterLike` protocol, so
any host object exposing the same attributes can be passed in directly.
`Parameter` and `ParameterSet` are the concrete, immutable versions used by
in-memory stores and by the test-suite.
"""

import logging
from dataclasses import dataclass, replace
from typing import Dict, Hashable, Iterable, Iterator, List, Optional, Protocol, Tuple
from typing import runtime_checkable

from .errors import ParameterSetError

logger = logging.getLogger(__name__)


@runtime_checkable
class ParameterLike(Protocol):
    """The read-only view of a host parameter that the analysis services rely on."""
    id: Hashable
    name: str
    is_instance: bool
    data_type: Hashable
    formula: Optional[str]
    is_built_in: bool


@dataclass(frozen=True)
class Parameter:
    """A single parameter of the parametric model."""
    id: Hashable
    name: str
    is_instance: bool = False
    data_type: Hashable = None
    formula: Optional[str] = None
    is_built_in: bool = False

    @property
    def has_formula(self) -> bool:
        return bool(self.formula and self.formula.strip())

    def __str__(self):
        kind = "instance" if self.is_instance else "type"
        return f"{self.name} ({kind})"


class ParameterSet:
    """
    An immutable, ordered snapshot of parameters.

    Iteration order is the order the parameters were supplied in; every query
    result of the analysis services follows that order.
    """

    def __init__(self, parameters: Iterable[ParameterLike] = ()):
        self._parameters: Tuple[ParameterLike, ...] = tuple(parameters)
        self._by_id: Dict[Hashable, ParameterLike] = {}
        self._by_name: Dict[str, ParameterLike] = {}
        for param in self._parameters:
            if param.id in self._by_id:
                raise ParameterSetError(f"Duplicate parameter id {param.id!r} ('{param.name}').")
            if param.name in self._by_name:
                raise ParameterSetError(f"Duplicate parameter name '{param.name}'.")
            self._by_id[param.id] = param
            self._by_name[param.name] = param

    def __iter__(self) -> Iterator[ParameterLike]:
        return iter(self._parameters)

    def __len__(self) -> int:
        return len(self._parameters)

    def __contains__(self, item) -> bool:
        return getattr(item, "id", None) in self._by_id

    def __repr__(self):
        return f"ParameterSet({[p.name for p in self._parameters]!r})"

    def names(self) -> List[str]:
        return [p.name for p in self._parameters]

    def get_by_id(self, param_id: Hashable) -> Optional[ParameterLike]:
        return self._by_id.get(param_id)

    def get_by_name(self, name: str) -> Optional[ParameterLike]:
        return self._by_name.get(name)

    def with_formula(self, parameter: ParameterLike, formula: Optional[str]) -> "ParameterSet":
        """
        Returns a new snapshot in which `parameter` carries `formula`.
        Blank formulas are stored as None, mirroring how a host clears a formula.
        Only valid for snapshots of `Parameter` dataclasses.
        """
        if parameter.id not in self._by_id:
            raise ParameterSetError(f"Parameter '{parameter.name}' is not part of this snapshot.")
        new_formula = formula if formula and formula.strip() else None
        return ParameterSet(
            replace(p, formula=new_formula) if p.id == parameter.id else p
            for p in self._parameters
        )
