# src/formula_guard/mutation/guard.py

"""
The single entry point through which formulas are changed.

`FormulaMutationGuard` runs every local check against the current snapshot
before it calls the host's commit function, in this order:

1. unknown references (tokens that match no parameter, number or function);
2. the type/instance constraint (type formulas may reference type parameters only);
3. circular references, reported with the exact cycle path;
4. the host commit itself, whose exceptions are translated into `CommitRejected`.

Each step short-circuits. Nothing is mutated unless every prior step passed,
so a rejected attempt leaves the model exactly as it was. Clearing a formula
skips straight to the commit because it can never break any of the checks.
"""

import logging
from typing import Any, Callable, Iterable, Optional

from ..data_structures import ParameterLike
from ..dialect import FormulaDialect
from ..formulas.cycles import CycleDetector
from ..formulas.references import ReferenceResolver
from ..units import looks_like_unit_suffix, parses_as_quantity
from .results import (
    CommitRejected,
    EmptySourceFormula,
    IllegalInstanceReference,
    MutationResult,
    TypeMismatch,
    UnknownReference,
    WouldCreateCycle,
)

logger = logging.getLogger(__name__)

CommitFn = Callable[[ParameterLike, Optional[str]], Any]


class FormulaMutationGuard:
    """
    Validates and commits formula edits against a parameter snapshot.

    The guard is stateless between calls; the snapshot and the commit function
    are supplied per call. The host is expected to serialize calls on the same
    model (e.g. inside one document transaction).
    """

    def __init__(
        self,
        dialect: Optional[FormulaDialect] = None,
        resolver: Optional[ReferenceResolver] = None,
        cycle_detector: Optional[CycleDetector] = None,
    ):
        self.resolver = resolver or ReferenceResolver(dialect)
        self.cycle_detector = cycle_detector or CycleDetector(self.resolver)

    def try_set_formula(
        self,
        target: ParameterLike,
        formula: Optional[str],
        parameters: Iterable[ParameterLike],
        commit_fn: CommitFn,
    ) -> MutationResult:
        if not formula or not formula.strip():
            return self._commit(target, None, commit_fn)

        parameters = list(parameters)

        invalid = self.resolver.get_invalid_references(parameters, formula)
        if invalid:
            suffixes = tuple(t for t in invalid if looks_like_unit_suffix(t))
            # A formula that pint reads as a whole quantity is a value typed into the formula field.
            parsable = bool(suffixes) and parses_as_quantity(formula)
            return self._reject(UnknownReference(target.name, tuple(invalid), suffixes, parsable, formula))

        referenced = self.resolver.get_referenced_in(parameters, formula)
        if not target.is_instance:
            instance_refs = tuple(p.name for p in referenced if p.is_instance)
            if instance_refs:
                return self._reject(IllegalInstanceReference(target.name, instance_refs))

        cycle = self.cycle_detector.detect_cycle(target, formula, parameters)
        if cycle.would_cycle:
            return self._reject(WouldCreateCycle(target.name, cycle))

        # Collected up front: they only matter if the host refuses the formula.
        suspicious = tuple(self.resolver.get_suspicious_tokens(parameters, formula))
        return self._commit(target, formula, commit_fn, suspicious)

    def try_set_formula_from_source(
        self,
        target: ParameterLike,
        source: ParameterLike,
        parameters: Iterable[ParameterLike],
        commit_fn: CommitFn,
    ) -> MutationResult:
        """Copies `source`'s formula verbatim onto `target`, then validates and commits it."""
        if not source.formula or not source.formula.strip():
            return self._reject(EmptySourceFormula(target.name, source.name))
        if source.data_type != target.data_type:
            return self._reject(TypeMismatch(target.name, source.name, source.data_type, target.data_type))
        return self.try_set_formula(target, source.formula, parameters, commit_fn)

    def unset_formula(self, target: ParameterLike, commit_fn: CommitFn) -> MutationResult:
        """Clears the target's formula. Always passes local validation."""
        return self._commit(target, None, commit_fn)

    def try_set_formula_unchecked(
        self,
        target: ParameterLike,
        formula: Optional[str],
        commit_fn: CommitFn,
    ) -> MutationResult:
        """
        Commits without local validation, for batch imports of trusted formulas.
        The host remains the final authority and its failures are still wrapped.
        """
        new_formula = formula if formula and formula.strip() else None
        return self._commit(target, new_formula, commit_fn)

    # --- Internals ---

    def _reject(self, error) -> MutationResult:
        logger.info("Rejected formula: %s", error)
        return MutationResult.failure(error)

    def _commit(self, target: ParameterLike, formula: Optional[str], commit_fn: CommitFn, suspicious=()) -> MutationResult:
        try:
            commit_fn(target, formula)
        except Exception as e:
            logger.warning("Host rejected formula for '%s': %s", target.name, e)
            return MutationResult.failure(CommitRejected(target.name, str(e) or type(e).__name__, tuple(suspicious)))
        if formula is None:
            logger.info("Cleared formula of '%s'.", target.name)
        else:
            logger.info("Committed formula for '%s': %s", target.name, formula)
        return MutationResult.success()
