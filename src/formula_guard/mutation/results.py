# src/formula_guard/mutation/results.py
"""
Typed outcomes of a formula mutation attempt.

A rejected mutation is not an exception: `FormulaMutationGuard` returns a
`MutationResult` whose `error` is one of the `FormulaError` variants below.
Each variant is plain, frozen data that the host can inspect or serialize,
and each can render the same actionable report as the package's exceptions.
Callers who prefer exceptions can use `MutationResult.raise_for_error()`.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Hashable, Optional, Tuple

from ..errors import format_diagnostic_report
from ..formulas.cycles import CycleResult
from .exceptions import FormulaRejectedError
from .issue_codes import FormulaIssueCode, quote_names

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormulaError(ABC):
    """Base class of all rejection outcomes. `target_name` is the parameter being edited."""
    target_name: str

    @property
    @abstractmethod
    def issue_code(self) -> FormulaIssueCode:
        ...

    @property
    def code(self) -> str:
        return self.issue_code.code

    @property
    @abstractmethod
    def message(self) -> str:
        ...

    def __str__(self):
        return f"[{self.code}] {self.message}"

    def _context(self) -> Dict[str, Any]:
        return {'code': self.code, 'parameter': self.target_name}

    def _report(self, error_type: str, details: str, suggestion: str) -> str:
        return format_diagnostic_report(
            error_type=error_type,
            details=details,
            suggestion=suggestion,
            context=self._context(),
        )

    def get_diagnostic_report(self) -> str:
        return self._report("Formula Rejected", self.message, "")


@dataclass(frozen=True)
class UnknownReference(FormulaError):
    """
    The formula contains tokens that are not parameters, numbers or functions.

    When some of them look like unit suffixes, `parsable_as_value` tells the two
    likely causes apart: True means the whole formula reads as a literal with
    units ('12 ft'), False means the suffix-like tokens are probably misspelled
    names.
    """
    names: Tuple[str, ...]
    likely_unit_suffixes: Tuple[str, ...] = ()
    parsable_as_value: bool = False
    formula: Optional[str] = None

    @property
    def issue_code(self) -> FormulaIssueCode:
        if self.parsable_as_value:
            return FormulaIssueCode.REF_LITERAL_WITH_UNIT
        if self.likely_unit_suffixes:
            return FormulaIssueCode.REF_UNKNOWN_UNIT_SUFFIX
        return FormulaIssueCode.REF_UNKNOWN

    @property
    def message(self) -> str:
        return self.issue_code.format_message(
            target=self.target_name,
            names=quote_names(self.names),
            suffixes=quote_names(self.likely_unit_suffixes),
            formula=self.formula,
        )

    def _context(self) -> Dict[str, Any]:
        return dict(super()._context(), formula=self.formula)

    def get_diagnostic_report(self) -> str:
        if self.parsable_as_value:
            suggestion = "Set the literal as the parameter's value instead of as a formula."
        elif self.likely_unit_suffixes:
            suggestion = "If the value is a literal with units, set it as a value instead of a formula."
        else:
            suggestion = "Check the spelling of each name, or create the missing parameters first."
        return self._report("Unknown Reference", self.message, suggestion)


@dataclass(frozen=True)
class IllegalInstanceReference(FormulaError):
    """A type parameter's formula references instance parameters."""
    names: Tuple[str, ...]

    @property
    def issue_code(self) -> FormulaIssueCode:
        return FormulaIssueCode.REF_INSTANCE_FROM_TYPE

    @property
    def message(self) -> str:
        return self.issue_code.format_message(target=self.target_name, names=quote_names(self.names))

    def get_diagnostic_report(self) -> str:
        return self._report(
            "Illegal Instance Reference",
            self.message,
            "Make the target an instance parameter, or reference only type parameters.",
        )


@dataclass(frozen=True)
class TypeMismatch(FormulaError):
    """A formula copy was requested between parameters of different data types."""
    source_name: str
    source_type: Hashable
    target_type: Hashable

    @property
    def issue_code(self) -> FormulaIssueCode:
        return FormulaIssueCode.SRC_TYPE_MISMATCH

    @property
    def message(self) -> str:
        return self.issue_code.format_message(
            target=self.target_name,
            source=self.source_name,
            source_type=self.source_type,
            target_type=self.target_type,
        )

    def get_diagnostic_report(self) -> str:
        return self._report("Data Type Mismatch", self.message, "Copy formulas only between parameters of the same data type.")


@dataclass(frozen=True)
class EmptySourceFormula(FormulaError):
    """A formula copy was requested from a parameter that has no formula."""
    source_name: str

    @property
    def issue_code(self) -> FormulaIssueCode:
        return FormulaIssueCode.SRC_NO_FORMULA

    @property
    def message(self) -> str:
        return self.issue_code.format_message(target=self.target_name, source=self.source_name)


@dataclass(frozen=True)
class WouldCreateCycle(FormulaError):
    """The formula would close a circular reference chain."""
    cycle: CycleResult

    @property
    def issue_code(self) -> FormulaIssueCode:
        return FormulaIssueCode.CYCLE_WOULD_CREATE

    @property
    def message(self) -> str:
        direct = self.cycle.direct_reference
        return self.issue_code.format_message(
            target=self.target_name,
            direct_reference=direct.name if direct is not None else "",
            path=self.cycle.format_path(),
        )

    def get_diagnostic_report(self) -> str:
        details = (
            f"{self.message}\n\n"
            f"Full cycle: {self.target_name} -> {self.cycle.format_path()}"
        )
        return self._report(
            "Circular Formula Reference",
            details,
            "Remove the reference to one of the parameters on the cycle path.",
        )


@dataclass(frozen=True)
class CommitRejected(FormulaError):
    """The host's own commit step failed; `host_message` is the host's error text."""
    host_message: str
    suspicious_tokens: Tuple[str, ...] = ()

    @property
    def issue_code(self) -> FormulaIssueCode:
        if self.suspicious_tokens:
            return FormulaIssueCode.HOST_REJECTED_SUSPICIOUS
        return FormulaIssueCode.HOST_REJECTED

    @property
    def message(self) -> str:
        return self.issue_code.format_message(
            target=self.target_name,
            message=self.host_message,
            tokens=quote_names(self.suspicious_tokens),
        )

    def get_diagnostic_report(self) -> str:
        return self._report(
            "Commit Rejected By Host",
            self.message,
            "The formula passed local validation; see the host error for the reason it was refused.",
        )


@dataclass(frozen=True)
class MutationResult:
    """Result of a mutation attempt: success when `error` is None."""
    error: Optional[FormulaError] = None

    @classmethod
    def success(cls) -> "MutationResult":
        return cls()

    @classmethod
    def failure(cls, error: FormulaError) -> "MutationResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self):
        return self.ok

    def raise_for_error(self):
        """Raises `FormulaRejectedError` if the mutation was rejected."""
        if self.error is not None:
            raise FormulaRejectedError(self.error)
