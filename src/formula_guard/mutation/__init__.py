# src/formula_guard/mutation/__init__.py
import logging
logger = logging.getLogger(__name__)

from .issue_codes import FormulaIssueCode
from .results import (
    FormulaError,
    UnknownReference,
    IllegalInstanceReference,
    TypeMismatch,
    EmptySourceFormula,
    WouldCreateCycle,
    CommitRejected,
    MutationResult,
)
from .exceptions import FormulaRejectedError
from .guard import FormulaMutationGuard, CommitFn

__all__ = [
    "FormulaIssueCode",
    # Outcomes
    "FormulaError",
    "UnknownReference",
    "IllegalInstanceReference",
    "TypeMismatch",
    "EmptySourceFormula",
    "WouldCreateCycle",
    "CommitRejected",
    "MutationResult",
    "FormulaRejectedError",
    # Guard
    "FormulaMutationGuard",
    "CommitFn",
]
