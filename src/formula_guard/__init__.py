# src/formula_guard/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("formula-guard package initialized.")

from .data_structures import Parameter, ParameterLike, ParameterSet
from .dialect import FormulaDialect, DEFAULT_DIALECT, DialectLoader
from .formulas import (
    Tokenizer,
    ReferenceResolver,
    DependencyNavigator,
    CycleDetector,
    CycleResult,
    FormulaAnalyzer,
    FormulaChainResult,
    ReferenceGraph,
    CircularReferenceError,
)
from .mutation import (
    FormulaMutationGuard,
    MutationResult,
    FormulaError,
    UnknownReference,
    IllegalInstanceReference,
    TypeMismatch,
    EmptySourceFormula,
    WouldCreateCycle,
    CommitRejected,
    FormulaRejectedError,
)
from .errors import FormulaGuardError, DiagnosableError, ParameterSetError

__all__ = [
    # Data Structures
    "Parameter", "ParameterLike", "ParameterSet",
    # Dialect
    "FormulaDialect", "DEFAULT_DIALECT", "DialectLoader",
    # Analysis
    "Tokenizer", "ReferenceResolver", "DependencyNavigator",
    "CycleDetector", "CycleResult", "FormulaAnalyzer", "FormulaChainResult", "ReferenceGraph",
    # Mutation
    "FormulaMutationGuard", "MutationResult", "FormulaError",
    "UnknownReference", "IllegalInstanceReference", "TypeMismatch",
    "EmptySourceFormula", "WouldCreateCycle", "CommitRejected",
    # Top-Level Errors (Actionable Diagnostics)
    "FormulaGuardError", "DiagnosableError", "ParameterSetError",
    "FormulaRejectedError", "CircularReferenceError",
]
