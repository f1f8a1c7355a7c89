# src/formula_guard/formulas/__init__.py
from .exceptions import FormulaAnalysisError, CircularReferenceError
from .tokenizer import Tokenizer
from .references import ReferenceResolver
from .dependencies import DependencyNavigator
from .cycles import CycleDetector, CycleResult
from .analysis import FormulaAnalyzer, FormulaChainResult
from .graph import ReferenceGraph

__all__ = [
    # Exceptions
    "FormulaAnalysisError",
    "CircularReferenceError",
    # Core Services
    "Tokenizer",
    "ReferenceResolver",
    "DependencyNavigator",
    "CycleDetector",
    "CycleResult",
    "FormulaAnalyzer",
    "FormulaChainResult",
    "ReferenceGraph",
]
