# src/formula_guard/formulas/exceptions.py
"""
Diagnosable exceptions of the formula analysis subsystem.

Normal validation outcomes are returned as data by the mutation guard. The
errors here are raised only when a snapshot that should already be acyclic
turns out not to be, i.e. when the host's own state is inconsistent.
"""

from dataclasses import dataclass
from typing import List

from ..errors import DiagnosableError, format_diagnostic_report


class FormulaAnalysisError(DiagnosableError):
    """A concrete base class for all formula analysis errors."""
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Formula Analysis Error",
            details=str(self),
            suggestion="Review the formulas of the parameters involved.",
            context={}
        )


@dataclass(frozen=True)
class CircularReferenceError(FormulaAnalysisError):
    """Raised when an existing snapshot already contains a circular reference chain."""
    cycle: List[str]

    def __str__(self):
        # Close the loop for display, e.g. A -> B -> A
        cycle_display = self.cycle + [self.cycle[0]] if self.cycle and self.cycle[0] != self.cycle[-1] else self.cycle
        return f"Circular reference detected: {' -> '.join(cycle_display)}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Circular Formula Reference",
            details=f"The formulas of the following parameters reference each other in a loop:\n{' -> '.join(self.cycle)}",
            suggestion="Break the loop by clearing or rewriting the formula of one of the parameters.",
            context={'parameter': self.cycle[0] if self.cycle else None}
        )
