# src/formula_guard/mutation/exceptions.py
from typing import TYPE_CHECKING

from ..errors import DiagnosableError

if TYPE_CHECKING:
    from .results import FormulaError


class FormulaRejectedError(DiagnosableError):
    """
    Exception form of a rejected mutation, for callers that prefer raising.
    The typed outcome stays available on `.error`.
    """
    def __init__(self, error: "FormulaError"):
        self.error = error
        super().__init__(str(error))

    def get_diagnostic_report(self) -> str:
        return self.error.get_diagnostic_report()
