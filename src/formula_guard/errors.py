# src/formula_guard/errors.py
import logging
from typing import Any, Dict, Protocol, abstractmethod
from typing import runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class FormulaGuardError(Exception):
    """Base class for all custom, user-facing errors in formula-guard."""
    pass


class ParameterSetError(FormulaGuardError):
    """
    Raised when a parameter snapshot cannot be constructed, e.g. because two
    parameters share an identity or a name.
    """
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """
    A protocol for objects that can generate their own rich diagnostic report.
    Both exceptions and the plain-data rejection outcomes of the mutation guard
    satisfy it.
    """
    def get_diagnostic_report(self) -> str:
        """Generates a complete, user-friendly, multi-line report string."""
        ...


class DiagnosableError(FormulaGuardError, Diagnosable):
    """
    A common, concrete base class for all internal exceptions that are diagnosable.

    Subclasses MUST implement `get_diagnostic_report`; the abstract declaration
    makes that explicit to readers and type checkers.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        """
        Abstract method to generate the diagnostic report.
        Subclasses MUST implement this.
        """
        raise NotImplementedError


# --- Stateless Formatting Utility ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    A stateless helper to format the final multi-line report string, ensuring a
    consistent look and feel for all user-facing diagnostics.

    Args:
        error_type: The high-level category of the error (e.g., "Unknown Reference").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue.
        context: A dictionary of contextual information (parameter, formula, code, source file).

    Returns:
        A formatted, user-friendly diagnostic report string ready for display.
    """
    lines = [
        "\n",
        "================ formula-guard: Actionable Diagnostic Report ================",
        f"Error Type:     {error_type}",
    ]
    if code := context.get('code'):
        lines.append(f"Code:           {code}")
    if parameter := context.get('parameter'):
        lines.append(f"Parameter:      {parameter}")
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")
    if formula := context.get('formula'):
        lines.append(f"Formula:        '{formula}'")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("=============================================================================")
    return "\n".join(lines)
