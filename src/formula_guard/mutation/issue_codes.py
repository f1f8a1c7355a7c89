# src/formula_guard/mutation/issue_codes.py
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class FormulaIssueCode(Enum):
    """
    Registry of formula rejection codes and their message templates.
    Each enum member's value is a tuple: (code_str, message_template_str).
    """

    # --- Reference Issues (REF_...) ---
    REF_UNKNOWN = ("REF_UNKNOWN", "Cannot set formula on parameter '{target}'. Formula references non-existent parameters: {names}.")
    REF_UNKNOWN_UNIT_SUFFIX = ("REF_UNKNOWN_UNIT_SUFFIX", "Cannot set formula on parameter '{target}'. Formula references non-existent parameters: {names}. Found tokens that look like unit suffixes: {suffixes}. If this is intended as a literal value, set it as a value instead; if it is a formula, these may be misspelled parameter names.")
    REF_LITERAL_WITH_UNIT = ("REF_LITERAL_WITH_UNIT", "Cannot set formula on parameter '{target}'. The value '{formula}' appears to be a literal with a unit suffix, not a formula. Formulas do not support unit suffixes like {suffixes}; set it as a value instead.")
    REF_INSTANCE_FROM_TYPE = ("REF_INSTANCE_FROM_TYPE", "Cannot set formula on type parameter '{target}'. Type parameter formulas cannot reference instance parameters: {names}.")

    # --- Cycle Issues (CYCLE_...) ---
    CYCLE_WOULD_CREATE = ("CYCLE_WOULD_CREATE", "Cannot set formula on parameter '{target}'. '{direct_reference}' already depends on '{target}': {path}.")

    # --- Copy-From-Source Issues (SRC_...) ---
    SRC_TYPE_MISMATCH = ("SRC_TYPE_MISMATCH", "Cannot set formula on parameter '{target}'. Source parameter '{source}' has data type '{source_type}' but target has data type '{target_type}'.")
    SRC_NO_FORMULA = ("SRC_NO_FORMULA", "Cannot set formula on parameter '{target}'. Source parameter '{source}' has no formula.")

    # --- Host Issues (HOST_...) ---
    HOST_REJECTED = ("HOST_REJECTED", "Cannot set formula on parameter '{target}'. Host error: {message}")
    HOST_REJECTED_SUSPICIOUS = ("HOST_REJECTED_SUSPICIOUS", "Cannot set formula on parameter '{target}'. The host rejected the formula. Found tokens that may be numeric literals with unrecognized unit formats: {tokens}. Host error: {message}")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def template(self) -> str:
        return self.value[1]

    def format_message(self, **kwargs) -> str:
        """Formats the message template with provided keyword arguments."""
        try:
            return self.template.format(**kwargs)
        except KeyError as e:
            logger.error(f"Missing key {e} for formatting message template of {self.name} (code: {self.code}): '{self.template}'. Provided args: {kwargs}")
            return f"Error formatting message for {self.code}: Missing key {e}. Template: '{self.template}' Args: {kwargs}"


def quote_names(names) -> str:
    """Renders names as a comma-separated list of quoted strings: 'A', 'B'."""
    return ", ".join(f"'{n}'" for n in names)
