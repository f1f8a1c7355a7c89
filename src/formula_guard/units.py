# --- src/formula_guard/units.py ---
import logging
from tokenize import TokenError

import pint

logger = logging.getLogger(__name__)
ureg = pint.UnitRegistry()
logger.info("Pint Unit Registry initialized.")

# Unit suffixes written after numeric literals are short alphabetic symbols
# ("in", "ft", "mm", "deg"). Longer tokens are treated as parameter names even
# if pint happens to know them ("meter", "second").
MAX_UNIT_SUFFIX_LENGTH = 4


def looks_like_unit_suffix(token: str) -> bool:
    """
    Returns True if `token` is a short, purely alphabetic token that the pint
    registry resolves to a unit, e.g. the 'in' of '12 in'.
    """
    if not token or len(token) > MAX_UNIT_SUFFIX_LENGTH or not token.isalpha():
        return False
    try:
        ureg.get_name(token)
    except (pint.UndefinedUnitError, AttributeError, ValueError):
        return False
    return True


def parses_as_quantity(text: str) -> bool:
    """
    Returns True if pint reads the whole of `text` as a value with units,
    e.g. '12 ft' or '2.5 in'. Expressions naming anything pint does not know
    ('Wdth + 2 ft') are not quantities.
    """
    try:
        value = ureg.parse_expression(text)
    except (pint.errors.PintError, AttributeError, TypeError, ValueError, SyntaxError, TokenError):
        return False
    return isinstance(value, ureg.Quantity) and not value.dimensionless
