"""
===============================================================================
QUATROT - Truncated Decimal Formatting
===============================================================================
Rendering helpers for the human-readable string forms of the rotation
types. Values are truncated (toward zero) to a fixed number of fractional
digits instead of rounded, so 1.999999996 shown with 8 digits reads
1.99999999 rather than 2.

The truncation works on the shortest decimal expansion of the float
(``repr``), which is exact, rather than on ``value * 10**digits`` which can
land on the wrong side of an integer boundary.

These helpers are cosmetic only. No computation in the package depends on
them.
===============================================================================
"""

from decimal import Context, Decimal, ROUND_DOWN

import numpy as np

from quatrot.constants import DISPLAY_PRECISION


def _truncated_decimal(value: float, digits: int) -> Decimal:
    """Decimal expansion of ``value`` cut to ``digits`` fractional digits."""
    if digits < 0:
        raise ValueError(f"digits must be non-negative, got {digits}")
    exact = Decimal(repr(float(value)))
    # Enough significant digits for the integral part plus the kept fraction
    context = Context(prec=max(28, exact.adjusted() + digits + 2))
    return exact.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_DOWN,
                          context=context)


def truncate(value: float, digits: int = DISPLAY_PRECISION) -> float:
    """
    Truncate a float to ``digits`` fractional digits.

    Parameters
    ----------
    value : float
        Value to truncate. NaN and infinities are returned unchanged.
    digits : int, optional
        Number of fractional digits to keep (default 8).

    Returns
    -------
    float
        The truncated value.

    Examples
    --------
    >>> truncate(1.999999996, 8)
    1.99999999
    >>> truncate(-0.123456789, 3)
    -0.123
    """
    if not np.isfinite(value):
        return float(value)
    return float(_truncated_decimal(value, digits))


def format_truncated(value: float, digits: int = DISPLAY_PRECISION) -> str:
    """
    Render a float truncated to ``digits`` fractional digits.

    Trailing zeros are dropped and integral results are shown without a
    fractional part, e.g. ``3`` and ``0.70710678``. Negative zero renders
    as ``0``.
    """
    if not np.isfinite(value):
        return str(float(value))

    d = _truncated_decimal(value, digits)
    if d.is_zero():
        return "0"

    text = f"{d:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
