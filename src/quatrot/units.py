"""
Angle unit helpers.

Free functions rather than methods on the builtin numeric types, so nothing
outside this package changes behavior.
"""

from quatrot.constants import DEG2RAD, RAD2DEG


def deg(degrees: float) -> float:
    """Convert an angle in degrees to radians (``degrees * pi / 180``)."""
    return degrees * DEG2RAD


def rad2deg(radians: float) -> float:
    """Convert an angle in radians to degrees."""
    return radians * RAD2DEG
