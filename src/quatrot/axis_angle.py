"""
===============================================================================
QUATROT - Axis-Angle Representation
===============================================================================
A rotation expressed as a rotation axis plus a signed angle about it (right
hand rule). The same rotation has many axis-angle spellings:

    (n, theta) == (n, theta + 2*pi*k) == (-n, -theta)

normalize() picks the canonical one: a unit axis and an angle in [0, pi].

Display
-------
Two string forms are provided, both in units of pi:

    format_starred()  ->  AA* ( x: .., y: .., z: .. )
        axis pre-scaled by angle/pi, so one vector carries both the
        direction and the size of the rotation.

    format_raw()      ->  AA ( x: .., y: .., z: .., angle: ..pi )
        axis and angle/pi shown separately.
===============================================================================
"""

import logging
from dataclasses import dataclass, field, replace

import numpy as np

from quatrot.constants import DISPLAY_PRECISION, PI, TWO_PI
from quatrot.formatting import format_truncated
from quatrot.vector3 import Vector3

logger = logging.getLogger(__name__)

# Inputs are expected near the principal range. Beyond this many turns the
# angle is reduced with fmod first so the wrapping loop stays short.
_MAX_WRAP_TURNS = 64


def wrap_angle(angle: float) -> float:
    """
    Wrap an angle into (-pi, pi] by repeated addition/subtraction of 2*pi.

    Non-finite angles are returned unchanged.
    """
    if not np.isfinite(angle):
        return angle

    if abs(angle) > _MAX_WRAP_TURNS * TWO_PI:
        angle = float(np.fmod(angle, TWO_PI))

    while angle > PI:
        angle -= TWO_PI
    while angle <= -PI:
        angle += TWO_PI
    return angle


@dataclass(frozen=True)
class AxisAngle:
    """
    Immutable axis-angle rotation.

    Parameters
    ----------
    x, y, z : float
        Rotation axis components. Ideally unit length; see normalize().
    angle : float
        Rotation angle about the axis in radians.
    precision : int, optional
        Fractional digits shown by the string forms. Display only.

    Examples
    --------
    >>> aa = AxisAngle(0.0, 2.0, 0.0, -np.pi / 2).normalize()
    >>> aa.y, aa.angle
    (-1.0, 1.5707963267948966)
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    angle: float = 0.0
    precision: int = field(default=DISPLAY_PRECISION, compare=False)

    @staticmethod
    def from_axis(axis: Vector3, angle: float,
                  precision: int = DISPLAY_PRECISION) -> 'AxisAngle':
        """Build from a Vector3 axis and an angle in radians."""
        return AxisAngle(axis.x, axis.y, axis.z, angle, precision=precision)

    @property
    def axis(self) -> Vector3:
        """Rotation axis as a Vector3."""
        return Vector3(self.x, self.y, self.z, precision=self.precision)

    def normalize(self) -> 'AxisAngle':
        """
        Return the canonical form of this rotation.

        Steps:
            1. A zero-length axis has no direction; return self unchanged.
            2. Scale the axis to unit length.
            3. Wrap the angle into (-pi, pi].
            4. If the angle is negative, negate both the angle and the axis.

        Returns
        -------
        AxisAngle
            Unit axis and angle in [0, pi] describing the same rotation.
        """
        n = float(np.sqrt(self.x * self.x + self.y * self.y + self.z * self.z))
        if n == 0.0:
            logger.debug("Zero-length axis, axis-angle left as is")
            return self

        x, y, z = self.x / n, self.y / n, self.z / n
        angle = wrap_angle(self.angle)

        if angle < 0.0:
            angle = -angle
            x, y, z = -x, -y, -z

        return replace(self, x=x, y=y, z=z, angle=angle)

    def to_quaternion(self):
        """Quaternion for this rotation (see Quaternion.from_axis_angle)."""
        from quatrot.quaternion import Quaternion
        return Quaternion.from_axis_angle(self.axis, self.angle,
                                          precision=self.precision)

    def as_rotation_vector(self) -> Vector3:
        """Axis scaled by the angle (radians)."""
        return self.axis.scale(self.angle)

    # =========================================================================
    # DISPLAY
    # =========================================================================

    def format_starred(self, digits: int = None) -> str:
        """Axis scaled by angle/pi, truncated to ``digits`` places."""
        e = self.precision if digits is None else digits
        k = self.angle / PI
        return (f"AA* ( x: {format_truncated(self.x * k, e)}, "
                f"y: {format_truncated(self.y * k, e)}, "
                f"z: {format_truncated(self.z * k, e)} )")

    def format_raw(self, digits: int = None) -> str:
        """Axis and angle/pi shown separately, truncated to ``digits`` places."""
        e = self.precision if digits is None else digits
        return (f"AA ( x: {format_truncated(self.x, e)}, "
                f"y: {format_truncated(self.y, e)}, "
                f"z: {format_truncated(self.z, e)}, "
                f"angle: {format_truncated(self.angle / PI, e)}pi )")

    def __str__(self) -> str:
        return self.format_raw()
