"""
===============================================================================
QUATROT - Quaternion Mathematics
===============================================================================

Quaternion implementation for 3D rotations: construction from axis-angle
and Euler angles, Hamilton algebra, point rotation, and conversion back to
Euler angles and axis-angle.

Convention
----------
Scalar-first:

    q = [w, x, y, z] = w + x*i + y*j + z*k

A unit quaternion rotates a point p by the sandwich product

    p' = q * (0, p) * q_conjugate

so ``a.multiply(b)`` applies rotation b first, then rotation a.

Unlike many attitude libraries, the constructor does NOT normalize. The
type is a general quaternion; add/subtract/scalar products leave the unit
sphere, and repeated multiplication drifts off it. Call normalize()
explicitly where a rotation is needed.

Euler Angle Convention
----------------------
Aerospace 3-2-1 (ZYX) sequence, carried in a Vector3:
    x = roll  (phi)   about X
    y = pitch (theta) about Y
    z = yaw   (psi)   about Z

Degenerate cases
----------------
    normalize() of a zero quaternion
        Silent by default: the components become NaN, no exception and no
        numpy warning. normalize(strict=True) raises
        DegenerateRotationError instead.
    to_axis_angle() near the identity
        sin(angle/2) ~ 0, axis undefined: returns axis (1, 0, 0), angle 0.
    to_axis_angle() of a non-unit quaternion
        |w| > 1 beyond rounding: NaN angle and axis, silently.
    to_euler_angles() at gimbal lock
        |2(wy - zx)| >= 1: pitch clamped to +/- pi/2, asin never sees an
        out-of-domain argument.

References
----------
    [1] Diebel, "Representing Attitude: Euler Angles, Unit Quaternions, and
        Rotation Vectors", Stanford, 2006.
    [2] Kuipers, "Quaternions and Rotation Sequences", Princeton, 1999.

===============================================================================
"""

import logging
from typing import Union

import numpy as np

from quatrot.axis_angle import AxisAngle
from quatrot.constants import (
    AXIS_ANGLE_EPSILON, COMPARISON_TOLERANCE, DEFAULT_AXIS,
    DISPLAY_PRECISION, HALF_PI, UNIT_NORM_TOLERANCE,
)
from quatrot.formatting import format_truncated, truncate
from quatrot.vector3 import Vector3

logger = logging.getLogger(__name__)


class DegenerateRotationError(ValueError):
    """A quaternion with zero magnitude was asked to act as a rotation."""


class Quaternion:
    """
    Quaternion for 3D rotation representation.

    A unit quaternion q = [w, x, y, z] encodes a rotation by angle theta
    about unit axis n as:

        q = [cos(theta/2), sin(theta/2) * n_x, sin(theta/2) * n_y, sin(theta/2) * n_z]

    Instances are immutable; every method returns a new Quaternion.

    Attributes
    ----------
    w : float
        Scalar (real) component.
    x, y, z : float
        Vector (imaginary) components.
    precision : int
        Fractional digits shown by ``str()``. Display only.

    Examples
    --------
    >>> q = Quaternion.from_axis_angle(Vector3(0, 1, 0), np.pi / 2)
    >>> p = q.rotate_point(Vector3(3, 0, 1))  # ~ (1, 0, -3)
    """

    __slots__ = ("_q", "_precision")

    def __init__(self, w: float = 0.0, x: float = 0.0, y: float = 0.0,
                 z: float = 0.0, precision: int = DISPLAY_PRECISION) -> None:
        self._q = np.array([w, x, y, z], dtype=np.float64)
        self._q.flags.writeable = False
        self._precision = precision

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def precision(self) -> int:
        """Fractional digits shown by str()."""
        return self._precision

    @property
    def w(self) -> float:
        """Scalar (real) part of the quaternion."""
        return float(self._q[0])

    @property
    def x(self) -> float:
        """First imaginary component (i-axis)."""
        return float(self._q[1])

    @property
    def y(self) -> float:
        """Second imaginary component (j-axis)."""
        return float(self._q[2])

    @property
    def z(self) -> float:
        """Third imaginary component (k-axis)."""
        return float(self._q[3])

    @property
    def vector(self) -> Vector3:
        """Vector (imaginary) part as a Vector3."""
        return Vector3(self.x, self.y, self.z, precision=self.precision)

    @property
    def components(self) -> np.ndarray:
        """Copy of the components as a 4-element array [w, x, y, z]."""
        return self._q.copy()

    def _new(self, q: np.ndarray) -> 'Quaternion':
        return Quaternion(q[0], q[1], q[2], q[3], precision=self.precision)

    # =========================================================================
    # STATIC FACTORY METHODS
    # =========================================================================

    @staticmethod
    def identity(precision: int = DISPLAY_PRECISION) -> 'Quaternion':
        """The identity rotation [1, 0, 0, 0]."""
        return Quaternion(1.0, 0.0, 0.0, 0.0, precision=precision)

    @staticmethod
    def from_axis_angle(axis: Vector3, angle: float,
                        precision: int = DISPLAY_PRECISION) -> 'Quaternion':
        """
        Create a quaternion from a rotation axis and angle.

            q = normalize([cos(angle/2), sin(angle/2) * axis])

        Parameters
        ----------
        axis : Vector3
            Rotation axis. It is not validated or normalized here. A
            non-unit axis still gives a unit quaternion, but one that
            encodes a different rotation than intended.
        angle : float
            Rotation angle in radians.
        precision : int, optional
            Display precision of the result.

        Returns
        -------
        Quaternion
            Unit quaternion. The scalar part cos(angle/2) is never exactly
            zero for a finite angle, so even a zero axis normalizes to
            +/- identity; an infinite angle gives NaN components.
        """
        half_angle = angle / 2.0
        with np.errstate(invalid='ignore'):
            s = np.sin(half_angle)
            c = np.cos(half_angle)
        q = Quaternion(c, axis.x * s, axis.y * s, axis.z * s,
                       precision=precision)
        return q.normalize()

    @staticmethod
    def from_axis_angle_value(aa: AxisAngle) -> 'Quaternion':
        """Create a quaternion from an AxisAngle value."""
        return Quaternion.from_axis_angle(aa.axis, aa.angle,
                                          precision=aa.precision)

    @staticmethod
    def from_euler_angles(v: Vector3,
                          precision: int = DISPLAY_PRECISION) -> 'Quaternion':
        """
        Create a quaternion from 3-2-1 (ZYX) Euler angles.

        Parameters
        ----------
        v : Vector3
            Euler angles in radians: x = roll, y = pitch, z = yaw.

        Returns
        -------
        Quaternion
            Rotation equivalent to the Euler sequence. The half-angle
            product is unit by construction and is not re-normalized.

        Notes
        -----
        Closed form of q = q_z(yaw) * q_y(pitch) * q_x(roll), see [1] Eq. 290.
        """
        roll, pitch, yaw = v.x, v.y, v.z

        cy = np.cos(yaw * 0.5)
        sy = np.sin(yaw * 0.5)
        cr = np.cos(roll * 0.5)
        sr = np.sin(roll * 0.5)
        cp = np.cos(pitch * 0.5)
        sp = np.sin(pitch * 0.5)

        return Quaternion(
            cy * cr * cp + sy * sr * sp,
            cy * sr * cp - sy * cr * sp,
            cy * cr * sp + sy * sr * cp,
            sy * cr * cp - cy * sr * sp,
            precision=precision,
        )

    # =========================================================================
    # QUATERNION ARITHMETIC
    # =========================================================================

    def add(self, other: 'Quaternion') -> 'Quaternion':
        """Component-wise sum. Not a rotation operation; not normalized."""
        return self._new(self._q + other._q)

    def subtract(self, other: 'Quaternion') -> 'Quaternion':
        """Component-wise difference. Not normalized."""
        return self._new(self._q - other._q)

    def multiply(self, other: 'Quaternion') -> 'Quaternion':
        """
        Hamilton product self * other.

        Not commutative. Under the rotate_point convention the product
        rotates by ``other`` first and then by ``self``.

            (a1 + b1*i + c1*j + d1*k) * (a2 + b2*i + c2*j + d2*k) =

            (a1*a2 - b1*b2 - c1*c2 - d1*d2) +
            (a1*b2 + b1*a2 + c1*d2 - d1*c2) i +
            (a1*c2 - b1*d2 + c1*a2 + d1*b2) j +
            (a1*d2 + b1*c2 - c1*b2 + d1*a2) k

        The result is not normalized; norm drift accumulates over long
        products.
        """
        a1, b1, c1, d1 = self.w, self.x, self.y, self.z
        a2, b2, c2, d2 = other.w, other.x, other.y, other.z

        return Quaternion(
            a1 * a2 - b1 * b2 - c1 * c2 - d1 * d2,
            a1 * b2 + b1 * a2 + c1 * d2 - d1 * c2,
            a1 * c2 - b1 * d2 + c1 * a2 + d1 * b2,
            a1 * d2 + b1 * c2 - c1 * b2 + d1 * a2,
            precision=self.precision,
        )

    def conjugate(self) -> 'Quaternion':
        """
        Return [w, -x, -y, -z].

        For a unit quaternion this is the inverse, the reverse rotation.
        """
        return Quaternion(self.w, -self.x, -self.y, -self.z,
                          precision=self.precision)

    def inverse(self) -> 'Quaternion':
        """
        Multiplicative inverse q* / |q|^2.

        Follows the same zero-magnitude policy as normalize(): non-finite
        components, no exception.
        """
        norm_sq = float(np.dot(self._q, self._q))
        conj = self.conjugate()._q
        with np.errstate(divide='ignore', invalid='ignore'):
            return self._new(conj / np.float64(norm_sq))

    def magnitude(self) -> float:
        """Euclidean norm sqrt(w^2 + x^2 + y^2 + z^2)."""
        return float(np.linalg.norm(self._q))

    def normalize(self, strict: bool = False) -> 'Quaternion':
        """
        Return this quaternion scaled to unit magnitude.

        Parameters
        ----------
        strict : bool, optional
            If False (default) a zero quaternion silently produces NaN
            components, the legacy behavior. If True it raises.

        Returns
        -------
        Quaternion
            A new quaternion with |q| = 1 for any non-zero input.

        Raises
        ------
        DegenerateRotationError
            If ``strict`` and the magnitude is zero.
        """
        n = self.magnitude()

        if n == 0.0:
            if strict:
                raise DegenerateRotationError(
                    "Cannot normalize a zero quaternion: it does not "
                    "describe a rotation."
                )
            logger.debug("Normalizing a zero quaternion, result is NaN")

        with np.errstate(divide='ignore', invalid='ignore'):
            return self._new(self._q / np.float64(n))

    def is_unit(self, tolerance: float = UNIT_NORM_TOLERANCE) -> bool:
        """True if |q| is within ``tolerance`` of 1."""
        return abs(self.magnitude() - 1.0) < tolerance

    # =========================================================================
    # ROTATION OPERATIONS
    # =========================================================================

    def rotate_point(self, p: Vector3) -> Vector3:
        """
        Rotate a 3D point by this quaternion.

            p' = q * (0, p) * q*

        Only meaningful for a unit quaternion; the norm is not checked.

        Parameters
        ----------
        p : Vector3
            Point to rotate.

        Returns
        -------
        Vector3
            Vector part of the sandwich product.
        """
        pure = Quaternion(0.0, p.x, p.y, p.z)
        r = self.multiply(pure).multiply(self.conjugate())
        return Vector3(r.x, r.y, r.z, precision=p.precision)

    # =========================================================================
    # CONVERSION METHODS
    # =========================================================================

    def to_euler_angles(self) -> Vector3:
        """
        Convert to 3-2-1 (ZYX) Euler angles.

            roll  = atan2(2*(w*x + y*z), 1 - 2*(x^2 + y^2))
            pitch = asin(2*(w*y - z*x))
            yaw   = atan2(2*(w*z + x*y), 1 - 2*(y^2 + z^2))

        Returns
        -------
        Vector3
            (roll, pitch, yaw) in radians. roll and yaw in [-pi, pi],
            pitch in [-pi/2, pi/2].

        Notes
        -----
        Near gimbal lock the pitch argument can overshoot [-1, 1] by a few
        ulps. When |argument| >= 1 the pitch is set to pi/2 with the sign of
        the argument (zero counts as positive) instead of calling asin.
        """
        w, x, y, z = self.w, self.x, self.y, self.z

        # Roll (x-axis rotation)
        sinr = 2.0 * (w * x + y * z)
        cosr = 1.0 - 2.0 * (x * x + y * y)
        roll = float(np.arctan2(sinr, cosr))

        # Pitch (y-axis rotation)
        sinp = 2.0 * (w * y - z * x)
        if abs(sinp) >= 1.0:
            pitch = HALF_PI if sinp >= 0.0 else -HALF_PI
        else:
            pitch = float(np.arcsin(sinp))

        # Yaw (z-axis rotation)
        siny = 2.0 * (w * z + x * y)
        cosy = 1.0 - 2.0 * (y * y + z * z)
        yaw = float(np.arctan2(siny, cosy))

        return Vector3(roll, pitch, yaw, precision=self.precision)

    def to_axis_angle(self, epsilon: float = AXIS_ANGLE_EPSILON) -> AxisAngle:
        """
        Convert to axis-angle.

            angle = 2 * acos(w)
            axis  = [x, y, z] / sqrt(1 - w^2)

        Parameters
        ----------
        epsilon : float, optional
            Threshold on sqrt(1 - w^2) = |sin(angle/2)| below which the
            axis is treated as undefined (default 1e-4).

        Returns
        -------
        AxisAngle
            Axis and angle in [0, 2*pi]. When the axis is undefined
            (rotation by ~0 or ~2*pi), axis (1, 0, 0) with angle 0.

        Notes
        -----
        A scalar that overshoots [-1, 1] by at most UNIT_NORM_TOLERANCE is
        rounding on a unit quaternion and is clamped. A larger |w| means a
        non-unit input; the formulas then yield NaN silently, the same
        policy as normalize().
        """
        w = self.w
        if abs(w) > 1.0 and abs(w) - 1.0 <= UNIT_NORM_TOLERANCE:
            w = 1.0 if w > 0.0 else -1.0

        with np.errstate(invalid='ignore'):
            angle = 2.0 * float(np.arccos(w))
            d = float(np.sqrt(1.0 - w * w))

        if d < epsilon:
            logger.debug("Rotation axis undefined (sin(angle/2) = %.3e), "
                         "using default axis", d)
            return AxisAngle(*DEFAULT_AXIS, 0.0, precision=self.precision)

        return AxisAngle(self.x / d, self.y / d, self.z / d, angle,
                         precision=self.precision)

    # =========================================================================
    # COMPARISON / DISPLAY
    # =========================================================================

    def same_rotation(self, other: 'Quaternion',
                      tolerance: float = COMPARISON_TOLERANCE) -> bool:
        """True if both encode the same rotation (q and -q are equivalent)."""
        diff_pos = np.linalg.norm(self._q - other._q)
        diff_neg = np.linalg.norm(self._q + other._q)
        return bool(min(diff_pos, diff_neg) < tolerance)

    def is_close(self, other: 'Quaternion',
                 tolerance: float = COMPARISON_TOLERANCE) -> bool:
        """True if the components differ by less than ``tolerance`` (L2)."""
        return bool(np.linalg.norm(self._q - other._q) < tolerance)

    def copy(self) -> 'Quaternion':
        return self._new(self._q)

    def to_fixed_down(self) -> 'Quaternion':
        """Copy with each component truncated to ``precision`` digits."""
        e = self.precision
        return Quaternion(truncate(self.w, e), truncate(self.x, e),
                          truncate(self.y, e), truncate(self.z, e),
                          precision=e)

    def __mul__(self, other: Union['Quaternion', float, int]) -> 'Quaternion':
        """
        Quaternion * Quaternion -> Hamilton product.
        Quaternion * scalar     -> component-wise scaling (not unit).
        """
        if isinstance(other, Quaternion):
            return self.multiply(other)
        elif isinstance(other, (int, float)):
            return self._new(self._q * float(other))
        return NotImplemented

    def __rmul__(self, other: Union[float, int]) -> 'Quaternion':
        if isinstance(other, (int, float)):
            return self._new(self._q * float(other))
        return NotImplemented

    def __add__(self, other: 'Quaternion') -> 'Quaternion':
        if isinstance(other, Quaternion):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other: 'Quaternion') -> 'Quaternion':
        if isinstance(other, Quaternion):
            return self.subtract(other)
        return NotImplemented

    def __neg__(self) -> 'Quaternion':
        return self._new(-self._q)

    def __eq__(self, other: object) -> bool:
        """
        Exact component-wise equality, consistent with __hash__.

        Use is_close() for a tolerance and same_rotation() to treat q and -q
        as equal.
        """
        if not isinstance(other, Quaternion):
            return NotImplemented
        return bool(np.array_equal(self._q, other._q))

    def __hash__(self) -> int:
        # float hash already maps 0.0 and -0.0 together
        return hash(tuple(float(c) for c in self._q))

    def __repr__(self) -> str:
        return (f"Quaternion(w={self.w:+.8f}, x={self.x:+.8f}, "
                f"y={self.y:+.8f}, z={self.z:+.8f})")

    def __str__(self) -> str:
        e = self.precision
        return (f"Q ( {format_truncated(self.w, e)} + "
                f"{format_truncated(self.x, e)} i + "
                f"{format_truncated(self.y, e)} j + "
                f"{format_truncated(self.z, e)} k )")


def compose(*rotations: Quaternion) -> Quaternion:
    """
    Compose rotations given in application order.

    ``compose(a, b, c)`` rotates by a, then b, then c, i.e. c * b * a.
    Not normalized.
    """
    if not rotations:
        return Quaternion.identity()
    result = rotations[0]
    for q in rotations[1:]:
        result = q.multiply(result)
    return result

