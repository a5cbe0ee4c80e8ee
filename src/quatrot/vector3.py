"""
===============================================================================
QUATROT - 3D Vector Value
===============================================================================
Plain 3D point/direction value used as the input and output of the rotation
conversions (Euler angles are carried as roll/pitch/yaw in x/y/z).

Vector3 is immutable: every operation returns a new instance. No
validation is performed, so NaN and infinities pass through unchanged.
===============================================================================
"""

from dataclasses import dataclass, field, replace
from typing import Iterator, Sequence

import numpy as np

from quatrot.constants import DISPLAY_PRECISION
from quatrot.formatting import format_truncated, truncate


@dataclass(frozen=True)
class Vector3:
    """
    Immutable 3D vector.

    Parameters
    ----------
    x, y, z : float
        Components. Default to zero.
    precision : int, optional
        Fractional digits shown by ``str()``. Display only, ignored by
        equality.

    Examples
    --------
    >>> v = Vector3(3.0, 0.0, 1.0)
    >>> str(v)
    'V ( x: 3, y: 0, z: 1 )'
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    precision: int = field(default=DISPLAY_PRECISION, compare=False)

    @staticmethod
    def from_array(values: Sequence[float],
                   precision: int = DISPLAY_PRECISION) -> 'Vector3':
        """Build a vector from any 3-element sequence or numpy array."""
        arr = np.asarray(values, dtype=np.float64)
        if arr.shape != (3,):
            raise ValueError(f"Vector3 needs 3 components, got shape {arr.shape}")
        return Vector3(float(arr[0]), float(arr[1]), float(arr[2]),
                       precision=precision)

    def as_array(self) -> np.ndarray:
        """Components as a float64 numpy array [x, y, z]."""
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))

    def __neg__(self) -> 'Vector3':
        return replace(self, x=-self.x, y=-self.y, z=-self.z)

    def scale(self, factor: float) -> 'Vector3':
        """Multiply every component by ``factor``."""
        return replace(self, x=self.x * factor, y=self.y * factor,
                       z=self.z * factor)

    def magnitude(self) -> float:
        """Euclidean length."""
        return float(np.linalg.norm(self.as_array()))

    def normalize(self) -> 'Vector3':
        """
        Return the unit vector in the same direction.

        A zero vector has no direction and is returned unchanged.
        """
        n = self.magnitude()
        if n == 0.0:
            return self
        return self.scale(1.0 / n)

    def to_fixed_down(self) -> 'Vector3':
        """Copy with each component truncated to ``precision`` digits."""
        e = self.precision
        return replace(self, x=truncate(self.x, e), y=truncate(self.y, e),
                       z=truncate(self.z, e))

    def __str__(self) -> str:
        e = self.precision
        return (f"V ( x: {format_truncated(self.x, e)}, "
                f"y: {format_truncated(self.y, e)}, "
                f"z: {format_truncated(self.z, e)} )")
