"""
===============================================================================
QUATROT - Axis-Angle Test Suite
===============================================================================
Tests for AxisAngle canonicalization (axis normalization, angle wrapping,
sign folding), the zero-axis guard, and the two display forms.
===============================================================================
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest
from numpy.testing import assert_allclose

from quatrot.axis_angle import AxisAngle, wrap_angle
from quatrot.quaternion import Quaternion
from quatrot.units import deg
from quatrot.vector3 import Vector3


# =============================================================================
# Test: Angle wrapping
# =============================================================================

class TestWrapAngle:
    """Tests for wrapping into (-pi, pi]."""

    @pytest.mark.parametrize("angle,expected", [
        (0.0, 0.0),
        (np.pi, np.pi),
        (-np.pi, np.pi),
        (deg(200), deg(-160)),
        (deg(-200), deg(160)),
        (5 * np.pi / 2, np.pi / 2),
        (-7 * np.pi / 2, np.pi / 2),
    ])
    def test_wrap(self, angle, expected):
        assert_allclose(wrap_angle(angle), expected, atol=1e-12)

    def test_wrap_range(self):
        for angle in np.linspace(-20.0, 20.0, 81):
            w = wrap_angle(float(angle))
            assert -np.pi < w <= np.pi

    def test_large_angle_terminates(self):
        w = wrap_angle(1e6)
        assert -np.pi < w <= np.pi
        assert_allclose(np.sin(w), np.sin(1e6), atol=1e-6)

    @pytest.mark.parametrize("angle", [np.inf, -np.inf])
    def test_infinite_angle_unchanged(self, angle):
        assert wrap_angle(angle) == angle

    def test_nan_angle_unchanged(self):
        assert np.isnan(wrap_angle(float('nan')))


# =============================================================================
# Test: Normalize
# =============================================================================

class TestNormalize:
    """Tests for AxisAngle.normalize()."""

    def test_default_construction(self):
        aa = AxisAngle()
        assert (aa.x, aa.y, aa.z, aa.angle) == (0.0, 0.0, 0.0, 0.0)

    def test_zero_axis_unchanged(self):
        """No direction to canonicalize: the value comes back as is."""
        aa = AxisAngle(0.0, 0.0, 0.0, deg(250))
        assert aa.normalize() is aa

    def test_axis_normalized(self):
        aa = AxisAngle(0.0, 3.0, 4.0, 0.5).normalize()
        assert_allclose(aa.axis.as_array(), [0.0, 0.6, 0.8], atol=1e-15)
        assert aa.angle == 0.5

    def test_200_degrees_flips_axis(self):
        """200 deg about +Y is 160 deg about -Y."""
        aa = AxisAngle(0.0, 1.0, 0.0, deg(200)).normalize()
        assert_allclose(aa.angle, deg(160), atol=1e-12)
        assert 0.0 <= aa.angle <= np.pi
        assert_allclose(aa.axis.as_array(), [0.0, -1.0, 0.0], atol=1e-15)

    def test_negative_angle_flips_axis(self):
        aa = AxisAngle(1.0, 0.0, 0.0, -0.3).normalize()
        assert_allclose(aa.angle, 0.3)
        assert_allclose(aa.axis.as_array(), [-1.0, 0.0, 0.0])

    def test_does_not_mutate_receiver(self):
        aa = AxisAngle(0.0, 2.0, 0.0, deg(200))
        aa.normalize()
        assert (aa.x, aa.y, aa.z, aa.angle) == (0.0, 2.0, 0.0, deg(200))

    @pytest.mark.parametrize("axis,angle", [
        ([0, 1, 0], deg(200)),
        ([1, 2, 3], -2.0),
        ([0, 0, -5], 9.0),
        ([1, -1, 0], -deg(30)),
    ])
    def test_same_rotation_after_normalize(self, axis, angle):
        """Canonicalization never changes the rotation itself."""
        aa = AxisAngle(*axis, angle)
        before = Quaternion.from_axis_angle(aa.axis.normalize(), aa.angle)
        after = aa.normalize().to_quaternion()
        assert before.same_rotation(after, tolerance=1e-12)

    def test_precision_kept(self):
        aa = AxisAngle(0.0, 2.0, 0.0, 1.0, precision=3).normalize()
        assert aa.precision == 3


# =============================================================================
# Test: Conversions
# =============================================================================

class TestConversions:
    """Tests for AxisAngle helpers."""

    def test_from_axis(self):
        aa = AxisAngle.from_axis(Vector3(0.0, 0.0, 1.0), 1.2)
        assert aa == AxisAngle(0.0, 0.0, 1.0, 1.2)

    def test_rotation_vector(self):
        aa = AxisAngle(0.0, 0.0, 1.0, 1.5)
        assert aa.as_rotation_vector() == Vector3(0.0, 0.0, 1.5)

    def test_quaternion_roundtrip_canonical(self):
        aa = AxisAngle(0.0, 1.0, 0.0, deg(200)).normalize()
        back = aa.to_quaternion().to_axis_angle().normalize()
        assert_allclose(back.angle, aa.angle, atol=1e-9)
        assert_allclose(back.axis.as_array(), aa.axis.as_array(), atol=1e-9)


# =============================================================================
# Test: Display
# =============================================================================

class TestDisplay:
    """Tests for the starred and raw string forms."""

    def test_raw(self):
        aa = AxisAngle(0.0, 1.0, 0.0, np.pi)
        assert aa.format_raw() == "AA ( x: 0, y: 1, z: 0, angle: 1pi )"
        assert str(aa) == aa.format_raw()

    def test_starred_scales_axis(self):
        aa = AxisAngle(0.0, 1.0, 0.0, np.pi / 2)
        assert aa.format_starred() == "AA* ( x: 0, y: 0.5, z: 0 )"

    def test_digits_override(self):
        aa = AxisAngle(0.0, -1.0, 0.0, deg(160))
        assert aa.format_raw(digits=3) == "AA ( x: 0, y: -1, z: 0, angle: 0.888pi )"
        assert aa.format_starred(digits=3) == "AA* ( x: 0, y: -0.888, z: 0 )"
