"""
===============================================================================
QUATROT - Mathematical Constants and Default Tolerances
===============================================================================
Central place for the constants shared by the rotation modules. Angles are
in radians throughout.

The tolerances below are defaults only. Every operation that uses one takes
it as a parameter, and config.RotationConfig can override them from YAML.
===============================================================================
"""

import numpy as np


# =============================================================================
# MATHEMATICAL CONSTANTS
# =============================================================================
PI = np.pi
TWO_PI = 2.0 * np.pi
HALF_PI = 0.5 * np.pi
DEG2RAD = PI / 180.0
RAD2DEG = 180.0 / PI

# =============================================================================
# NUMERICAL TOLERANCES
# =============================================================================
# sqrt(1 - w^2) below this value means sin(angle/2) ~ 0 and the rotation
# axis cannot be recovered from the quaternion vector part.
AXIS_ANGLE_EPSILON = 1e-4

# |q| within this of 1 counts as unit (is_unit); also the largest |w| - 1
# that to_axis_angle() treats as rounding and clamps.
UNIT_NORM_TOLERANCE = 1e-8
# Default for Quaternion.is_close() and same_rotation().
COMPARISON_TOLERANCE = 1e-9

# =============================================================================
# DISPLAY
# =============================================================================
# Fractional digits kept (truncated, not rounded) by the string forms.
DISPLAY_PRECISION = 8

# Axis returned when the rotation axis is undefined.
DEFAULT_AXIS = (1.0, 0.0, 0.0)
