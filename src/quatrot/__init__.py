"""
===============================================================================
QUATROT - 3D Rotation Mathematics
===============================================================================
Quaternion, Euler-angle and axis-angle rotation representations with the
conversions between them.

Modules:
    constants   -- Mathematical constants, default tolerances and precision
    units       -- Degree/radian helpers
    formatting  -- Truncated-decimal rendering used by the string forms
    vector3     -- Immutable 3D point/direction value
    axis_angle  -- Axis-angle value with canonicalization
    quaternion  -- Quaternion algebra and conversions
    config      -- YAML-backed tolerance and display configuration
    demo        -- Command-line demonstration
===============================================================================
"""

from quatrot.units import deg, rad2deg
from quatrot.vector3 import Vector3
from quatrot.axis_angle import AxisAngle
from quatrot.quaternion import Quaternion, DegenerateRotationError
from quatrot.config import RotationConfig, ConfigError, load_config

__all__ = [
    "deg",
    "rad2deg",
    "Vector3",
    "AxisAngle",
    "Quaternion",
    "DegenerateRotationError",
    "RotationConfig",
    "ConfigError",
    "load_config",
]

__version__ = "0.1.0"
