"""
===============================================================================
QUATROT - Configuration
===============================================================================
Tolerance and display settings loaded from YAML.

Configuration is an immutable value handed to the code that needs it; the
package keeps no global settings. Example file (config/rotation_config.yaml):

    rotation:
      axis_angle_epsilon: 1.0e-4
      strict_normalize: false
    display:
      precision: 8
===============================================================================
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from quatrot.constants import AXIS_ANGLE_EPSILON, DISPLAY_PRECISION

logger = logging.getLogger(__name__)

_SECTIONS = {
    "rotation": {"axis_angle_epsilon", "strict_normalize"},
    "display": {"precision"},
}


class ConfigError(ValueError):
    """Invalid rotation configuration."""


@dataclass(frozen=True)
class RotationConfig:
    """
    Numerical tolerances and display settings.

    Parameters
    ----------
    axis_angle_epsilon : float
        Threshold on sin(angle/2) below which Quaternion.to_axis_angle()
        returns the default axis. Depends on the float precision in use.
    display_precision : int
        Fractional digits kept by the truncated string forms.
    strict_normalize : bool
        If True, normalizing a zero quaternion raises
        DegenerateRotationError instead of producing NaN.
    """

    axis_angle_epsilon: float = AXIS_ANGLE_EPSILON
    display_precision: int = DISPLAY_PRECISION
    strict_normalize: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.axis_angle_epsilon, bool) or \
                not isinstance(self.axis_angle_epsilon, (int, float)) or \
                not self.axis_angle_epsilon > 0.0:
            raise ConfigError(
                f"axis_angle_epsilon must be a positive number, "
                f"got {self.axis_angle_epsilon!r}"
            )
        if isinstance(self.display_precision, bool) or \
                not isinstance(self.display_precision, int) or \
                self.display_precision < 0:
            raise ConfigError(
                f"display precision must be a non-negative integer, "
                f"got {self.display_precision!r}"
            )
        if not isinstance(self.strict_normalize, bool):
            raise ConfigError(
                f"strict_normalize must be true or false, "
                f"got {self.strict_normalize!r}"
            )

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'RotationConfig':
        """
        Build a config from the parsed YAML mapping.

        Missing sections or keys keep their defaults. Unknown sections or
        keys raise ConfigError so typos do not pass silently.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping, got {type(data).__name__}")

        for section, values in data.items():
            if section not in _SECTIONS:
                raise ConfigError(f"Unknown configuration section: {section!r}")
            if values is None:
                continue
            if not isinstance(values, dict):
                raise ConfigError(f"Section {section!r} must be a mapping")
            unknown = set(values) - _SECTIONS[section]
            if unknown:
                raise ConfigError(
                    f"Unknown keys in section {section!r}: {sorted(unknown)}"
                )

        rotation = data.get("rotation") or {}
        display = data.get("display") or {}

        epsilon = rotation.get("axis_angle_epsilon", AXIS_ANGLE_EPSILON)
        # PyYAML reads 1e-4 (no dot) as a string
        if isinstance(epsilon, str):
            try:
                epsilon = float(epsilon)
            except ValueError:
                raise ConfigError(
                    f"axis_angle_epsilon must be a number, got {epsilon!r}"
                ) from None

        return cls(
            axis_angle_epsilon=epsilon,
            display_precision=display.get("precision", DISPLAY_PRECISION),
            strict_normalize=rotation.get("strict_normalize", False),
        )


def load_config(config_path: Union[str, Path, None] = None) -> RotationConfig:
    """
    Load the rotation configuration from a YAML file.

    Args:
        config_path: Path to the YAML file. None returns the defaults.

    Returns:
        RotationConfig built from the file contents.

    Raises:
        ConfigError: If the file is missing, is not valid YAML, or holds
            invalid settings.
    """
    if config_path is None:
        return RotationConfig()

    logger.info("Loading configuration from: %s", config_path)
    try:
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f)
    except OSError as err:
        raise ConfigError(f"Cannot read configuration file {config_path}: {err}") from err
    except yaml.YAMLError as err:
        raise ConfigError(f"Malformed YAML in {config_path}: {err}") from err
    config = RotationConfig.from_dict(data)
    logger.debug("Configuration: %s", config)
    return config
