#!/usr/bin/env python3
"""
===============================================================================
QUATROT - Demonstration
===============================================================================
Walks through the library on a few hand-checkable rotations about +Y:

    1. Two 45 deg rotations composed vs. one 90 deg rotation
    2. Their Euler angles
    3. Rotation of the point (3, 0, 1), expected ~(1, 0, -3)
    4. Euler round trip of a 90 deg roll
    5. Three 120 deg rotations composed, expected ~identity
    6. Normalizing r - r, a zero quaternion: NaN, or rejected with --strict
    7. Canonical form of a 200 deg axis-angle, expected 160 deg, axis flipped

USAGE:
    quatrot-demo
    quatrot-demo --precision 4
    quatrot-demo --config config/rotation_config.yaml --verbose
===============================================================================
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from quatrot.axis_angle import AxisAngle
from quatrot.config import ConfigError, RotationConfig, load_config
from quatrot.quaternion import DegenerateRotationError, Quaternion, compose
from quatrot.units import deg
from quatrot.vector3 import Vector3

logger = logging.getLogger('QUATROT_DEMO')


def run_demo(config: RotationConfig) -> List[str]:
    """
    Run the demonstration and return the printed lines.

    Args:
        config: Tolerances and display precision to use.

    Returns:
        Output lines, in order.
    """
    e = config.display_precision
    y_axis = Vector3(0.0, 1.0, 0.0)
    lines = []

    def show(label: str, value) -> None:
        lines.append(f"{label:<28}{value}")

    q1 = Quaternion.from_axis_angle(y_axis, deg(45), precision=e)
    q2 = Quaternion.from_axis_angle(y_axis, deg(45), precision=e)
    q = q1.multiply(q2)
    r = Quaternion.from_axis_angle(y_axis, deg(90), precision=e)

    logger.info("Composition of two 45 deg rotations about +Y")
    show("45 deg * 45 deg:", q)
    show("90 deg:", r)
    show("Euler (45 * 45):", q.to_euler_angles())
    show("Euler (90):", r.to_euler_angles())

    logger.info("Point rotation")
    p = Vector3(3.0, 0.0, 1.0, precision=e)
    show("(45 * 45) applied to p:", q.rotate_point(p))
    show("90 applied to p:", r.rotate_point(p))

    logger.info("Euler angle round trip")
    e3 = Vector3(deg(90), 0.0, 0.0, precision=e)
    q3 = Quaternion.from_euler_angles(e3, precision=e)
    show("From Euler (90, 0, 0):", q3)
    show("Euler in:", e3)
    show("Euler out:", q3.to_euler_angles())

    logger.info("Three 120 deg rotations about +Y")
    step = Quaternion.from_axis_angle(y_axis, deg(120), precision=e)
    full_turn = compose(step, step, step).normalize()
    show("120 * 120 * 120:", full_turn)
    show("As axis-angle:", full_turn.to_axis_angle(config.axis_angle_epsilon))

    logger.info("Normalizing the difference of equal rotations")
    try:
        show("Normalized r - r:", (r - r).normalize(strict=config.strict_normalize))
    except DegenerateRotationError as err:
        show("Normalized r - r:", f"rejected ({err})")

    logger.info("Axis-angle canonical form")
    aa = AxisAngle(0.0, 1.0, 0.0, deg(200), precision=e)
    canonical = aa.normalize()
    show("200 deg about +Y:", aa.format_raw())
    show("Canonical:", canonical.format_raw())
    show("Canonical (starred):", canonical.format_starred())

    return lines


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Quaternion / Euler / axis-angle rotation demo"
    )
    parser.add_argument('--config', type=str, default=None,
                        help='Path to a YAML rotation configuration file')
    parser.add_argument('--precision', type=int, default=None,
                        help='Fractional digits shown (overrides config)')
    parser.add_argument('--strict', action='store_true',
                        help='Reject zero-magnitude normalization instead of producing NaN')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable debug logging')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the quatrot-demo console script."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    try:
        config = load_config(args.config)
        overrides = {}
        if args.precision is not None:
            overrides['display_precision'] = args.precision
        if args.strict:
            overrides['strict_normalize'] = True
        if overrides:
            config = replace(config, **overrides)
    except ConfigError as err:
        logger.error("Invalid configuration: %s", err)
        return 1
    logger.debug("Using %s", config)

    for line in run_demo(config):
        print(line)
    return 0


if __name__ == '__main__':
    sys.exit(main())
