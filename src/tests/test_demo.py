"""
===============================================================================
QUATROT - Demo Test Suite
===============================================================================
End-to-end checks of the demonstration script: the documented scenarios
show up in its output and the command-line options are honored.
===============================================================================
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from quatrot.config import RotationConfig
from quatrot.demo import main, run_demo


@pytest.fixture
def demo_lines():
    """Demo output with the default configuration."""
    return run_demo(RotationConfig())


def _line(lines, label):
    matches = [line for line in lines if line.startswith(label)]
    assert len(matches) == 1, f"expected one line starting with {label!r}"
    return matches[0][len(label):].strip()


class TestRunDemo:
    """Tests for the demonstration scenarios."""

    def test_line_count(self, demo_lines):
        assert len(demo_lines) == 15

    def test_composition_matches_direct(self, demo_lines):
        assert _line(demo_lines, "45 deg * 45 deg:").startswith("Q ( 0.7071067")
        assert _line(demo_lines, "90 deg:").startswith("Q ( 0.7071067")

    def test_euler_roundtrip(self, demo_lines):
        assert _line(demo_lines, "Euler in:") == "V ( x: 1.57079632, y: 0, z: 0 )"
        assert _line(demo_lines, "Euler out:").startswith("V ( x: 1.570796")

    def test_full_turn_is_degenerate_axis_angle(self, demo_lines):
        assert _line(demo_lines, "As axis-angle:") == \
            "AA ( x: 1, y: 0, z: 0, angle: 0pi )"

    def test_canonical_200_degrees(self, demo_lines):
        assert _line(demo_lines, "Canonical:") == \
            "AA ( x: 0, y: -1, z: 0, angle: 0.88888888pi )"
        assert _line(demo_lines, "Canonical (starred):") == \
            "AA* ( x: 0, y: -0.88888888, z: 0 )"

    def test_zero_difference_is_nan(self, demo_lines):
        assert _line(demo_lines, "Normalized r - r:") == "Q ( nan + nan i + nan j + nan k )"

    def test_strict_rejects_zero_difference(self, demo_lines):
        lines = run_demo(RotationConfig(strict_normalize=True))
        assert _line(lines, "Normalized r - r:").startswith(
            "rejected (Cannot normalize a zero quaternion")
        assert lines != demo_lines

    def test_precision(self):
        lines = run_demo(RotationConfig(display_precision=2))
        assert _line(lines, "Euler in:") == "V ( x: 1.57, y: 0, z: 0 )"


class TestMain:
    """Tests for the command-line entry point."""

    def test_main_prints(self, capsys):
        assert main([]) == 0
        out = capsys.readouterr().out
        assert "Canonical:" in out
        assert len(out.strip().splitlines()) == 15

    def test_main_precision_flag(self, capsys):
        assert main(["--precision", "3", "--strict"]) == 0
        out = capsys.readouterr().out
        assert "V ( x: 1.57, y: 0, z: 0 )" in out

    def test_main_strict_flag_changes_output(self, capsys):
        assert main([]) == 0
        loose = capsys.readouterr().out
        assert main(["--strict"]) == 0
        strict = capsys.readouterr().out
        assert "nan + nan i" in loose
        assert "nan + nan i" not in strict
        assert "rejected (" in strict

    @pytest.mark.parametrize("argv", [
        ["--precision", "-1"],
        ["--config", "does-not-exist.yaml"],
    ])
    def test_main_rejects_bad_configuration(self, argv, capsys):
        assert main(argv) == 1
        assert capsys.readouterr().out == ""

    def test_main_rejects_invalid_config_file(self, tmp_path, capsys):
        path = tmp_path / "c.yaml"
        path.write_text("rotation:\n  strict_normalize: 'no'\n")
        assert main(["--config", str(path)]) == 1
        assert capsys.readouterr().out == ""

    def test_main_config_file(self, tmp_path, capsys):
        path = tmp_path / "c.yaml"
        path.write_text("display:\n  precision: 1\n")
        assert main(["--config", str(path)]) == 0
        assert "V ( x: 1.5, y: 0, z: 0 )" in capsys.readouterr().out
