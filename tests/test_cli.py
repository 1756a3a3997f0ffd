"""
Tests for the command-line interface.
"""

import json
import subprocess
import sys

import pytest

from shcontroller.cli.skeleton import main, parse_overrides


class TestCLIEntryPoints:
    """Test that CLI entry points defined in pyproject.toml are importable."""

    def test_entry_point_importable(self):
        assert callable(main)

    def test_entry_point_via_subprocess(self):
        """Test entry point works when invoked as module."""
        result = subprocess.run(
            [sys.executable, "-m", "shcontroller.cli.skeleton", "--help"],
            capture_output=True,
            text=True
        )
        assert result.returncode == 0
        assert "usage" in result.stdout.lower()


class TestParseOverrides:
    """Tests for --set KEY=VALUE parsing."""

    def test_nested(self):
        assert parse_overrides(["grip.end.y_total_mm=32", "grip.rotate_deg=-20"]) == {
            "grip": {"end": {"y_total_mm": 32}, "rotate_deg": -20},
        }

    def test_json_values(self):
        assert parse_overrides(["button_pad.offset_mm=[10, -30]"]) == {
            "button_pad": {"offset_mm": [10, -30]},
        }

    def test_plain_string_kept(self):
        assert parse_overrides(["a=hello"]) == {"a": "hello"}

    def test_missing_equals(self):
        with pytest.raises(ValueError, match="Expected KEY=VALUE"):
            parse_overrides(["grip.x_total_mm"])

    def test_empty(self):
        assert parse_overrides([]) == {}


class TestCLIOutput:
    """JSON output for the default and selected parts."""

    def test_default_output(self, capsys):
        assert main([]) == 0
        data = json.loads(capsys.readouterr().out)
        assert set(data["children"]) == {"ButtonPad", "Grip", "Trigger"}
        assert "transform" not in data

    def test_part_global(self, capsys):
        assert main(["--part", "Trigger.ButtonFace.Board", "--global"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert set(data["points"]) == {"switches", "switches_top", "board_top", "board_bottom"}
        # Rotated -90deg about y: local x runs along global z
        for point in data["points"]["switches"]:
            assert point[0] == pytest.approx(7.5)

    def test_visible(self, capsys):
        assert main(["--visible"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert len(data) > 0
        assert set(data[0]) == {"point", "color", "radius"}

    def test_override(self, capsys):
        assert main(["--set", "grip.x_total_mm=80"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["children"]["Grip"]["transform"][0] == ["translate", -80.0, 0.0, -15.0]

    def test_indent(self, capsys):
        assert main(["--part", "Grip.End", "--indent", "0"]) == 0
        out = capsys.readouterr().out
        assert json.loads(out)["points"]["bottom_half"][0] == [0.0, 0.0, 0.0]


class TestCLIErrors:
    """Errors are reported on stderr with exit code 1."""

    def test_bad_assignment(self, capsys):
        assert main(["--set", "grip.x_total_mm"]) == 1
        assert "Error in parameters" in capsys.readouterr().err

    def test_bad_value_type(self, capsys):
        assert main(["--set", "grip.x_total_mm=long"]) == 1
        assert "Error in parameters" in capsys.readouterr().err

    def test_overconstrained(self, capsys):
        assert main(["--set", "trigger.button_face.x_corner_mm=3"]) == 1
        assert "exceeds total" in capsys.readouterr().err

    def test_unknown_part(self, capsys):
        assert main(["--part", "Trigger.Nope"]) == 1
        assert "No child 'Nope'" in capsys.readouterr().err
