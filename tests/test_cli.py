"""Tests for CLI interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from solpos.core.config import load_config
from solpos.main import app

runner = CliRunner()


class TestComputeCommand:
    """Tests for the compute command."""

    def test_compute_console(self, atlanta_config_path: Path) -> None:
        """Console output shows the main results."""
        result = runner.invoke(app, ["compute", str(atlanta_config_path)])

        assert result.exit_code == 0
        assert "Azimuth" in result.stdout
        assert "97.03" in result.stdout
        assert "1999-07-22" in result.stdout

    def test_compute_json(self, atlanta_config_path: Path) -> None:
        """JSON output carries every output field."""
        result = runner.invoke(
            app, ["compute", str(atlanta_config_path), "--format", "json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["error_code"] == 0
        assert data["date"]["month"] == 7
        assert data["outputs"]["zenref"] == pytest.approx(41.590069, abs=1e-3)
        assert data["outputs"]["etrtilt"] == pytest.approx(1207.547363, abs=1e-1)

    def test_compute_invalid_input_exits(self, tmp_path: Path) -> None:
        """Range errors are decoded and exit with status 1."""
        config = tmp_path / "bad.yaml"
        config.write_text("""
location: {latitude: 33.65, longitude: -84.43, timezone: -5}
time: {year: 99, day_of_year: 203, hour: 9}
""")

        result = runner.invoke(app, ["compute", str(config)])

        assert result.exit_code == 1
        assert "Please fix the year: 99 [1950-2050]" in result.stdout

    def test_compute_missing_config(self) -> None:
        """Missing config file errors."""
        result = runner.invoke(app, ["compute", "/nonexistent/path.yaml"])

        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_compute_invalid_config(self, tmp_path: Path) -> None:
        """Structurally invalid config errors."""
        config = tmp_path / "invalid.yaml"
        config.write_text("name: no location\n")

        result = runner.invoke(app, ["compute", str(config)])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.stdout

    def test_compute_unknown_format(self, atlanta_config_path: Path) -> None:
        """Only console and json are supported."""
        result = runner.invoke(
            app, ["compute", str(atlanta_config_path), "--format", "csv"]
        )

        assert result.exit_code == 1
        assert "Unknown format" in result.stdout


class TestProfileCommand:
    """Tests for the profile command."""

    def test_profile(self, atlanta_config_path: Path) -> None:
        """Profile prints a table and daily totals."""
        result = runner.invoke(app, ["profile", str(atlanta_config_path)])

        assert result.exit_code == 0
        assert "13:00" in result.stdout
        assert "Sunrise: 05:4" in result.stdout
        assert "ETR insolation" in result.stdout

    def test_profile_step(self, atlanta_config_path: Path) -> None:
        """Custom step adds rows."""
        result = runner.invoke(
            app, ["profile", str(atlanta_config_path), "--step", "30"]
        )

        assert result.exit_code == 0
        assert "13:30" in result.stdout

    def test_profile_invalid_step(self, atlanta_config_path: Path) -> None:
        """Zero step errors."""
        result = runner.invoke(
            app, ["profile", str(atlanta_config_path), "--step", "0"]
        )

        assert result.exit_code == 1
        assert "outside valid range" in result.stdout


class TestInitCommand:
    """Tests for the init command."""

    def test_init_creates_file(self, tmp_path: Path) -> None:
        """Init writes a loadable configuration."""
        output = tmp_path / "site.yaml"

        result = runner.invoke(app, ["init", "My Site", "-o", str(output)])

        assert result.exit_code == 0
        assert output.exists()
        config = load_config(output)
        assert config.name == "My Site"
        assert config.time.day_of_year == 203

    def test_init_default_filename(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Filename is derived from the name."""
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["init", "Test Site"])

        assert result.exit_code == 0
        assert (tmp_path / "test-site.yaml").exists()


class TestValidateCommand:
    """Tests for the validate command."""

    def test_validate_valid(self, atlanta_config_path: Path) -> None:
        """Valid config reports a summary."""
        result = runner.invoke(app, ["validate", str(atlanta_config_path)])

        assert result.exit_code == 0
        assert "Valid" in result.stdout
        assert "Atlanta" in result.stdout

    def test_validate_out_of_range(self, tmp_path: Path) -> None:
        """Out-of-range inputs fail validation."""
        config = tmp_path / "bad.yaml"
        config.write_text("""
name: Bad tilt
location: {latitude: 33.65, longitude: -84.43, timezone: -5}
time: {year: 1999, month: 7, day: 22, hour: 9}
surface: {tilt: 200, aspect: 180}
""")

        result = runner.invoke(app, ["validate", str(config)])

        assert result.exit_code == 1
        assert "Invalid" in result.stdout
        assert "Please fix the tilt: 200.0 [0-180]" in result.stdout

    def test_validate_missing(self) -> None:
        """Missing file errors."""
        result = runner.invoke(app, ["validate", "/nonexistent.yaml"])

        assert result.exit_code == 1


class TestDecodeCommand:
    """Tests for the decode command."""

    def test_decode_hex(self) -> None:
        """Hex codes list their bits."""
        result = runner.invoke(app, ["decode", "0x11"])

        assert result.exit_code == 0
        assert "YEAR" in result.stdout
        assert "HOUR" in result.stdout
        assert "1950-2050" in result.stdout

    def test_decode_config_bit(self) -> None:
        """The CONFIG bit names the function selection."""
        result = runner.invoke(app, ["decode", str(1 << 18)])

        assert result.exit_code == 0
        assert "CONFIG" in result.stdout

    def test_decode_zero(self) -> None:
        """Zero means no errors."""
        result = runner.invoke(app, ["decode", "0"])

        assert result.exit_code == 0
        assert "No errors" in result.stdout

    def test_decode_with_config(self, tmp_path: Path) -> None:
        """Values are quoted from a configuration."""
        config = tmp_path / "site.yaml"
        config.write_text("""
location: {latitude: 33.65, longitude: -84.43, timezone: -5}
time: {year: 99, day_of_year: 203, hour: 9}
""")

        result = runner.invoke(app, ["decode", "1", "--config", str(config)])

        assert result.exit_code == 0
        assert "Please fix the year: 99 [1950-2050]" in result.stdout

    @pytest.mark.parametrize("code", ["abc", "-1"])
    def test_decode_invalid(self, code: str) -> None:
        """Non-numeric and negative codes error."""
        result = runner.invoke(app, ["decode", "--", code])

        assert result.exit_code == 1
        assert "Not an error code" in result.stdout
