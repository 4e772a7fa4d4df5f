"""Shared pytest fixtures for solpos tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from solpos.core.record import PositionRecord

# =============================================================================
# Reference inputs
# =============================================================================

#: Atlanta, 22 July 1999, 09:45:37 EST, panel at latitude tilt facing SE.
ATLANTA_YAML = """
name: "Atlanta"
location:
  latitude: 33.65
  longitude: -84.43
  timezone: -5.0
time:
  year: 1999
  day_of_year: 203
  hour: 9
  minute: 45
  second: 37
atmosphere:
  pressure: 1006.0
  temperature: 27.0
surface:
  tilt: 33.65
  aspect: 135.0
"""


# =============================================================================
# Record fixtures
# =============================================================================


@pytest.fixture
def atlanta_record() -> PositionRecord:
    """Atlanta benchmark inputs, day-of-year mode, all functions."""
    return PositionRecord(
        latitude=33.65,
        longitude=-84.43,
        timezone=-5.0,
        year=1999,
        daynum=203,
        hour=9,
        minute=45,
        second=37,
        temp=27.0,
        press=1006.0,
        tilt=33.65,
        aspect=135.0,
    )


@pytest.fixture
def equator_record() -> PositionRecord:
    """Equatorial site at local noon on the March equinox."""
    return PositionRecord(
        latitude=0.0,
        longitude=0.0,
        timezone=0.0,
        year=2000,
        daynum=80,
        hour=12,
        minute=0,
        second=0,
    )


# =============================================================================
# Configuration fixtures
# =============================================================================


@pytest.fixture
def atlanta_config_path(tmp_path: Path) -> Path:
    """Atlanta benchmark written as a YAML configuration file."""
    path = tmp_path / "atlanta.yaml"
    path.write_text(ATLANTA_YAML)
    return path
