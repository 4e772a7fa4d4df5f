"""Tests for the daily profile sweep."""

from __future__ import annotations

import pytest

from solpos.calculation.sweep import DayProfile, ProfileRow, day_profile
from solpos.core.record import PositionRecord
from solpos.core.validation import ErrorCode


class TestDayProfile:
    """Tests for day_profile()."""

    def test_hourly_rows(self, atlanta_record: PositionRecord) -> None:
        """One row per hour from midnight."""
        result = day_profile(atlanta_record)
        assert len(result.rows) == 24
        assert (result.rows[0].hour, result.rows[0].minute) == (0, 0)
        assert (result.rows[-1].hour, result.rows[-1].minute) == (23, 0)
        assert result.error_code == ErrorCode(0)

    def test_finer_step(self, atlanta_record: PositionRecord) -> None:
        """Rows follow the requested spacing."""
        result = day_profile(atlanta_record, step_minutes=15)
        assert len(result.rows) == 96
        assert (result.rows[1].hour, result.rows[1].minute) == (0, 15)

    def test_night_and_day(self, atlanta_record: PositionRecord) -> None:
        """ETR is zero at midnight and high in the early afternoon."""
        result = day_profile(atlanta_record)
        assert result.rows[0].etr == 0.0
        assert result.rows[13].etr > 1000.0
        assert result.rows[13].zenref < 20.0

    def test_sunrise_sunset(self, atlanta_record: PositionRecord) -> None:
        """Sunrise and sunset match a single-instant calculation."""
        result = day_profile(atlanta_record)
        assert result.sretr == pytest.approx(347.17, abs=2.0)
        assert result.ssetr == pytest.approx(1181.11, abs=2.0)

    def test_insolation(self, atlanta_record: PositionRecord) -> None:
        """Daily top-of-atmosphere insolation for midsummer Atlanta."""
        result = day_profile(atlanta_record, step_minutes=10)
        assert 10_000.0 < result.etr_insolation() < 12_500.0

    def test_template_untouched(self, atlanta_record: PositionRecord) -> None:
        """The template record is not computed or modified."""
        day_profile(atlanta_record)
        assert atlanta_record.hour == 9
        assert atlanta_record.zenref is None

    def test_errors_collected(self, atlanta_record: PositionRecord) -> None:
        """Row error codes are combined."""
        atlanta_record.year = 99
        result = day_profile(atlanta_record)
        assert result.error_code == ErrorCode.YEAR
        assert all(row.error_code == ErrorCode.YEAR for row in result.rows)

    @pytest.mark.parametrize("step", [0, -5, 1441])
    def test_invalid_step(self, atlanta_record: PositionRecord, step: int) -> None:
        """Steps outside one minute to one day are rejected."""
        with pytest.raises(ValueError, match="outside valid range"):
            day_profile(atlanta_record, step_minutes=step)


class TestDayProfileType:
    """Tests for DayProfile itself."""

    def test_insolation_ignores_missing(self) -> None:
        """Rows without ETR count as zero."""
        rows = [
            ProfileRow(0, 0, None, None, None, None, None, ErrorCode.LATITUDE),
            ProfileRow(1, 0, 40.0, 100.0, 600.0, 650.0, 1.3, ErrorCode(0)),
        ]
        profile = DayProfile(rows=rows, step_minutes=60, sretr=None, ssetr=None)
        assert profile.etr_insolation() == pytest.approx(600.0)
        assert profile.error_code == ErrorCode.LATITUDE
