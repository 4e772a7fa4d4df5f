"""Tests for error code diagnostics."""

from __future__ import annotations

import logging

import pytest

from solpos.calculation.decoder import decode
from solpos.calculation.engine import compute
from solpos.core.functions import Function
from solpos.core.record import PositionRecord
from solpos.core.validation import ErrorCode


class TestDecode:
    """Tests for decode()."""

    def test_zero(self) -> None:
        """No lines for a clean result."""
        assert decode(ErrorCode(0), PositionRecord()) == []

    def test_two_digit_year(self, atlanta_record: PositionRecord) -> None:
        """The offending value and valid range are quoted."""
        atlanta_record.year = 99
        code = compute(atlanta_record)
        assert decode(code, atlanta_record) == ["Please fix the year: 99 [1950-2050]"]

    def test_unset_value(self) -> None:
        """Unset inputs are reported as unset."""
        lines = decode(ErrorCode.LATITUDE, PositionRecord())
        assert lines == ["Please fix the latitude: unset [-90-90]"]

    def test_bit_order(self, atlanta_record: PositionRecord) -> None:
        """Lines follow bit order."""
        atlanta_record.hour = 24
        atlanta_record.year = 2051
        atlanta_record.sbsky = 2.0
        lines = decode(compute(atlanta_record), atlanta_record)
        assert [line.split(":")[0] for line in lines] == [
            "Please fix the year",
            "Please fix the hour",
            "Please fix the shadowband sky factor",
        ]

    def test_config(self) -> None:
        """Configuration errors name the function selection."""
        record = PositionRecord(function=Function.STEP_AMASS)
        lines = decode(compute(record), record)
        assert len(lines) == 1
        assert lines[0].startswith("Please fix the function selection:")
        assert "STEP_AMASS" in lines[0]

    def test_integer_code(self) -> None:
        """Plain integers decode like ErrorCode values."""
        record = PositionRecord(hour=25, minute=61)
        lines = decode(0x30, record)
        assert lines == [
            "Please fix the hour: 25 [0-23]",
            "Please fix the minute: 61 [0-59]",
        ]

    def test_does_not_modify_record(self, atlanta_record: PositionRecord) -> None:
        """Decoding only reads the record."""
        before = atlanta_record.snapshot()
        decode(ErrorCode.TILT | ErrorCode.ASPECT, atlanta_record)
        assert atlanta_record.snapshot() == before

    def test_logs_warnings(self, caplog: pytest.LogCaptureFixture) -> None:
        """Each line is logged at WARNING level."""
        with caplog.at_level(logging.WARNING, logger="solpos.calculation.decoder"):
            decode(ErrorCode.PRESSURE, PositionRecord(press=0.0))
        assert "Please fix the pressure: 0.0 [0-2000]" in caplog.text
