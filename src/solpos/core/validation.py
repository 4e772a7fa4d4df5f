"""Range checks for engine inputs.

Each input field has one rule and one error bit. The engine asks the
``Validator`` to check a field the first time a step reads it; violations
accumulate into an ``ErrorCode`` and never stop the calculation.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import IntFlag
from typing import Any

from solpos.physics.calendar import days_in_year


class ErrorCode(IntFlag):
    """Bitmask returned by the engine. Zero means every used input was valid."""

    YEAR = 1 << 0
    MONTH = 1 << 1
    DAY = 1 << 2
    DOY = 1 << 3
    HOUR = 1 << 4
    MINUTE = 1 << 5
    SECOND = 1 << 6
    TZONE = 1 << 7
    INTERVAL = 1 << 8
    LATITUDE = 1 << 9
    LONGITUDE = 1 << 10
    TEMPERATURE = 1 << 11
    PRESSURE = 1 << 12
    TILT = 1 << 13
    ASPECT = 1 << 14
    SBWIDTH = 1 << 15
    SBRADIUS = 1 << 16
    SBSKY = 1 << 17
    CONFIG = 1 << 18


@dataclass(frozen=True)
class FieldRule:
    """Valid range of one input field.

    Attributes:
        field: Record field name.
        error: Bit set when the field is unset or out of range.
        label: Human-readable name used in diagnostics.
        check: Predicate over the value and the other input values.
        bounds: Range description used in diagnostics.
    """

    field: str
    error: ErrorCode
    label: str
    check: Callable[[Any, Mapping[str, Any]], bool]
    bounds: str

    def is_valid(self, value: Any, values: Mapping[str, Any]) -> bool:
        """Return True if ``value`` is set and inside the range."""
        if value is None:
            return False
        return self.check(value, values)


def _between(low: float, high: float) -> Callable[[Any, Mapping[str, Any]], bool]:
    return lambda value, _values: low <= value <= high


def _valid_daynum(value: Any, values: Mapping[str, Any]) -> bool:
    year = values.get("year")
    last = days_in_year(year) if isinstance(year, int) else 366
    return 1 <= value <= last


FIELD_RULES: dict[str, FieldRule] = {
    rule.field: rule
    for rule in (
        FieldRule("year", ErrorCode.YEAR, "year", _between(1950, 2050), "1950-2050"),
        FieldRule("month", ErrorCode.MONTH, "month", _between(1, 12), "1-12"),
        FieldRule("day", ErrorCode.DAY, "day-of-month", _between(1, 31), "1-31"),
        FieldRule("daynum", ErrorCode.DOY, "day-of-year", _valid_daynum, "1-366"),
        FieldRule("hour", ErrorCode.HOUR, "hour", _between(0, 23), "0-23"),
        FieldRule("minute", ErrorCode.MINUTE, "minute", _between(0, 59), "0-59"),
        FieldRule(
            "second",
            ErrorCode.SECOND,
            "second",
            lambda value, _values: 0 <= value < 60,
            "0-59.999",
        ),
        FieldRule(
            "interval", ErrorCode.INTERVAL, "interval", _between(0, 28800), "0-28800"
        ),
        FieldRule(
            "timezone", ErrorCode.TZONE, "time zone", _between(-12, 12), "-12-12"
        ),
        FieldRule(
            "latitude", ErrorCode.LATITUDE, "latitude", _between(-90, 90), "-90-90"
        ),
        FieldRule(
            "longitude",
            ErrorCode.LONGITUDE,
            "longitude",
            _between(-180, 180),
            "-180-180",
        ),
        FieldRule(
            "temp",
            ErrorCode.TEMPERATURE,
            "temperature",
            _between(-100, 100),
            "-100-100",
        ),
        FieldRule(
            "press",
            ErrorCode.PRESSURE,
            "pressure",
            lambda value, _values: 0 < value <= 2000,
            "0-2000",
        ),
        FieldRule("tilt", ErrorCode.TILT, "tilt", _between(0, 180), "0-180"),
        FieldRule(
            "aspect", ErrorCode.ASPECT, "aspect", _between(-360, 360), "-360-360"
        ),
        FieldRule(
            "sbwid", ErrorCode.SBWIDTH, "shadowband width", _between(1, 100), "1-100"
        ),
        FieldRule(
            "sbrad", ErrorCode.SBRADIUS, "shadowband radius", _between(1, 100), "1-100"
        ),
        FieldRule(
            "sbsky", ErrorCode.SBSKY, "shadowband sky factor", _between(-1, 1), "-1-1"
        ),
    )
}


class Validator:
    """Accumulates range errors for one engine call.

    Each field is checked at most once per call, however many steps read it.

    Attributes:
        code: Errors found so far.
    """

    def __init__(self, values: Mapping[str, Any]) -> None:
        """Initialize validator.

        Args:
            values: Input values of the record being computed.
        """
        self._values = values
        self._checked: set[str] = set()
        self.code = ErrorCode(0)

    def check(self, name: str) -> bool:
        """Check one field on first use.

        Args:
            name: Record field name.

        Returns:
            True if the field has a value the step can use. An out-of-range
            value is still usable; only an unset one is not.
        """
        value = self._values.get(name)
        if name not in self._checked:
            self._checked.add(name)
            rule = FIELD_RULES.get(name)
            if rule is not None and not rule.is_valid(value, self._values):
                self.code |= rule.error
        return value is not None

    def flag_config(self) -> None:
        """Record an unsatisfiable or undefined function selection."""
        self.code |= ErrorCode.CONFIG
