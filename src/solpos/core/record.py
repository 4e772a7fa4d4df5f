"""The position record shared between a caller and the engine.

This module defines the single mutable record a caller fills with inputs,
hands to the engine, and reads outputs back from:

- PositionRecord: location, time, atmosphere, surface and shadow band
  inputs, the function selection, every output and transitional value,
  and the error code of the last call
- initialize(): reset a record's inputs to the documented defaults
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields

from solpos.core.functions import Function
from solpos.core.validation import ErrorCode

#: Fields the caller supplies. month/day/daynum swap roles with the date mode.
INPUT_FIELDS: tuple[str, ...] = (
    "year",
    "month",
    "day",
    "daynum",
    "hour",
    "minute",
    "second",
    "interval",
    "timezone",
    "latitude",
    "longitude",
    "press",
    "temp",
    "tilt",
    "aspect",
    "sbwid",
    "sbrad",
    "sbsky",
    "solcon",
)

#: Values produced by the engine, including transitional ones.
OUTPUT_FIELDS: tuple[str, ...] = (
    "dayang",
    "erv",
    "utime",
    "julday",
    "ectime",
    "mnlong",
    "mnanom",
    "eclong",
    "ecobli",
    "declin",
    "rascen",
    "gmst",
    "lmst",
    "hrang",
    "zenetr",
    "elevetr",
    "ssha",
    "sbcf",
    "tst",
    "tstfix",
    "eqntim",
    "sretr",
    "ssetr",
    "azim",
    "elevref",
    "zenref",
    "coszen",
    "amass",
    "ampress",
    "unprime",
    "prime",
    "etrn",
    "etr",
    "cosinc",
    "etrtilt",
)


@dataclass
class PositionRecord:
    """Inputs, outputs and error state for one solar position calculation.

    Mandatory inputs default to None ("required, unset"); the validator
    flags any of them a requested step reads while still unset. Outputs
    are None until a step produces them and keep their previous value when
    a later call does not recompute them.

    Attributes:
        latitude: Degrees north (south negative).
        longitude: Degrees east (west negative).
        timezone: Hours east of UTC (west negative), standard time only.
        year: Four-digit year, 1950-2050.
        month: Month of year. Input when the day-of-year bit is clear.
        day: Day of month. Input when the day-of-year bit is clear.
        daynum: Day of year. Input when the day-of-year bit is set.
        hour: Hour of day, local standard time.
        minute: Minute of hour.
        second: Second of minute, may be fractional.
        interval: Measurement interval in seconds. The time stamp marks the
            end of the interval; the engine evaluates its midpoint.
        press: Surface pressure in millibars.
        temp: Ambient dry-bulb temperature in °C.
        tilt: Panel tilt from horizontal in degrees.
        aspect: Panel azimuth in degrees (N=0, E=90, S=180, W=270).
        sbwid: Shadow band width in cm.
        sbrad: Shadow band radius in cm.
        sbsky: Shadow band sky factor.
        solcon: Solar constant in W/m².
        function: Calculations to run.
        error_code: Result code of the last engine call.
    """

    # Location
    latitude: float | None = None
    longitude: float | None = None
    timezone: float | None = None

    # Date and time
    year: int | None = None
    month: int | None = None
    day: int | None = None
    daynum: int | None = None
    hour: int | None = None
    minute: int | None = None
    second: float | None = None
    interval: int = 0

    # Atmosphere
    press: float = 1013.0
    temp: float = 10.0

    # Surface
    tilt: float = 0.0
    aspect: float = 180.0

    # Shadow band
    sbwid: float = 7.6
    sbrad: float = 31.7
    sbsky: float = 0.04

    solcon: float = 1367.0
    function: Function | int = Function.ALL

    # Transitional values
    dayang: float | None = None
    erv: float | None = None
    utime: float | None = None
    julday: float | None = None
    ectime: float | None = None
    mnlong: float | None = None
    mnanom: float | None = None
    eclong: float | None = None
    ecobli: float | None = None
    declin: float | None = None
    rascen: float | None = None
    gmst: float | None = None
    lmst: float | None = None
    hrang: float | None = None
    zenetr: float | None = None
    elevetr: float | None = None
    ssha: float | None = None
    tst: float | None = None
    tstfix: float | None = None
    eqntim: float | None = None

    # Outputs
    sbcf: float | None = None
    sretr: float | None = None
    ssetr: float | None = None
    azim: float | None = None
    elevref: float | None = None
    zenref: float | None = None
    coszen: float | None = None
    amass: float | None = None
    ampress: float | None = None
    unprime: float | None = None
    prime: float | None = None
    etrn: float | None = None
    etr: float | None = None
    cosinc: float | None = None
    etrtilt: float | None = None

    error_code: ErrorCode = field(default=ErrorCode(0))

    def snapshot(self) -> dict[str, object]:
        """Copy every input and output value into a plain dict."""
        return {name: getattr(self, name) for name in INPUT_FIELDS + OUTPUT_FIELDS}

    def outputs(self) -> dict[str, float | None]:
        """Output and transitional values keyed by field name."""
        return {name: getattr(self, name) for name in OUTPUT_FIELDS}


_DEFAULTS = {f.name: f.default for f in fields(PositionRecord)}


def initialize(record: PositionRecord) -> None:
    """Reset a record's inputs before first use.

    Mandatory location, date and time fields become unset so that a caller
    who forgets one gets a validation error instead of a silently wrong
    answer. Optional inputs get their nominal values: 1013 mb, 10 °C, a
    horizontal south-facing surface, all functions in day-of-year mode.
    Outputs are not touched.

    Args:
        record: Record to reset in place.
    """
    for name in INPUT_FIELDS:
        setattr(record, name, _DEFAULTS[name])
    record.function = Function.ALL
