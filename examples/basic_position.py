#!/usr/bin/env python3
"""Basic solar position example.

This script demonstrates the record-based engine: the Atlanta benchmark
for a south-east facing panel, a reduced function selection, and a daily
profile.

Run with: uv run python examples/basic_position.py
"""

from solpos import (
    ErrorCode,
    Function,
    PositionRecord,
    compute,
    day_profile,
    decode,
    initialize,
)


def run_benchmark() -> None:
    """Atlanta, 22 July 1999, 09:45:37 EST."""
    print("=" * 60)
    print("BENCHMARK: Atlanta, 1999-07-22 09:45:37 EST")
    print("=" * 60)

    record = PositionRecord()
    initialize(record)
    record.latitude = 33.65
    record.longitude = -84.43
    record.timezone = -5.0
    record.year = 1999
    record.daynum = 203
    record.hour = 9
    record.minute = 45
    record.second = 37
    record.temp = 27.0
    record.press = 1006.0
    record.tilt = record.latitude
    record.aspect = 135.0

    code = compute(record)
    if code:
        for line in decode(code, record):
            print(line)
        return

    print(f"Date: {record.year}-{record.month:02d}-{record.day:02d}")
    print(f"Refracted zenith: {record.zenref:.4f}°")
    print(f"Azimuth:          {record.azim:.4f}°")
    print(f"Air mass:         {record.amass:.4f}")
    print(f"ETR horizontal:   {record.etr:.2f} W/m²")
    print(f"ETR normal:       {record.etrn:.2f} W/m²")
    print(f"ETR on panel:     {record.etrtilt:.2f} W/m²")
    print(f"Sunrise/sunset:   {record.sretr:.1f} / {record.ssetr:.1f} min")
    print()


def run_month_day_input() -> None:
    """Refraction only, with month and day instead of day of year."""
    print("=" * 60)
    print("MONTH/DAY INPUT: refraction only")
    print("=" * 60)

    record = PositionRecord(
        latitude=33.65,
        longitude=-84.43,
        timezone=-5.0,
        year=1999,
        month=7,
        day=22,
        hour=9,
        minute=45,
        second=37,
        function=Function.REFRAC & ~Function.DOY,
    )
    code = compute(record)
    print(f"Error code: {int(code)}")
    print(f"Day of year: {record.daynum}")
    print(f"Refracted elevation: {record.elevref:.4f}°")
    print(f"Air mass computed: {record.amass is not None}")
    print()


def run_bad_input() -> None:
    """A two-digit year is reported, not rejected."""
    print("=" * 60)
    print("INVALID INPUT: two-digit year")
    print("=" * 60)

    record = PositionRecord(
        latitude=33.65, longitude=-84.43, timezone=-5.0,
        year=99, daynum=203, hour=9, minute=45, second=37,
    )
    code = compute(record)
    print(f"Year error set: {bool(code & ErrorCode.YEAR)}")
    for line in decode(code, record):
        print(line)
    print()


def run_profile() -> None:
    """Hourly zenith and ETR across the benchmark day."""
    print("=" * 60)
    print("DAILY PROFILE")
    print("=" * 60)

    record = PositionRecord(
        latitude=33.65, longitude=-84.43, timezone=-5.0,
        year=1999, daynum=203, hour=0, minute=0, second=0,
    )
    result = day_profile(record, step_minutes=60)
    for row in result.rows:
        if row.etr:
            print(
                f"{row.hour:02d}:00  zenith {row.zenref:6.2f}°  "
                f"ETR {row.etr:7.1f} W/m²"
            )
    print(f"Daily ETR insolation: {result.etr_insolation():.0f} Wh/m²")


if __name__ == "__main__":
    run_benchmark()
    run_month_day_input()
    run_bad_input()
    run_profile()
