"""Day-of-year and month/day conversion.

Gregorian leap years; the engine itself only accepts 1950-2050.
"""

from __future__ import annotations

from typing import Final

#: Days elapsed before the first of each month, indexed by month (1-12).
_CUMULATIVE_DAYS: Final[tuple[tuple[int, ...], tuple[int, ...]]] = (
    (0, 0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334),
    (0, 0, 31, 60, 91, 121, 152, 182, 213, 244, 274, 305, 335),
)


def is_leap_year(year: int) -> bool:
    """Return True if ``year`` is a Gregorian leap year."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_year(year: int) -> int:
    """Number of days in ``year`` (365 or 366)."""
    return 366 if is_leap_year(year) else 365


def day_of_year(year: int, month: int, day: int) -> int:
    """Convert a month and day of month to the day of year.

    Args:
        year: Calendar year.
        month: Month (1-12).
        day: Day of month. Not checked against the month length, so
            February 30 maps to March 1 or 2.

    Returns:
        Day of year (January 1 = 1).

    Raises:
        ValueError: If ``month`` is outside 1-12 or not a whole number.

    Examples:
        >>> day_of_year(1999, 7, 22)
        203
    """
    if not 1 <= month <= 12:
        msg = f"Month {month} outside valid range [1, 12]"
        raise ValueError(msg)
    if month != int(month):
        msg = f"Month {month} is not a whole number"
        raise ValueError(msg)
    return _CUMULATIVE_DAYS[is_leap_year(year)][int(month)] + day


def month_and_day(year: int, daynum: int) -> tuple[int, int]:
    """Convert a day of year to ``(month, day)``.

    Args:
        year: Calendar year.
        daynum: Day of year (1 to 365, or 366 in leap years).

    Returns:
        Tuple of month (1-12) and day of month.

    Raises:
        ValueError: If ``daynum`` does not exist in ``year``.

    Examples:
        >>> month_and_day(1999, 203)
        (7, 22)
    """
    if not 1 <= daynum <= days_in_year(year):
        msg = f"Day of year {daynum} does not exist in {year}"
        raise ValueError(msg)
    table = _CUMULATIVE_DAYS[is_leap_year(year)]
    month = 12
    while daynum <= table[month]:
        month -= 1
    return month, daynum - table[month]
