"""Evaluate a record at regular times across one day.

The engine itself computes one instant. ``day_profile()`` repeats the call
on copies of a record over a time grid, for tables and daily totals.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import NamedTuple

import numpy as np

from solpos.calculation.engine import compute
from solpos.core.record import PositionRecord
from solpos.core.validation import ErrorCode

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 1440


class ProfileRow(NamedTuple):
    """Selected outputs at one time of day.

    Attributes:
        hour: Hour of day, local standard time.
        minute: Minute of hour.
        zenref: Refracted zenith angle in degrees.
        azim: Solar azimuth in degrees.
        etr: Top-of-atmosphere global horizontal irradiance (W/m²).
        etrtilt: Top-of-atmosphere irradiance on the panel (W/m²).
        amass: Relative air mass (-1 with the sun well below the horizon).
        error_code: Engine result for this time.
    """

    hour: int
    minute: int
    zenref: float | None
    azim: float | None
    etr: float | None
    etrtilt: float | None
    amass: float | None
    error_code: ErrorCode


@dataclass(frozen=True)
class DayProfile:
    """Outputs across one day.

    Attributes:
        rows: One row per time step, starting at midnight.
        step_minutes: Spacing of the rows.
        sretr: Sunrise in minutes from midnight, if computed.
        ssetr: Sunset in minutes from midnight, if computed.
    """

    rows: list[ProfileRow]
    step_minutes: int
    sretr: float | None
    ssetr: float | None

    @property
    def error_code(self) -> ErrorCode:
        """Union of the error codes of every row."""
        code = ErrorCode(0)
        for row in self.rows:
            code |= row.error_code
        return code

    def etr_insolation(self) -> float:
        """Daily top-of-atmosphere horizontal insolation in Wh/m².

        Rectangle rule over the time grid; rows without ``etr`` count as 0.
        """
        etr = np.array([row.etr or 0.0 for row in self.rows], dtype=float)
        return float(etr.sum() * self.step_minutes / 60.0)


def day_profile(record: PositionRecord, *, step_minutes: int = 60) -> DayProfile:
    """Compute a record at every ``step_minutes`` from midnight.

    The record itself is not modified; each time step runs on a copy with
    ``hour``, ``minute`` and ``second`` replaced.

    Args:
        record: Template record with location, date and selection filled in.
        step_minutes: Spacing of the time grid in minutes (1-1440).

    Returns:
        DayProfile with one row per time step.

    Raises:
        ValueError: If ``step_minutes`` is outside 1-1440.
    """
    if not 1 <= step_minutes <= MINUTES_PER_DAY:
        msg = f"Step {step_minutes} min outside valid range [1, {MINUTES_PER_DAY}]"
        raise ValueError(msg)

    rows: list[ProfileRow] = []
    last: PositionRecord | None = None
    for minute_of_day in np.arange(0, MINUTES_PER_DAY, step_minutes):
        hour, minute = divmod(int(minute_of_day), 60)
        sample = replace(record, hour=hour, minute=minute, second=0)
        code = compute(sample)
        rows.append(
            ProfileRow(
                hour=hour,
                minute=minute,
                zenref=sample.zenref,
                azim=sample.azim,
                etr=sample.etr,
                etrtilt=sample.etrtilt,
                amass=sample.amass,
                error_code=code,
            )
        )
        last = sample

    logger.debug("Computed %d profile rows at %d min", len(rows), step_minutes)
    return DayProfile(
        rows=rows,
        step_minutes=step_minutes,
        sretr=last.sretr if last is not None else None,
        ssetr=last.ssetr if last is not None else None,
    )
