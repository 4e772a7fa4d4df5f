"""Physics module for solar position calculations.

This module provides the formulas behind the engine:
- Calendar conversion between day of year and month/day
- Almanac solar coordinates (Michalsky 1988)
- Refraction, air mass and extraterrestrial irradiance

All angles are in degrees unless otherwise noted.
"""

from solpos.physics.calendar import (
    day_of_year,
    days_in_year,
    is_leap_year,
    month_and_day,
)
from solpos.physics.constants import (
    SOLAR_CONSTANT,
    STANDARD_PRESSURE_MB,
)
from solpos.physics.solar import (
    air_mass,
    declination,
    earth_radius_vector,
    extraterrestrial_normal,
    incidence_cosine,
    refraction_correction,
    solar_azimuth,
    unprime_factor,
)

__all__ = [
    # Constants
    "SOLAR_CONSTANT",
    "STANDARD_PRESSURE_MB",
    # Calendar
    "is_leap_year",
    "days_in_year",
    "day_of_year",
    "month_and_day",
    # Solar
    "earth_radius_vector",
    "declination",
    "solar_azimuth",
    "refraction_correction",
    "air_mass",
    "unprime_factor",
    "extraterrestrial_normal",
    "incidence_cosine",
]
