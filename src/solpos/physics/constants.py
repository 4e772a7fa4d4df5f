"""Constants for solar position and irradiance calculations.

References:
    Michalsky, J. 1988. The Astronomical Almanac's algorithm for approximate
        solar position (1950-2050). Solar Energy 40 (3), 227-235.
    Spencer, J. W. 1971. Fourier series representation of the position of
        the sun. Search 2 (5), 172.

All angles are in degrees unless otherwise noted.
"""

from typing import Final

# =============================================================================
# Solar Constants
# =============================================================================

#: Solar constant - extraterrestrial irradiance at mean sun-earth distance (W/m²)
SOLAR_CONSTANT: Final[float] = 1367.0

#: Days per year used for the orbital day angle
DAYS_PER_YEAR: Final[float] = 365.0

# =============================================================================
# Almanac (Michalsky 1988)
# =============================================================================

#: Julian day minus 2,400,000 at 0h UT on 1 January 1949
JULIAN_DAY_1949: Final[float] = 32916.5

#: Julian day minus 2,400,000 at noon 1 January 2000 (J2000.0)
JULIAN_DAY_J2000: Final[float] = 51545.0

#: First year of the almanac leap-day count
ALMANAC_BASE_YEAR: Final[int] = 1949

# =============================================================================
# Atmosphere
# =============================================================================

#: Standard sea-level pressure (millibars)
STANDARD_PRESSURE_MB: Final[float] = 1013.0

#: Reference temperature of the refraction correction (K)
REFRACTION_REFERENCE_TEMPERATURE_K: Final[float] = 283.0

#: Offset used by the refraction correction to convert °C to K
CELSIUS_OFFSET: Final[float] = 273.0

# =============================================================================
# Limits and markers
# =============================================================================

#: Unrefracted zenith angles are limited to 9° below the horizon
MAX_ZENITH: Final[float] = 99.0

#: Refracted elevations are limited to 9° below the horizon
MIN_REFRACTED_ELEVATION: Final[float] = -9.0

#: Largest refracted zenith angle for which air mass is defined
MAX_AIR_MASS_ZENITH: Final[float] = 93.0

#: Air mass reported when the sun is too far below the horizon
AIR_MASS_UNDEFINED: Final[float] = -1.0

#: Sunrise/sunset marker (minutes) for polar day and polar night
SUN_NEVER_SETS_OR_RISES: Final[float] = 2999.0

#: Minutes in half a day
HALF_DAY_MINUTES: Final[float] = 720.0
