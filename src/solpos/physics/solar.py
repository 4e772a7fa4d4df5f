"""Solar position and extraterrestrial irradiance formulas.

Reference: NREL SOLPOS 2.0 (Rymes, Wilcox; February 2001 revision).

This module implements the individual calculations the engine chains
together:
- Earth-sun distance (Spencer 1971)
- Ecliptic and celestial coordinates, sidereal time, hour angle
  (Michalsky 1988)
- Zenith and azimuth angles, sunset hour angle, sunrise/sunset
- Atmospheric refraction (Zimmerman, NREL)
- Relative optical air mass (Kasten and Young 1989)
- Perez Kt prime factors and shadow band correction (Drummond 1956)
- Extraterrestrial irradiance on horizontal, normal and tilted surfaces

All angles are in degrees unless otherwise noted. Functions take the sines
and cosines they share with other calculations as arguments so that the
engine evaluates each of them once per call.
"""

from __future__ import annotations

import math

from solpos.physics.constants import (
    AIR_MASS_UNDEFINED,
    ALMANAC_BASE_YEAR,
    CELSIUS_OFFSET,
    DAYS_PER_YEAR,
    HALF_DAY_MINUTES,
    JULIAN_DAY_1949,
    JULIAN_DAY_J2000,
    MAX_AIR_MASS_ZENITH,
    MAX_ZENITH,
    MIN_REFRACTED_ELEVATION,
    REFRACTION_REFERENCE_TEMPERATURE_K,
    STANDARD_PRESSURE_MB,
    SUN_NEVER_SETS_OR_RISES,
)


def _wrap(value: float, period: float) -> float:
    """Reduce ``value`` to [0, period)."""
    return value % period


def _clamp_unit(value: float) -> float:
    """Clamp a cosine to [-1, 1] against roundoff."""
    return max(-1.0, min(1.0, value))


# =============================================================================
# Orbit and time
# =============================================================================


def day_angle(daynum: int) -> float:
    """Calculate the orbital day angle.

    Iqbal, M. 1983. An Introduction to Solar Radiation, page 3.

    Args:
        daynum: Day of year (1-366).

    Returns:
        Day angle in degrees (0 on January 1).
    """
    return 360.0 * (daynum - 1) / DAYS_PER_YEAR


def earth_radius_vector(dayang: float) -> float:
    """Calculate the earth radius vector correction factor.

    Spencer (1971) Fourier series. Multiplying the solar constant by this
    factor gives the extraterrestrial irradiance for the day.

    Args:
        dayang: Day angle in degrees.

    Returns:
        Dimensionless correction factor (about 0.967 to 1.035).
    """
    d = math.radians(dayang)
    return (
        1.000110
        + 0.034221 * math.cos(d)
        + 0.001280 * math.sin(d)
        + 0.000719 * math.cos(2.0 * d)
        + 0.000077 * math.sin(2.0 * d)
    )


def universal_time(
    hour: int,
    minute: int,
    second: float,
    timezone: float,
    *,
    interval: int = 0,
) -> float:
    """Convert local standard time to universal time.

    Args:
        hour: Hour of day.
        minute: Minute of hour.
        second: Second of minute.
        timezone: Hours east of UTC.
        interval: Measurement interval in seconds. The time stamp marks the
            interval's end; the result is its midpoint.

    Returns:
        Universal time in decimal hours (may fall outside 0-24).
    """
    local_seconds = hour * 3600.0 + minute * 60.0 + second - interval / 2.0
    return local_seconds / 3600.0 - timezone


def julian_day(year: int, daynum: int, utime: float) -> float:
    """Calculate the Julian day minus 2,400,000.

    The offset keeps the value small enough to hold fractional days
    precisely. There is no century leap-year adjustment; the almanac is only
    valid for 1950-2050.

    Args:
        year: Four-digit year.
        daynum: Day of year.
        utime: Universal time in decimal hours.

    Returns:
        Julian day minus 2,400,000.
    """
    delta = year - ALMANAC_BASE_YEAR
    leap = int(delta / 4.0)
    return JULIAN_DAY_1949 + delta * 365.0 + leap + daynum + utime / 24.0


def ecliptic_time(julday: float) -> float:
    """Days since noon, 1 January 2000."""
    return julday - JULIAN_DAY_J2000


# =============================================================================
# Almanac coordinates (Michalsky 1988)
# =============================================================================


def mean_longitude(ectime: float) -> float:
    """Mean longitude of the sun in degrees, 0-360."""
    return _wrap(280.460 + 0.9856474 * ectime, 360.0)


def mean_anomaly(ectime: float) -> float:
    """Mean anomaly of the sun in degrees, 0-360."""
    return _wrap(357.528 + 0.9856003 * ectime, 360.0)


def ecliptic_longitude(mnlong: float, mnanom: float) -> float:
    """Calculate the ecliptic longitude of the sun.

    Args:
        mnlong: Mean longitude in degrees.
        mnanom: Mean anomaly in degrees.

    Returns:
        Ecliptic longitude in degrees, 0-360.
    """
    anomaly = math.radians(mnanom)
    return _wrap(
        mnlong + 1.915 * math.sin(anomaly) + 0.020 * math.sin(2.0 * anomaly), 360.0
    )


def obliquity_of_ecliptic(ectime: float) -> float:
    """Obliquity of the ecliptic in degrees."""
    return 23.439 - 4.0e-07 * ectime


def declination(ecobli: float, eclong: float) -> float:
    """Calculate solar declination.

    Args:
        ecobli: Obliquity of the ecliptic in degrees.
        eclong: Ecliptic longitude in degrees.

    Returns:
        Declination in degrees north.
    """
    return math.degrees(
        math.asin(math.sin(math.radians(ecobli)) * math.sin(math.radians(eclong)))
    )


def right_ascension(ecobli: float, eclong: float) -> float:
    """Calculate right ascension.

    Args:
        ecobli: Obliquity of the ecliptic in degrees.
        eclong: Ecliptic longitude in degrees.

    Returns:
        Right ascension in degrees, 0-360.
    """
    top = math.cos(math.radians(ecobli)) * math.sin(math.radians(eclong))
    bottom = math.cos(math.radians(eclong))
    rascen = math.degrees(math.atan2(top, bottom))
    if rascen < 0.0:
        rascen += 360.0
    return rascen


def greenwich_mean_sidereal_time(ectime: float, utime: float) -> float:
    """Greenwich mean sidereal time in hours, 0-24."""
    return _wrap(6.697375 + 0.0657098242 * ectime + utime, 24.0)


def local_mean_sidereal_time(gmst: float, longitude: float) -> float:
    """Local mean sidereal time in degrees, 0-360."""
    return _wrap(gmst * 15.0 + longitude, 360.0)


def hour_angle(lmst: float, rascen: float) -> float:
    """Calculate the hour angle of the sun.

    Args:
        lmst: Local mean sidereal time in degrees.
        rascen: Right ascension in degrees.

    Returns:
        Hour angle in degrees west of the meridian, -180 to 180.
        Negative before solar noon.
    """
    hrang = lmst - rascen
    if hrang < -180.0:
        hrang += 360.0
    elif hrang > 180.0:
        hrang -= 360.0
    return hrang


# =============================================================================
# Geometry
# =============================================================================


def zenith_no_refraction(
    sin_decl: float,
    cos_decl: float,
    sin_lat: float,
    cos_lat: float,
    cos_hrang: float,
) -> float:
    """Calculate the solar zenith angle without atmospheric refraction.

    cos(zenith) = sin(lat)*sin(decl) + cos(lat)*cos(decl)*cos(ha)

    Returns:
        Zenith angle in degrees, limited to 99 (9° below the horizon).
    """
    cos_zenith = _clamp_unit(sin_decl * sin_lat + cos_decl * cos_lat * cos_hrang)
    return min(math.degrees(math.acos(cos_zenith)), MAX_ZENITH)


def sunset_hour_angle(
    sin_decl: float,
    cos_decl: float,
    sin_lat: float,
    cos_lat: float,
    declin: float,
    latitude: float,
) -> float:
    """Calculate the sunset (and, by symmetry, sunrise) hour angle.

    Args:
        sin_decl: Sine of the declination.
        cos_decl: Cosine of the declination.
        sin_lat: Sine of the latitude.
        cos_lat: Cosine of the latitude.
        declin: Declination in degrees, used near the poles.
        latitude: Latitude in degrees, used near the poles.

    Returns:
        Sunset hour angle in degrees. 180 means the sun never sets,
        0 means it never rises.
    """
    cos_product = cos_decl * cos_lat
    if abs(cos_product) >= 0.001:
        cos_ssha = -sin_lat * sin_decl / cos_product
        if cos_ssha < -1.0:
            return 180.0
        if cos_ssha > 1.0:
            return 0.0
        return math.degrees(math.acos(cos_ssha))
    # At the poles: same hemisphere as the sun means 24 hours of daylight
    if (declin >= 0.0 and latitude > 0.0) or (declin < 0.0 and latitude < 0.0):
        return 180.0
    return 0.0


def shadow_band_correction(
    sin_decl: float,
    cos_decl: float,
    sin_lat: float,
    cos_lat: float,
    ssha: float,
    *,
    width: float,
    radius: float,
    sky_factor: float,
) -> float:
    """Calculate the shadow band correction factor.

    Drummond, A. J. 1956. A contribution to absolute pyrheliometry.
    Q. J. R. Meteorol. Soc. 82, 481-493.

    Args:
        sin_decl: Sine of the declination.
        cos_decl: Cosine of the declination.
        sin_lat: Sine of the latitude.
        cos_lat: Cosine of the latitude.
        ssha: Sunset hour angle in degrees.
        width: Shadow band width in cm.
        radius: Shadow band radius in cm.
        sky_factor: Shadow band sky factor.

    Returns:
        Factor applied to diffuse irradiance measured under the band.
    """
    p = 0.6366198 * width / radius * cos_decl**3
    t1 = sin_lat * sin_decl * math.radians(ssha)
    t2 = cos_lat * cos_decl * math.sin(math.radians(ssha))
    return sky_factor + 1.0 / (1.0 - p * (t1 + t2))


def true_solar_time(hrang: float) -> float:
    """True solar time in minutes from midnight."""
    return (180.0 + hrang) * 4.0


def solar_time_correction(
    tst: float,
    hour: int,
    minute: int,
    second: float,
    *,
    interval: int = 0,
) -> float:
    """Calculate true solar time minus local standard time.

    Args:
        tst: True solar time in minutes.
        hour: Hour of day.
        minute: Minute of hour.
        second: Second of minute.
        interval: Measurement interval in seconds; half of it is added back.

    Returns:
        Correction in minutes, bounded to ±720.
    """
    tstfix = tst - hour * 60.0 - minute - second / 60.0 + interval / 120.0
    while tstfix > HALF_DAY_MINUTES:
        tstfix -= 2.0 * HALF_DAY_MINUTES
    while tstfix < -HALF_DAY_MINUTES:
        tstfix += 2.0 * HALF_DAY_MINUTES
    return tstfix


def equation_of_time(tstfix: float, timezone: float, longitude: float) -> float:
    """Equation of time (true solar time minus local mean time), minutes."""
    return tstfix + 60.0 * timezone - 4.0 * longitude


def sunrise_sunset(ssha: float, tstfix: float) -> tuple[float, float]:
    """Calculate sunrise and sunset without refraction.

    Args:
        ssha: Sunset hour angle in degrees.
        tstfix: True solar time minus local standard time, minutes.

    Returns:
        Tuple of ``(sunrise, sunset)`` in minutes from local midnight.
        Polar night gives ``(2999, -2999)``; polar day gives ``(-2999, 2999)``.
    """
    if ssha <= 1.0:
        return SUN_NEVER_SETS_OR_RISES, -SUN_NEVER_SETS_OR_RISES
    if ssha >= 179.0:
        return -SUN_NEVER_SETS_OR_RISES, SUN_NEVER_SETS_OR_RISES
    return (
        HALF_DAY_MINUTES - 4.0 * ssha - tstfix,
        HALF_DAY_MINUTES + 4.0 * ssha - tstfix,
    )


def solar_azimuth(
    elevetr: float,
    sin_decl: float,
    sin_lat: float,
    cos_lat: float,
    hrang: float,
) -> float:
    """Calculate the solar azimuth angle.

    Iqbal, M. 1983. An Introduction to Solar Radiation, page 15.

    Args:
        elevetr: Unrefracted solar elevation in degrees.
        sin_decl: Sine of the declination.
        sin_lat: Sine of the latitude.
        cos_lat: Cosine of the latitude.
        hrang: Hour angle in degrees.

    Returns:
        Azimuth in degrees (N=0, E=90, S=180, W=270). 180 when the sun is
        at the zenith or the site is at a pole.
    """
    cos_elev = math.cos(math.radians(elevetr))
    sin_elev = math.sin(math.radians(elevetr))
    cos_product = cos_elev * cos_lat
    if abs(cos_product) < 0.001:
        return 180.0
    cos_azim = _clamp_unit((sin_elev * sin_lat - sin_decl) / cos_product)
    azim = 180.0 - math.degrees(math.acos(cos_azim))
    if hrang > 0:
        azim = 360.0 - azim
    return azim


# =============================================================================
# Atmosphere
# =============================================================================


def refraction_correction(elevetr: float, press: float, temp: float) -> float:
    """Calculate the atmospheric refraction correction.

    Zimmerman, John C. 1981. Sun-pointing programs and their accuracy.
    SAND81-0761, Sandia National Laboratories.

    Args:
        elevetr: Unrefracted solar elevation in degrees.
        press: Surface pressure in millibars.
        temp: Ambient temperature in °C.

    Returns:
        Correction in degrees to add to the unrefracted elevation.
        Zero above 85° elevation.
    """
    if elevetr > 85.0:
        return 0.0

    tanelev = math.tan(math.radians(elevetr))
    if elevetr >= 5.0:
        refcor = 58.1 / tanelev - 0.07 / tanelev**3 + 0.000086 / tanelev**5
    elif elevetr >= -0.575:
        e = elevetr
        refcor = 1735.0 + e * (-518.2 + e * (103.4 + e * (-12.79 + e * 0.711)))
    else:
        refcor = -20.774 / tanelev

    prestemp = (press * REFRACTION_REFERENCE_TEMPERATURE_K) / (
        STANDARD_PRESSURE_MB * (CELSIUS_OFFSET + temp)
    )
    # Arc seconds to degrees
    return refcor * prestemp / 3600.0


def refracted_elevation(elevetr: float, refcor: float) -> float:
    """Refracted elevation in degrees, limited to 9° below the horizon."""
    return max(elevetr + refcor, MIN_REFRACTED_ELEVATION)


def air_mass(zenref: float) -> float:
    """Calculate relative optical air mass.

    Kasten, F. and Young, A. 1989. Revised optical air mass tables and
    approximation formula. Applied Optics 28 (22), 4735-4738.

    Args:
        zenref: Refracted zenith angle in degrees.

    Returns:
        Relative air mass (1.0 at the zenith, about 38 at the horizon),
        or -1.0 when the sun is more than 3° below the horizon.

    Examples:
        >>> round(air_mass(0.0), 2)
        1.0
        >>> round(air_mass(60.0), 2)
        1.99
    """
    if zenref > MAX_AIR_MASS_ZENITH:
        return AIR_MASS_UNDEFINED
    return 1.0 / (
        math.cos(math.radians(zenref)) + 0.50572 * (96.07995 - zenref) ** -1.6364
    )


def pressure_corrected_air_mass(amass: float, press: float) -> float:
    """Scale air mass by local pressure relative to 1013 mb."""
    if amass == AIR_MASS_UNDEFINED:
        return AIR_MASS_UNDEFINED
    return amass * press / STANDARD_PRESSURE_MB


def unprime_factor(amass: float) -> float:
    """Calculate the factor that denormalizes Kt', Kn' and similar indices.

    Perez, R. et al. 1990. Making full use of the clearness index for
    parameterizing hourly insolation conditions. Solar Energy 45 (2),
    111-114.

    Args:
        amass: Relative air mass.

    Returns:
        Unprime factor; the prime factor is its reciprocal.
    """
    return 1.031 * math.exp(-1.4 / (0.9 + 9.4 / amass)) + 0.1


# =============================================================================
# Extraterrestrial irradiance
# =============================================================================


def extraterrestrial_normal(solcon: float, erv: float, coszen: float) -> float:
    """Direct normal irradiance at the top of the atmosphere (W/m²).

    Zero while the refracted sun is below the horizon.
    """
    if coszen <= 0.0:
        return 0.0
    return solcon * erv


def extraterrestrial_horizontal(etrn: float, coszen: float) -> float:
    """Global horizontal irradiance at the top of the atmosphere (W/m²)."""
    if coszen <= 0.0:
        return 0.0
    return etrn * coszen


def incidence_cosine(
    zenref: float,
    coszen: float,
    azim: float,
    tilt: float,
    aspect: float,
) -> float:
    """Calculate the cosine of the solar incidence angle on a tilted surface.

    Args:
        zenref: Refracted zenith angle in degrees.
        coszen: Cosine of ``zenref``.
        azim: Solar azimuth in degrees.
        tilt: Surface tilt from horizontal in degrees.
        aspect: Surface azimuth in degrees (N=0, E=90, S=180, W=270).

    Returns:
        Cosine of the angle between the sun and the surface normal.
        Negative when the sun is behind the surface.
    """
    azim_rad = math.radians(azim)
    aspect_rad = math.radians(aspect)
    tilt_rad = math.radians(tilt)
    return coszen * math.cos(tilt_rad) + math.sin(math.radians(zenref)) * math.sin(
        tilt_rad
    ) * (
        math.cos(azim_rad) * math.cos(aspect_rad)
        + math.sin(azim_rad) * math.sin(aspect_rad)
    )


def extraterrestrial_tilted(etrn: float, cosinc: float) -> float:
    """Top-of-atmosphere irradiance on a tilted surface (W/m²)."""
    if cosinc <= 0.0:
        return 0.0
    return etrn * cosinc
