"""Engine steps: one registered calculation per primitive function flag.

Each step reads named record fields through a ``StepContext`` and returns
the fields it produces. The registry orders the steps from these
declarations; see ``solpos.core.registry``.
"""

from __future__ import annotations

import math

from solpos.calculation.context import StepContext
from solpos.core.functions import Function
from solpos.core.registry import Step, register_step
from solpos.physics import calendar, solar

_TIME_FIELDS = ("hour", "minute", "second", "interval")


# =============================================================================
# Date conversion (not registered; direction depends on the day-of-year bit)
# =============================================================================


def _date_from_daynum(ctx: StepContext) -> dict[str, int]:
    month, day = calendar.month_and_day(ctx["year"], ctx["daynum"])
    return {"month": month, "day": day}


def _daynum_from_date(ctx: StepContext) -> dict[str, int]:
    return {"daynum": calendar.day_of_year(ctx["year"], ctx["month"], ctx["day"])}


DATE_FROM_DAYNUM = Step(
    function=Function.STEP_DOY,
    name="date_from_daynum",
    reads=("year", "daynum"),
    writes=("month", "day"),
    compute=_date_from_daynum,
)

DAYNUM_FROM_DATE = Step(
    function=Function.STEP_DOY,
    name="daynum_from_date",
    reads=("year", "month", "day"),
    writes=("daynum",),
    compute=_daynum_from_date,
)


# =============================================================================
# Registered steps
# =============================================================================


@register_step(
    Function.STEP_GEOM,
    reads=("year", "daynum", *_TIME_FIELDS, "timezone", "longitude"),
    writes=(
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
    ),
)
def geometry(ctx: StepContext) -> dict[str, float]:
    """Earth-sun distance, almanac coordinates and hour angle."""
    dayang = solar.day_angle(ctx["daynum"])
    utime = solar.universal_time(
        ctx["hour"],
        ctx["minute"],
        ctx["second"],
        ctx["timezone"],
        interval=ctx["interval"],
    )
    julday = solar.julian_day(ctx["year"], ctx["daynum"], utime)
    ectime = solar.ecliptic_time(julday)
    mnlong = solar.mean_longitude(ectime)
    mnanom = solar.mean_anomaly(ectime)
    eclong = solar.ecliptic_longitude(mnlong, mnanom)
    ecobli = solar.obliquity_of_ecliptic(ectime)
    rascen = solar.right_ascension(ecobli, eclong)
    gmst = solar.greenwich_mean_sidereal_time(ectime, utime)
    lmst = solar.local_mean_sidereal_time(gmst, ctx["longitude"])
    return {
        "dayang": dayang,
        "erv": solar.earth_radius_vector(dayang),
        "utime": utime,
        "julday": julday,
        "ectime": ectime,
        "mnlong": mnlong,
        "mnanom": mnanom,
        "eclong": eclong,
        "ecobli": ecobli,
        "declin": solar.declination(ecobli, eclong),
        "rascen": rascen,
        "gmst": gmst,
        "lmst": lmst,
        "hrang": solar.hour_angle(lmst, rascen),
    }


@register_step(
    Function.STEP_ZENETR,
    reads=("declin", "latitude", "hrang"),
    writes=("zenetr", "elevetr"),
)
def zenith_etr(ctx: StepContext) -> dict[str, float]:
    zenetr = solar.zenith_no_refraction(
        ctx.sin_decl, ctx.cos_decl, ctx.sin_lat, ctx.cos_lat, ctx.cos_hrang
    )
    return {"zenetr": zenetr, "elevetr": 90.0 - zenetr}


@register_step(
    Function.STEP_SSHA,
    reads=("declin", "latitude"),
    writes=("ssha",),
)
def sunset_angle(ctx: StepContext) -> dict[str, float]:
    return {
        "ssha": solar.sunset_hour_angle(
            ctx.sin_decl,
            ctx.cos_decl,
            ctx.sin_lat,
            ctx.cos_lat,
            ctx["declin"],
            ctx["latitude"],
        )
    }


@register_step(
    Function.STEP_SBCF,
    reads=("declin", "latitude", "ssha", "sbwid", "sbrad", "sbsky"),
    writes=("sbcf",),
)
def shadow_band(ctx: StepContext) -> dict[str, float]:
    return {
        "sbcf": solar.shadow_band_correction(
            ctx.sin_decl,
            ctx.cos_decl,
            ctx.sin_lat,
            ctx.cos_lat,
            ctx["ssha"],
            width=ctx["sbwid"],
            radius=ctx["sbrad"],
            sky_factor=ctx["sbsky"],
        )
    }


@register_step(
    Function.STEP_TST,
    reads=("hrang", *_TIME_FIELDS, "timezone", "longitude"),
    writes=("tst", "tstfix", "eqntim"),
)
def solar_time(ctx: StepContext) -> dict[str, float]:
    """True solar time, its offset from clock time and the equation of time."""
    tst = solar.true_solar_time(ctx["hrang"])
    tstfix = solar.solar_time_correction(
        tst, ctx["hour"], ctx["minute"], ctx["second"], interval=ctx["interval"]
    )
    return {
        "tst": tst,
        "tstfix": tstfix,
        "eqntim": solar.equation_of_time(tstfix, ctx["timezone"], ctx["longitude"]),
    }


@register_step(
    Function.STEP_SRSS,
    reads=("ssha", "tstfix"),
    writes=("sretr", "ssetr"),
)
def sunrise_sunset(ctx: StepContext) -> dict[str, float]:
    sretr, ssetr = solar.sunrise_sunset(ctx["ssha"], ctx["tstfix"])
    return {"sretr": sretr, "ssetr": ssetr}


@register_step(
    Function.STEP_SOLAZM,
    reads=("elevetr", "declin", "latitude", "hrang"),
    writes=("azim",),
)
def azimuth(ctx: StepContext) -> dict[str, float]:
    return {
        "azim": solar.solar_azimuth(
            ctx["elevetr"], ctx.sin_decl, ctx.sin_lat, ctx.cos_lat, ctx["hrang"]
        )
    }


@register_step(
    Function.STEP_REFRAC,
    reads=("elevetr", "press", "temp"),
    writes=("elevref", "zenref", "coszen"),
)
def refraction(ctx: StepContext) -> dict[str, float]:
    """Refraction-corrected elevation, zenith and cosine of zenith."""
    refcor = solar.refraction_correction(ctx["elevetr"], ctx["press"], ctx["temp"])
    elevref = solar.refracted_elevation(ctx["elevetr"], refcor)
    zenref = 90.0 - elevref
    return {
        "elevref": elevref,
        "zenref": zenref,
        "coszen": math.cos(math.radians(zenref)),
    }


@register_step(
    Function.STEP_AMASS,
    reads=("zenref", "press"),
    writes=("amass", "ampress"),
)
def air_mass(ctx: StepContext) -> dict[str, float]:
    amass = solar.air_mass(ctx["zenref"])
    return {
        "amass": amass,
        "ampress": solar.pressure_corrected_air_mass(amass, ctx["press"]),
    }


@register_step(
    Function.STEP_PRIME,
    reads=("amass",),
    writes=("unprime", "prime"),
)
def prime(ctx: StepContext) -> dict[str, float]:
    unprime = solar.unprime_factor(ctx["amass"])
    return {"unprime": unprime, "prime": 1.0 / unprime}


@register_step(
    Function.STEP_ETR,
    reads=("coszen", "erv", "solcon"),
    writes=("etrn", "etr"),
)
def extraterrestrial(ctx: StepContext) -> dict[str, float]:
    etrn = solar.extraterrestrial_normal(ctx["solcon"], ctx["erv"], ctx["coszen"])
    return {"etrn": etrn, "etr": solar.extraterrestrial_horizontal(etrn, ctx["coszen"])}


@register_step(
    Function.STEP_TILT,
    reads=("zenref", "coszen", "azim", "tilt", "aspect", "etrn"),
    writes=("cosinc", "etrtilt"),
)
def tilted_surface(ctx: StepContext) -> dict[str, float]:
    """Incidence angle and irradiance on the configured panel."""
    cosinc = solar.incidence_cosine(
        ctx["zenref"], ctx["coszen"], ctx["azim"], ctx["tilt"], ctx["aspect"]
    )
    return {
        "cosinc": cosinc,
        "etrtilt": solar.extraterrestrial_tilted(ctx["etrn"], cosinc),
    }
