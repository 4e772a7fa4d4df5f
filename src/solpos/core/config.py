"""Pydantic configuration models for solar position calculations.

This module defines a file format for describing one calculation: where,
when, under what atmosphere, for which surface, and which outputs. Files
can be YAML or JSON.

The configuration hierarchy:
- SiteConfig (top-level)
  - LocationConfig
  - TimeConfig
  - AtmosphereConfig
  - SurfaceConfig
  - ShadowBandConfig

Only structure and types are checked here. Range checks belong to the
engine, which reports them through its error code instead of refusing the
input.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from solpos.core.functions import Function, function_from_names
from solpos.core.record import PositionRecord
from solpos.physics.constants import SOLAR_CONSTANT, STANDARD_PRESSURE_MB


class LocationConfig(BaseModel):
    """Geographic location configuration."""

    model_config = ConfigDict(frozen=True)

    latitude: Annotated[float, Field(description="Latitude in degrees north")]
    longitude: Annotated[float, Field(description="Longitude in degrees east")]
    timezone: Annotated[
        float, Field(description="Hours east of UTC, standard time (no DST)")
    ]


class TimeConfig(BaseModel):
    """Date and local standard time.

    Give either ``day_of_year`` or both ``month`` and ``day``.
    """

    model_config = ConfigDict(frozen=True)

    year: int
    day_of_year: int | None = None
    month: int | None = None
    day: int | None = None
    hour: int
    minute: int = 0
    second: float = 0.0
    interval: Annotated[
        int, Field(default=0, description="Measurement interval in seconds")
    ] = 0

    @model_validator(mode="after")
    def validate_date_form(self) -> TimeConfig:
        """Ensure exactly one of day-of-year or month/day is given."""
        if self.day_of_year is not None:
            if self.month is not None or self.day is not None:
                msg = "Give either day_of_year or month and day, not both"
                raise ValueError(msg)
        elif self.month is None or self.day is None:
            msg = "Give day_of_year or both month and day"
            raise ValueError(msg)
        return self

    @property
    def uses_day_of_year(self) -> bool:
        """True when the date is given as a day of year."""
        return self.day_of_year is not None


class AtmosphereConfig(BaseModel):
    """Atmospheric conditions for refraction and pressure-corrected air mass."""

    model_config = ConfigDict(frozen=True)

    pressure: Annotated[
        float, Field(default=STANDARD_PRESSURE_MB, description="Pressure in mb")
    ] = STANDARD_PRESSURE_MB
    temperature: Annotated[
        float, Field(default=10.0, description="Temperature in °C")
    ] = 10.0


class SurfaceConfig(BaseModel):
    """Receiving surface orientation."""

    model_config = ConfigDict(frozen=True)

    tilt: Annotated[
        float, Field(default=0.0, description="Tilt from horizontal in degrees")
    ] = 0.0
    aspect: Annotated[
        float,
        Field(default=180.0, description="Azimuth the surface faces, N=0 E=90"),
    ] = 180.0


class ShadowBandConfig(BaseModel):
    """Shadow band geometry for diffuse sensor correction."""

    model_config = ConfigDict(frozen=True)

    width: Annotated[float, Field(default=7.6, description="Band width in cm")] = 7.6
    radius: Annotated[
        float, Field(default=31.7, description="Band radius in cm")
    ] = 31.7
    sky_factor: Annotated[
        float, Field(default=0.04, description="Sky factor")
    ] = 0.04


class SiteConfig(BaseModel):
    """Top-level calculation configuration."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(default="Solar Position")
    location: LocationConfig
    time: TimeConfig
    atmosphere: AtmosphereConfig = Field(default_factory=AtmosphereConfig)
    surface: SurfaceConfig = Field(default_factory=SurfaceConfig)
    shadow_band: ShadowBandConfig = Field(default_factory=ShadowBandConfig)
    solar_constant: float = SOLAR_CONSTANT
    functions: list[str] = Field(
        default_factory=lambda: ["ALL"],
        description="Function flag names, e.g. [REFRAC, SBCF]",
    )

    @field_validator("functions", mode="after")
    @classmethod
    def validate_function_names(cls, v: list[str]) -> list[str]:
        """Ensure every name is a Function member."""
        unknown = [name for name in v if name.upper() not in Function.__members__]
        if unknown:
            available = ", ".join(Function.__members__)
            msg = f"Unknown functions {unknown}. Available: {available}"
            raise ValueError(msg)
        return [name.upper() for name in v]

    @property
    def function(self) -> Function:
        """Requested flags, with the day-of-year bit matching the date form."""
        function = function_from_names(self.functions)
        if self.time.uses_day_of_year:
            return function | Function.DOY
        return function & ~Function.DOY

    def to_record(self) -> PositionRecord:
        """Build an engine record from this configuration."""
        return PositionRecord(
            latitude=self.location.latitude,
            longitude=self.location.longitude,
            timezone=self.location.timezone,
            year=self.time.year,
            daynum=self.time.day_of_year,
            month=self.time.month,
            day=self.time.day,
            hour=self.time.hour,
            minute=self.time.minute,
            second=self.time.second,
            interval=self.time.interval,
            press=self.atmosphere.pressure,
            temp=self.atmosphere.temperature,
            tilt=self.surface.tilt,
            aspect=self.surface.aspect,
            sbwid=self.shadow_band.width,
            sbrad=self.shadow_band.radius,
            sbsky=self.shadow_band.sky_factor,
            solcon=self.solar_constant,
            function=self.function,
        )


def load_config(path: str | Path) -> SiteConfig:
    """Load a site configuration from a YAML or JSON file.

    Args:
        path: Path to configuration file.

    Returns:
        Validated SiteConfig object.

    Raises:
        FileNotFoundError: If file doesn't exist.
        ValueError: If configuration is invalid.
    """
    path = Path(path)

    if not path.exists():
        msg = f"Configuration file not found: {path}"
        raise FileNotFoundError(msg)

    with path.open() as f:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    return validate_config(data or {})


def save_config(config: SiteConfig, path: str | Path) -> None:
    """Save a site configuration to a YAML or JSON file.

    Args:
        config: Configuration to save.
        path: Output file path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", exclude_none=True)

    with path.open("w") as f:
        if path.suffix in (".yaml", ".yml"):
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
        else:
            json.dump(data, f, indent=2)


def validate_config(data: dict[str, Any]) -> SiteConfig:
    """Validate configuration data without loading from file.

    Args:
        data: Configuration dictionary.

    Returns:
        Validated SiteConfig object.

    Raises:
        pydantic.ValidationError: If the data is invalid.
    """
    return SiteConfig.model_validate(data)
