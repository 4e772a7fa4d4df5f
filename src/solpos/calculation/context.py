"""Read-only view of record values handed to each engine step."""

from __future__ import annotations

import math
from collections.abc import Mapping
from functools import cached_property
from types import MappingProxyType
from typing import Any


class StepContext:
    """Values visible to engine steps during one call.

    Steps read inputs and earlier results through item access and return
    their own results; they never write to the context or the record. The
    sines and cosines shared by the zenith, sunset, shadow band and azimuth
    steps are cached so that each is evaluated at most once per call.
    """

    def __init__(self, values: Mapping[str, Any]) -> None:
        """Initialize context.

        Args:
            values: Live mapping of field values, updated by the engine as
                steps complete.
        """
        self._values = MappingProxyType(values)

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def get(self, name: str, default: Any = None) -> Any:
        """Return a field value or ``default`` if the field is unknown."""
        return self._values.get(name, default)

    @property
    def values(self) -> Mapping[str, Any]:
        """Read-only mapping of every field value."""
        return self._values

    @cached_property
    def sin_decl(self) -> float:
        """Sine of the solar declination."""
        return math.sin(math.radians(self["declin"]))

    @cached_property
    def cos_decl(self) -> float:
        """Cosine of the solar declination."""
        return math.cos(math.radians(self["declin"]))

    @cached_property
    def sin_lat(self) -> float:
        """Sine of the latitude."""
        return math.sin(math.radians(self["latitude"]))

    @cached_property
    def cos_lat(self) -> float:
        """Cosine of the latitude."""
        return math.cos(math.radians(self["latitude"]))

    @cached_property
    def cos_hrang(self) -> float:
        """Cosine of the hour angle."""
        return math.cos(math.radians(self["hrang"]))
