"""Tests for the step registry."""

from __future__ import annotations

from typing import Any

import pytest

from solpos.calculation.context import StepContext
from solpos.core.functions import Function
from solpos.core.registry import (
    Step,
    StepRegistry,
    get_registry,
    register_step,
)


def _noop(ctx: StepContext) -> dict[str, Any]:
    del ctx  # Unused in test
    return {}


def _step(
    function: Function,
    name: str,
    reads: tuple[str, ...],
    writes: tuple[str, ...],
) -> Step:
    return Step(function=function, name=name, reads=reads, writes=writes, compute=_noop)


class TestStepRegistry:
    """Tests for StepRegistry class."""

    def test_register_and_get(self) -> None:
        """Register and retrieve a step."""
        registry = StepRegistry()
        step = _step(Function.STEP_AMASS, "air_mass", ("zenref",), ("amass",))
        registry.register(step)
        assert registry.get(Function.STEP_AMASS) is step
        assert Function.STEP_AMASS in registry
        assert len(registry) == 1

    def test_duplicate_registration_error(self) -> None:
        """Error on a different step for the same flag."""
        registry = StepRegistry()
        registry.register(_step(Function.STEP_AMASS, "air_mass", (), ("amass",)))
        with pytest.raises(ValueError, match="already registered"):
            registry.register(_step(Function.STEP_AMASS, "other", (), ("amass",)))

    def test_same_step_reregistration_allowed(self) -> None:
        """Re-registering under the same name replaces the step."""
        registry = StepRegistry()
        registry.register(_step(Function.STEP_AMASS, "air_mass", (), ("amass",)))
        replacement = _step(Function.STEP_AMASS, "air_mass", (), ("amass", "x"))
        registry.register(replacement)
        assert registry.get(Function.STEP_AMASS) is replacement

    def test_get_missing(self) -> None:
        """Unknown flags raise KeyError."""
        registry = StepRegistry()
        with pytest.raises(KeyError, match="No step registered"):
            registry.get(Function.STEP_TILT)

    def test_writers(self) -> None:
        """Each written field maps to its step."""
        registry = StepRegistry()
        step = _step(Function.STEP_PRIME, "prime", ("amass",), ("prime", "unprime"))
        registry.register(step)
        assert registry.writers() == {"prime": step, "unprime": step}

    def test_clear(self) -> None:
        """Clear removes every step."""
        registry = StepRegistry()
        registry.register(_step(Function.STEP_AMASS, "air_mass", (), ("amass",)))
        registry.clear()
        assert len(registry) == 0
        assert registry.ordered() == ()


class TestOrdering:
    """Tests for dependency ordering."""

    def test_readers_after_writers(self) -> None:
        """A step runs after the step producing its input."""
        registry = StepRegistry()
        prime = registry.register(
            _step(Function.STEP_PRIME, "prime", ("amass",), ("prime",))
        )
        amass = registry.register(
            _step(Function.STEP_AMASS, "air_mass", ("zenref",), ("amass",))
        )
        refrac = registry.register(
            _step(Function.STEP_REFRAC, "refraction", (), ("zenref",))
        )
        assert registry.ordered() == (refrac, amass, prime)

    def test_ties_by_bit(self) -> None:
        """Independent steps run lowest bit first."""
        registry = StepRegistry()
        tilt = registry.register(_step(Function.STEP_TILT, "tilt", (), ("a",)))
        geom = registry.register(_step(Function.STEP_GEOM, "geom", (), ("b",)))
        assert registry.ordered() == (geom, tilt)

    def test_order_cached_until_register(self) -> None:
        """The order is reused until the registry changes."""
        registry = StepRegistry()
        registry.register(_step(Function.STEP_GEOM, "geom", (), ("b",)))
        first = registry.ordered()
        assert registry.ordered() is first
        registry.register(_step(Function.STEP_TILT, "tilt", ("b",), ("a",)))
        assert len(registry.ordered()) == 2

    def test_cycle(self) -> None:
        """Circular reads and writes are rejected."""
        registry = StepRegistry()
        registry.register(_step(Function.STEP_GEOM, "a", ("y",), ("x",)))
        registry.register(_step(Function.STEP_TILT, "b", ("x",), ("y",)))
        with pytest.raises(ValueError, match="cycle"):
            registry.ordered()

    def test_builtin_order(self) -> None:
        """The engine's own steps are ordered by their dependencies."""
        import solpos.calculation.steps  # noqa: F401

        names = [step.name for step in get_registry().ordered()]
        assert names[0] == "geometry"
        assert names.index("zenith_etr") < names.index("refraction")
        assert names.index("refraction") < names.index("air_mass")
        assert names.index("air_mass") < names.index("prime")
        assert names.index("sunset_angle") < names.index("shadow_band")
        assert names.index("solar_time") < names.index("sunrise_sunset")
        assert names.index("azimuth") < names.index("tilted_surface")
        assert names.index("extraterrestrial") < names.index("tilted_surface")


class TestDecorator:
    """Tests for register_step decorator."""

    def test_registers_into_given_registry(self) -> None:
        """The decorator returns the registered Step."""
        registry = StepRegistry()

        @register_step(
            Function.STEP_AMASS,
            reads=("zenref",),
            writes=("amass",),
            registry=registry,
        )
        def air_mass(ctx: StepContext) -> dict[str, float]:
            return {"amass": 1.0 / ctx["zenref"]}

        assert isinstance(air_mass, Step)
        assert air_mass.name == "air_mass"
        assert registry.get(Function.STEP_AMASS) is air_mass
        assert air_mass.compute(StepContext({"zenref": 2.0})) == {"amass": 0.5}

    def test_global_registry_singleton(self) -> None:
        """get_registry returns the same instance."""
        assert get_registry() is get_registry()
