"""Step registry and execution ordering for the solar position engine.

Engine steps register themselves at import time with the ``@register_step``
decorator, declaring the record fields they read and write. The registry
derives the dependency graph from those declarations (a step depends on
every step that writes a field it reads) and computes one fixed execution
order, tie-broken by flag bit.

Usage:
    @register_step(Function.STEP_AMASS, reads=("zenref",), writes=("amass",))
    def air_mass_step(ctx: StepContext) -> dict[str, float]:
        ...

    registry = get_registry()
    for step in registry.ordered():
        ...
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from graphlib import CycleError, TopologicalSorter
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from solpos.calculation.context import StepContext
    from solpos.core.functions import Function

StepFunction = Callable[["StepContext"], Mapping[str, Any]]

# Global registry instance
_registry: StepRegistry | None = None


@dataclass(frozen=True)
class Step:
    """One calculation of the engine.

    Attributes:
        function: Primitive flag that selects this step.
        name: Step name used in logs.
        reads: Record fields the step consumes.
        writes: Record fields the step produces.
        compute: Callable returning the produced values keyed by field.
    """

    function: Function
    name: str
    reads: tuple[str, ...]
    writes: tuple[str, ...]
    compute: StepFunction


class StepRegistry:
    """Registry of engine steps keyed by their primitive flag."""

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._steps: dict[Function, Step] = {}
        self._order: tuple[Step, ...] | None = None

    def register(self, step: Step) -> Step:
        """Register a step.

        Args:
            step: The step to register.

        Returns:
            The registered step.

        Raises:
            ValueError: If a different step is already registered for the
                same flag.
        """
        existing = self._steps.get(step.function)
        if existing is not None and existing.name != step.name:
            msg = (
                f"Step for {step.function.name} already registered "
                f"as '{existing.name}'"
            )
            raise ValueError(msg)

        self._steps[step.function] = step
        self._order = None
        return step

    def get(self, function: Function) -> Step:
        """Get the step registered for a primitive flag.

        Raises:
            KeyError: If no step is registered for the flag.
        """
        if function not in self._steps:
            available = [f.name for f in self._steps]
            msg = f"No step registered for {function!r}. Available: {available}"
            raise KeyError(msg)
        return self._steps[function]

    def __contains__(self, function: object) -> bool:
        return function in self._steps

    def __len__(self) -> int:
        return len(self._steps)

    def writers(self) -> dict[str, Step]:
        """Map each produced field to the step that writes it."""
        return {name: step for step in self._steps.values() for name in step.writes}

    def ordered(self) -> tuple[Step, ...]:
        """Return every registered step in dependency order.

        The order is computed once and reused until another step is
        registered.

        Raises:
            ValueError: If the declared reads and writes form a cycle.
        """
        if self._order is None:
            self._order = self._topological_order()
        return self._order

    def _topological_order(self) -> tuple[Step, ...]:
        writers = self.writers()
        sorter: TopologicalSorter[Function] = TopologicalSorter()
        for step in self._steps.values():
            predecessors = {
                writers[name].function
                for name in step.reads
                if name in writers and writers[name] is not step
            }
            sorter.add(step.function, *predecessors)

        order: list[Step] = []
        try:
            sorter.prepare()
        except CycleError as e:
            msg = f"Step dependencies form a cycle: {e.args[1]}"
            raise ValueError(msg) from e
        while sorter.is_active():
            ready = sorted(sorter.get_ready(), key=lambda f: f.value)
            for function in ready:
                order.append(self._steps[function])
                sorter.done(function)
        return tuple(order)

    def clear(self) -> None:
        """Remove all registered steps."""
        self._steps.clear()
        self._order = None


def get_registry() -> StepRegistry:
    """Get the global step registry.

    Creates the registry on first call.

    Returns:
        The global StepRegistry instance.
    """
    global _registry
    if _registry is None:
        _registry = StepRegistry()
    return _registry


def register_step(
    function: Function,
    *,
    reads: tuple[str, ...],
    writes: tuple[str, ...],
    registry: StepRegistry | None = None,
) -> Callable[[StepFunction], Step]:
    """Decorator to register a step function.

    Args:
        function: Primitive flag selecting the step.
        reads: Record fields the step consumes.
        writes: Record fields the step produces.
        registry: Registry to add to. Defaults to the global registry.

    Returns:
        Decorator turning the function into a registered ``Step``.
    """

    def decorator(func: StepFunction) -> Step:
        step = Step(
            function=function,
            name=func.__name__,
            reads=reads,
            writes=writes,
            compute=func,
        )
        target = registry if registry is not None else get_registry()
        return target.register(step)

    return decorator
