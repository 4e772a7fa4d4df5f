"""Function selection flags for the solar position engine.

A ``Function`` value tells the engine which calculations to run. There are
two kinds of members:

- Primitive steps (``STEP_*``): one bit each, naming a single calculation.
  Requesting a primitive alone runs only that calculation, so every
  intermediate value it reads must already be on the record.
- Composites (``DOY``, ``GEOM``, ... ``ALL``): the primitive plus every
  step it depends on. These are what most callers want.

Composites are combined with ``|``. The day-of-year bit is the only one that
may be cleared from a composite (``function & ~Function.DOY``); with it clear
the engine reads month and day and produces the day of year instead.

Usage:
    record.function = Function.REFRAC | Function.SBCF
    record.function &= ~Function.DOY  # accept month/day input
"""

from __future__ import annotations

from enum import Flag


class Function(Flag):
    """Primitive calculation steps and their dependency-closed composites."""

    # Primitive steps
    STEP_DOY = 0x0001
    STEP_GEOM = 0x0002
    STEP_ZENETR = 0x0004
    STEP_SSHA = 0x0008
    STEP_SBCF = 0x0010
    STEP_TST = 0x0020
    STEP_SRSS = 0x0040
    STEP_SOLAZM = 0x0080
    STEP_REFRAC = 0x0100
    STEP_AMASS = 0x0200
    STEP_PRIME = 0x0400
    STEP_TILT = 0x0800
    STEP_ETR = 0x1000

    # Composites
    DOY = STEP_DOY
    GEOM = STEP_GEOM | DOY
    ZENETR = STEP_ZENETR | GEOM
    SSHA = STEP_SSHA | GEOM
    SBCF = STEP_SBCF | SSHA
    TST = STEP_TST | GEOM
    SRSS = STEP_SRSS | SSHA | TST
    SOLAZM = STEP_SOLAZM | ZENETR
    REFRAC = STEP_REFRAC | ZENETR
    AMASS = STEP_AMASS | REFRAC
    PRIME = STEP_PRIME | AMASS
    ETR = STEP_ETR | REFRAC
    TILT = STEP_TILT | SOLAZM | REFRAC | ETR
    ALL = 0x1FFF

    @property
    def steps(self) -> list[Function]:
        """Primitive steps contained in this selection, lowest bit first."""
        return sorted(self, key=lambda member: member.value)


#: Direct prerequisites of each primitive step.
PREREQUISITES: dict[Function, Function] = {
    Function.STEP_DOY: Function(0),
    Function.STEP_GEOM: Function.STEP_DOY,
    Function.STEP_ZENETR: Function.STEP_GEOM,
    Function.STEP_SSHA: Function.STEP_GEOM,
    Function.STEP_SBCF: Function.STEP_SSHA,
    Function.STEP_TST: Function.STEP_GEOM,
    Function.STEP_SRSS: Function.STEP_SSHA | Function.STEP_TST,
    Function.STEP_SOLAZM: Function.STEP_ZENETR,
    Function.STEP_REFRAC: Function.STEP_ZENETR,
    Function.STEP_AMASS: Function.STEP_REFRAC,
    Function.STEP_PRIME: Function.STEP_AMASS,
    Function.STEP_ETR: Function.STEP_REFRAC,
    Function.STEP_TILT: (
        Function.STEP_SOLAZM | Function.STEP_REFRAC | Function.STEP_ETR
    ),
}


def prerequisites(function: Function) -> Function:
    """Expand a selection to the transitive closure of its prerequisites.

    Args:
        function: Any combination of primitive or composite flags.

    Returns:
        The selection plus every primitive step it requires.

    Examples:
        >>> prerequisites(Function.STEP_AMASS) == Function.AMASS
        True
    """
    closed = function
    pending = list(function)
    while pending:
        step = pending.pop()
        for required in PREREQUISITES[step]:
            if required not in closed:
                closed |= required
                pending.append(required)
    return closed


def coerce_function(value: Function | int) -> tuple[Function, bool]:
    """Convert a caller-supplied selector into a ``Function``.

    Args:
        value: A ``Function`` or a raw integer bitmask.

    Returns:
        Tuple of ``(function, valid)``. Undefined bits are dropped and
        reported through ``valid=False``.
    """
    if isinstance(value, Function):
        return value, True
    defined = int(value) & Function.ALL.value
    return Function(defined), defined == int(value)


def function_from_names(names: list[str]) -> Function:
    """Combine flag names such as ``["REFRAC", "SBCF"]`` into one selection.

    Raises:
        KeyError: If a name is not a ``Function`` member.
    """
    function = Function(0)
    for name in names:
        function |= Function[name.upper()]
    return function
