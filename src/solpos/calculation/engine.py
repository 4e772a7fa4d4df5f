"""Solar position engine entry point.

``compute()`` resolves the record's function selection into an ordered
list of steps, validates each input field the first time a step reads it,
runs the steps and writes their results back into the record.

Example:
    >>> record = PositionRecord(
    ...     latitude=33.65, longitude=-84.43, timezone=-5.0,
    ...     year=1999, daynum=203, hour=9, minute=45, second=37,
    ... )
    >>> compute(record)
    <ErrorCode: 0>
    >>> (record.month, record.day)
    (7, 22)
"""

from __future__ import annotations

import logging
from typing import Any

from solpos.calculation import steps as _steps
from solpos.calculation.context import StepContext
from solpos.core.functions import Function, coerce_function
from solpos.core.record import INPUT_FIELDS, PositionRecord
from solpos.core.registry import Step, StepRegistry, get_registry
from solpos.core.validation import FIELD_RULES, ErrorCode, Validator

logger = logging.getLogger(__name__)


def plan(
    function: Function,
    registry: StepRegistry | None = None,
) -> list[Step]:
    """Resolve a function selection into the steps to run, in order.

    The date conversion comes first. With the day-of-year bit set it turns
    ``daynum`` into month and day. With the bit clear it turns month and
    day into ``daynum``, but only when a planned step needs the day of year
    or nothing else is planned.

    Args:
        function: Requested flags.
        registry: Step registry. Defaults to the global registry.

    Returns:
        Steps in execution order.
    """
    registry = registry if registry is not None else get_registry()
    selected = [step for step in registry.ordered() if step.function in function]

    if Function.STEP_DOY in function:
        return [_steps.DATE_FROM_DAYNUM, *selected]
    if not selected or any("daynum" in step.reads for step in selected):
        return [_steps.DAYNUM_FROM_DATE, *selected]
    return selected


def compute(
    record: PositionRecord,
    *,
    registry: StepRegistry | None = None,
) -> ErrorCode:
    """Run the calculations selected by ``record.function``.

    Out-of-range inputs set their error bit and are still used. Unset
    inputs set their error bit and skip every step that needs them. A
    selector with undefined bits, or a step whose intermediate inputs are
    neither computed nor on the record, sets ``ErrorCode.CONFIG``.

    Args:
        record: Record to read inputs from and write outputs to.
        registry: Step registry. Defaults to the global registry.

    Returns:
        Accumulated error code, also stored in ``record.error_code``.
    """
    registry = registry if registry is not None else get_registry()
    function, defined = coerce_function(record.function)

    values: dict[str, Any] = record.snapshot()
    validator = Validator(values)
    if not defined:
        logger.warning(
            "Function selector %#x uses undefined bits", int(record.function)
        )
        validator.flag_config()

    unregistered = [
        step
        for step in function
        if step is not Function.STEP_DOY and step not in registry
    ]
    if unregistered:
        logger.warning("No step registered for %s", [s.name for s in unregistered])
        validator.flag_config()

    steps = plan(function, registry)
    logger.debug("Plan for %r: %s", function, [step.name for step in steps])

    ctx = StepContext(values)
    produced: set[str] = set()
    blocked: set[str] = set()

    for step in steps:
        if not _inputs_ready(step, values, produced, blocked, validator):
            blocked.update(step.writes)
            continue
        try:
            results = step.compute(ctx)
        except (ValueError, TypeError, ArithmeticError) as e:
            logger.warning("Step '%s' skipped: %s", step.name, e)
            blocked.update(step.writes)
            continue
        values.update(results)
        produced.update(results)

    for name in produced:
        setattr(record, name, values[name])
    record.error_code = validator.code
    return validator.code


def _inputs_ready(
    step: Step,
    values: dict[str, Any],
    produced: set[str],
    blocked: set[str],
    validator: Validator,
) -> bool:
    """Validate the fields a step reads and report whether it can run.

    Every input field is checked even after one is found missing, so the
    error code names all of them.
    """
    ready = True
    for name in step.reads:
        if name in produced:
            continue
        if name in blocked:
            ready = False
        elif name in INPUT_FIELDS:
            if not validator.check(name):
                if name not in FIELD_RULES:
                    validator.flag_config()
                ready = False
        elif values.get(name) is None:
            logger.warning(
                "Step '%s' needs '%s', which is neither computed nor supplied",
                step.name,
                name,
            )
            validator.flag_config()
            ready = False
    return ready
