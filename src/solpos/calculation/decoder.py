"""Human-readable diagnostics for engine error codes."""

from __future__ import annotations

import logging

from solpos.core.record import PositionRecord
from solpos.core.validation import FIELD_RULES, ErrorCode, FieldRule

logger = logging.getLogger(__name__)

_RULES_BY_ERROR: dict[ErrorCode, FieldRule] = {
    rule.error: rule for rule in FIELD_RULES.values()
}


def decode(code: int, record: PositionRecord) -> list[str]:
    """Describe every error bit set in ``code``.

    Each line is also logged at WARNING level. The record is only read,
    to quote the offending values.

    Args:
        code: Value returned by ``compute()``.
        record: Record the code was computed for.

    Returns:
        One line per set bit, in bit order. Empty for a zero code.

    Examples:
        >>> record = PositionRecord(year=99)
        >>> decode(ErrorCode.YEAR, record)
        ['Please fix the year: 99 [1950-2050]']
    """
    lines: list[str] = []
    for error in ErrorCode:
        if not code & error:
            continue
        if error is ErrorCode.CONFIG:
            line = f"Please fix the function selection: {record.function!r}"
        else:
            rule = _RULES_BY_ERROR[error]
            value = getattr(record, rule.field)
            shown = "unset" if value is None else value
            line = f"Please fix the {rule.label}: {shown} [{rule.bounds}]"
        logger.warning(line)
        lines.append(line)
    return lines
