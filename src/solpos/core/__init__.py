"""Core module for the solar position engine.

This module provides the types a caller and the engine share:
- Function selection flags and their prerequisite closure
- The position record and its initializer
- Input range rules and the error code bitmask
- Step registry with dependency ordering
"""

from solpos.core.functions import Function, prerequisites
from solpos.core.record import PositionRecord, initialize
from solpos.core.registry import get_registry, register_step
from solpos.core.validation import ErrorCode

__all__ = [
    # Flags
    "Function",
    "prerequisites",
    # Record
    "PositionRecord",
    "initialize",
    # Validation
    "ErrorCode",
    # Registry
    "register_step",
    "get_registry",
]
