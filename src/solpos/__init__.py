"""NREL SOLPOS 2.0 solar position and intensity calculator.

Fill a ``PositionRecord`` with a location and a local standard time, call
``compute()`` and read the angles and extraterrestrial irradiances back from
the record. ``decode()`` turns a nonzero result code into readable lines.
"""

from solpos.calculation import compute, day_profile, decode
from solpos.core import ErrorCode, Function, PositionRecord, initialize

__version__ = "2.0.0"

__all__ = [
    "__version__",
    # Record
    "PositionRecord",
    "initialize",
    # Flags
    "Function",
    "ErrorCode",
    # Engine
    "compute",
    "decode",
    "day_profile",
]
