"""Engine, diagnostics and day sweep."""

from solpos.calculation.decoder import decode
from solpos.calculation.engine import compute, plan
from solpos.calculation.sweep import DayProfile, ProfileRow, day_profile

__all__ = [
    # Engine
    "compute",
    "plan",
    # Diagnostics
    "decode",
    # Sweep
    "day_profile",
    "DayProfile",
    "ProfileRow",
]
