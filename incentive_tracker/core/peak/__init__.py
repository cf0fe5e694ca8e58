# incentive_tracker/core/peak/__init__.py
"""
Пиковые периоды платформы.
"""

from incentive_tracker.core.peak.service import (
    PEAK_WINDOWS,
    PeakWindow,
    is_peak,
    local_day_and_minute,
    windows_for_day,
)

__all__ = [
    "PEAK_WINDOWS",
    "PeakWindow",
    "is_peak",
    "local_day_and_minute",
    "windows_for_day",
]
