# incentive_tracker/core/__init__.py
"""
Доменный слой.
Чистая логика расчёта, независимая от хранения и интерфейса.
"""

from incentive_tracker.core.eligibility import DashboardSnapshot, compute_dashboard
from incentive_tracker.core.peak import is_peak
from incentive_tracker.core.rides import QualityStats, Ride, Rules, TrackerState

__all__ = [
    "DashboardSnapshot",
    "compute_dashboard",
    "is_peak",
    "QualityStats",
    "Ride",
    "Rules",
    "TrackerState",
]
