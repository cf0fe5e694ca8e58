# incentive_tracker/core/eligibility/__init__.py
"""
Расчёт недельной статистики и права на бонус.
"""

from incentive_tracker.core.eligibility.service import (
    DashboardSnapshot,
    EligibilityChecks,
    compute_dashboard,
    required_trips_for,
    ride_card_amount,
    ride_cash_amount,
)
from incentive_tracker.core.eligibility.week import WeekWindow, current_week

__all__ = [
    "DashboardSnapshot",
    "EligibilityChecks",
    "compute_dashboard",
    "required_trips_for",
    "ride_card_amount",
    "ride_cash_amount",
    "WeekWindow",
    "current_week",
]
