# incentive_tracker/core/rides/__init__.py
"""
Домен поездок.
Модели состояния и создание поездок.
"""

from incentive_tracker.core.rides.models import QualityStats, Ride, Rules, TrackerState
from incentive_tracker.core.rides.service import (
    PaymentBreakdown,
    RideSession,
    RideValidationError,
    build_ride,
    resolve_payment,
)

__all__ = [
    "QualityStats",
    "Ride",
    "Rules",
    "TrackerState",
    "PaymentBreakdown",
    "RideSession",
    "RideValidationError",
    "build_ride",
    "resolve_payment",
]
