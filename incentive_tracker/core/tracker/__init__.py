# incentive_tracker/core/tracker/__init__.py
"""
Сервис трекера и разбор форм.
"""

from incentive_tracker.core.tracker.forms import (
    FormValidationError,
    parse_amount,
    parse_quality_form,
    parse_rules_form,
)
from incentive_tracker.core.tracker.service import TrackerService

__all__ = [
    "FormValidationError",
    "parse_amount",
    "parse_quality_form",
    "parse_rules_form",
    "TrackerService",
]
