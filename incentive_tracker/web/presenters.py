# incentive_tracker/web/presenters.py
"""
Тексты и стили карточек дашборда по снимку статистики.
"""

from __future__ import annotations

from dataclasses import dataclass

from incentive_tracker.common.constants import (
    ACCEPTANCE_MIN_PERCENT,
    CANCEL_MAX_PERCENT,
    EligibilityStatus,
)
from incentive_tracker.common.localization import get_text
from incentive_tracker.core.eligibility import DashboardSnapshot
from incentive_tracker.report.formatting import format_percent

TONE_OK = "ok"
TONE_WARN = "warn"
TONE_NEUTRAL = "neutral"

TONE_CLASSES = {
    TONE_OK: "bg-emerald-100 text-emerald-800",
    TONE_WARN: "bg-amber-100 text-amber-800",
    TONE_NEUTRAL: "bg-slate-100 text-slate-700",
}


@dataclass(frozen=True)
class StatusText:
    """Текст статуса и его тон для бейджа."""
    text: str
    tone: str

    @property
    def classes(self) -> str:
        return TONE_CLASSES[self.tone]


def eligibility_badge(snapshot: DashboardSnapshot, lang: str) -> StatusText:
    """Бейдж итогового статуса недели."""
    if snapshot.status == EligibilityStatus.PENDING:
        return StatusText(get_text("badge_pending", lang), TONE_NEUTRAL)
    if snapshot.status == EligibilityStatus.ELIGIBLE:
        return StatusText(get_text("badge_eligible", lang), TONE_OK)
    return StatusText(get_text("badge_not_eligible", lang), TONE_WARN)


def hours_status(snapshot: DashboardSnapshot, lang: str) -> StatusText:
    """Статус условия по часам."""
    if snapshot.checks.ok_hours:
        return StatusText(get_text("hours_status_ok", lang), TONE_OK)
    if snapshot.total_hours > 0:
        return StatusText(get_text("hours_status_below", lang), TONE_WARN)
    return StatusText(get_text("hours_status_waiting", lang), TONE_NEUTRAL)


def peak_status(snapshot: DashboardSnapshot, lang: str) -> StatusText:
    """Статус условия по доле пиковых поездок."""
    if snapshot.total_trips == 0:
        return StatusText(get_text("peak_status_waiting", lang), TONE_NEUTRAL)
    if snapshot.checks.ok_peak:
        return StatusText(get_text("peak_status_ok", lang), TONE_OK)
    return StatusText(get_text("peak_status_below", lang), TONE_WARN)


def required_trips_text(snapshot: DashboardSnapshot, lang: str) -> str:
    """Пояснение прогрессивного условия."""
    if snapshot.total_hours <= 0:
        return get_text("required_trips_waiting", lang)
    return get_text(
        "required_trips_text",
        lang,
        required=snapshot.required_trips,
        min_trips=snapshot.min_trips,
        min_hours=snapshot.min_hours,
    )


def remaining_trips_status(snapshot: DashboardSnapshot, lang: str) -> StatusText | None:
    """Сколько поездок осталось до прогрессивного условия (None, если нечего показывать)."""
    if snapshot.total_trips > 0 and snapshot.total_trips >= snapshot.required_trips:
        return StatusText(get_text("remaining_trips_ok", lang), TONE_OK)
    if snapshot.total_hours > 0:
        return StatusText(
            get_text("remaining_trips_needed", lang, count=snapshot.remaining_trips),
            TONE_WARN,
        )
    return None


def income_boost_text(snapshot: DashboardSnapshot, lang: str) -> str:
    """Пояснение прибавки к доходу от бонуса."""
    if snapshot.income_boost_percent is None:
        return get_text("income_boost_waiting", lang)
    return get_text("income_boost_text", lang, percent=format_percent(snapshot.income_boost_percent))


def quality_hints(snapshot: DashboardSnapshot, lang: str) -> list[str]:
    """Подсказки по показателям принятия и отмен."""
    hints: list[str] = []

    if snapshot.acceptance is None:
        hints.append(get_text("acceptance_missing", lang))
    elif snapshot.checks.ok_acceptance:
        hints.append(get_text("acceptance_ok", lang, threshold=ACCEPTANCE_MIN_PERCENT))
    else:
        hints.append(get_text("acceptance_low", lang, threshold=ACCEPTANCE_MIN_PERCENT))

    if snapshot.cancel is None:
        hints.append(get_text("cancel_missing", lang))
    elif snapshot.checks.ok_cancel:
        hints.append(get_text("cancel_ok", lang, threshold=CANCEL_MAX_PERCENT))
    else:
        hints.append(get_text("cancel_high", lang, threshold=CANCEL_MAX_PERCENT))

    return hints
