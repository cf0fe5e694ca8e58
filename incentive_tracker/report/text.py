# incentive_tracker/report/text.py
"""
Текстовый отчёт о неделе бонуса.

Строится только из снимка статистики, все строки берутся из словаря локализации.
"""

from __future__ import annotations

from datetime import tzinfo
from typing import Optional

from incentive_tracker.common.constants import (
    ACCEPTANCE_MIN_PERCENT,
    CANCEL_MAX_PERCENT,
    EligibilityStatus,
)
from incentive_tracker.common.localization import get_text
from incentive_tracker.core.eligibility import (
    DashboardSnapshot,
    ride_card_amount,
    ride_cash_amount,
)
from incentive_tracker.report.formatting import (
    EMPTY,
    format_amount,
    format_date,
    format_datetime,
    format_hours,
    format_money,
    format_percent,
)

VERDICT_KEYS = {
    EligibilityStatus.PENDING: "verdict_pending",
    EligibilityStatus.ELIGIBLE: "verdict_eligible",
    EligibilityStatus.NOT_ELIGIBLE: "verdict_not_eligible",
}

RIDE_COLUMNS = (
    "col_index",
    "col_start",
    "col_end",
    "col_minutes",
    "col_fare",
    "col_cash",
    "col_card",
    "col_period",
)


def week_info_text(snapshot: DashboardSnapshot, lang: str) -> str:
    """Строка с границами отчётной недели (пустая, если неделя не рассчитана)."""
    if snapshot.week is None:
        return ""
    return get_text(
        "week_info",
        lang,
        start=format_date(snapshot.week.start),
        end=format_date(snapshot.week.end),
    )


def condition_lines(snapshot: DashboardSnapshot, lang: str) -> list[str]:
    """Пять условий бонуса с отметкой о выполнении."""

    def status(ok: bool) -> str:
        return get_text("status_ok" if ok else "status_fail", lang)

    def metric(value: Optional[float]) -> str:
        return format_percent(value, 2) if value is not None else get_text("not_entered", lang)

    checks = snapshot.checks
    return [
        get_text("cond_hours", lang, min_hours=snapshot.min_hours, status=status(checks.ok_hours)),
        get_text(
            "cond_trips",
            lang,
            required=snapshot.required_trips,
            min_trips=snapshot.min_trips,
            status=status(checks.ok_trips),
        ),
        get_text(
            "cond_peak",
            lang,
            min_peak=snapshot.min_peak_trips_percent,
            status=status(checks.ok_peak),
            current=format_percent(snapshot.peak_trips_percent),
        ),
        get_text(
            "cond_acceptance",
            lang,
            threshold=ACCEPTANCE_MIN_PERCENT,
            status=status(checks.ok_acceptance),
            current=metric(snapshot.acceptance),
        ),
        get_text(
            "cond_cancel",
            lang,
            threshold=CANCEL_MAX_PERCENT,
            status=status(checks.ok_cancel),
            current=metric(snapshot.cancel),
        ),
    ]


def ride_rows(snapshot: DashboardSnapshot, lang: str, tz: tzinfo | None = None) -> list[list[str]]:
    """Строки таблицы поездок (от новых к старым)."""
    rows: list[list[str]] = []
    for index, ride in enumerate(snapshot.rides, start=1):
        cash = ride_cash_amount(ride)
        rows.append([
            str(index),
            format_datetime(ride.start, tz),
            format_datetime(ride.end, tz),
            f"{ride.duration_minutes:.1f}",
            format_amount(ride.fare),
            format_amount(cash) if cash else EMPTY,
            format_amount(ride_card_amount(ride)),
            get_text("period_peak" if ride.is_peak else "period_normal", lang),
        ])
    return rows


def render_text_report(
    snapshot: DashboardSnapshot,
    lang: str = "ar",
    currency_symbol: str = "ر.س",
    tz: tzinfo | None = None,
) -> str:
    """
    Формирует читаемый отчёт о неделе.

    Args:
        snapshot: Снимок статистики
        lang: Язык отчёта
        currency_symbol: Символ валюты
        tz: Часовой пояс для времени поездок

    Returns:
        Отчёт одной строкой с переводами строк
    """
    def t(key: str) -> str:
        return get_text(key, lang)

    lines = [t("report_title"), t("report_subtitle")]
    week_line = week_info_text(snapshot, lang)
    if week_line:
        lines.append(week_line)

    peak_trips = f"{snapshot.peak_trips_count} ({format_percent(snapshot.peak_trips_percent)})"
    lines += [
        "",
        f"{t('report_total_trips')}: {snapshot.total_trips}",
        f"{t('report_total_hours')}: {format_hours(snapshot.total_hours)}",
        f"{t('report_total_fare')}: {format_money(snapshot.total_fare, currency_symbol)}",
        f"{t('report_total_cash')}: {format_money(snapshot.total_cash, currency_symbol)}",
        f"{t('report_total_card')}: {format_money(snapshot.total_card, currency_symbol)}",
        f"{t('report_total_incentive')}: {format_money(snapshot.total_incentive, currency_symbol)}",
        f"{t('report_income_boost')}: {format_percent(snapshot.income_boost_percent)}",
        f"{t('report_peak_trips')}: {peak_trips}",
        f"{t('report_peak_time')}: {format_percent(snapshot.peak_time_percent)}",
        "",
        t("report_conditions_title"),
    ]
    lines += [f"- {line}" for line in condition_lines(snapshot, lang)]
    lines += [
        "",
        t("verdict_title"),
        t(VERDICT_KEYS[snapshot.status]),
        t("report_disclaimer"),
        "",
        t("rides_title"),
        " | ".join(t(key) for key in RIDE_COLUMNS),
    ]
    lines += [" | ".join(row) for row in ride_rows(snapshot, lang, tz)]

    return "\n".join(lines)
