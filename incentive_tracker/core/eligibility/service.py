# incentive_tracker/core/eligibility/service.py
"""
Расчёт недельной статистики и права на бонус.

compute_dashboard: чистая функция от (поездки, условия, показатели качества, now):
входные данные не изменяются, повторный вызов даёт тот же результат,
ошибок не бывает (отсутствующие и некорректные числа считаются нулём).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Optional

from incentive_tracker.common.constants import (
    ACCEPTANCE_MIN_PERCENT,
    CANCEL_MAX_PERCENT,
    EXTRA_TRIPS_PER_EXTRA_HOUR,
    EligibilityStatus,
    PaymentMethod,
)
from incentive_tracker.core.eligibility.week import WeekWindow, current_week
from incentive_tracker.core.rides.models import QualityStats, Ride, Rules

SECONDS_PER_HOUR = 3600


@dataclass(frozen=True)
class EligibilityChecks:
    """Пять независимых условий бонуса."""
    ok_hours: bool
    ok_trips: bool
    ok_peak: bool
    ok_acceptance: bool
    ok_cancel: bool

    @property
    def all_met(self) -> bool:
        """Выполнены ли все условия."""
        return all((self.ok_hours, self.ok_trips, self.ok_peak, self.ok_acceptance, self.ok_cancel))


@dataclass(frozen=True)
class DashboardSnapshot:
    """Полный снимок недельной статистики."""

    # Итоги по поездкам
    total_trips: int
    total_seconds: int
    total_hours: float
    total_fare: float
    total_cash: float
    total_card: float

    # Прогрессивное условие по количеству поездок
    required_trips: int
    remaining_trips: int

    # Пиковые поездки
    peak_trips_count: int
    peak_trips_percent: float
    peak_time_seconds: int
    peak_time_percent: float

    # Бонус
    total_incentive: float
    income_boost_percent: Optional[float]

    # Условия и итог
    checks: EligibilityChecks
    status: EligibilityStatus

    # Действующие значения условий и показателей
    min_hours: float
    min_trips: int
    min_peak_trips_percent: float
    incentive_per_trip: float
    acceptance: Optional[float]
    cancel: Optional[float]

    # Поездки от новых к старым и отчётная неделя
    rides: tuple[Ride, ...] = ()
    week: Optional[WeekWindow] = None

    @property
    def is_eligible(self) -> bool:
        """Итог «есть право на бонус»."""
        return self.status == EligibilityStatus.ELIGIBLE


# =============================================================================
# НОРМАЛИЗАЦИЯ ВХОДНЫХ ДАННЫХ
# =============================================================================

@dataclass(frozen=True)
class _RideAmounts:
    duration_sec: int
    fare: float
    cash: float
    card: float
    is_peak: bool


@dataclass(frozen=True)
class _EffectiveRules:
    min_hours: float
    min_trips: int
    min_peak_trips_percent: float
    incentive_per_trip: float


def _number(value: Any) -> float:
    """Приводит значение к конечному числу, иначе 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _optional_percent(value: Any) -> Optional[float]:
    """Показатель качества: None остаётся None («не введено»)."""
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def ride_cash_amount(ride: Ride) -> float:
    """Сумма наличными по поездке: cashPart, иначе fare для оплаты наличными, иначе 0."""
    if ride.cash_part is not None:
        return _number(ride.cash_part)
    if ride.payment == PaymentMethod.CASH:
        return _number(ride.fare)
    return 0.0


def ride_card_amount(ride: Ride) -> Optional[float]:
    """
    Сумма картой по поездке для отображения.

    None, если сумма неизвестна (смешанная оплата без сохранённой cardPart или без способа оплаты).
    """
    if ride.card_part is not None:
        return _number(ride.card_part)
    if ride.payment == PaymentMethod.CARD:
        return _number(ride.fare)
    if ride.payment == PaymentMethod.CASH:
        return 0.0
    return None


def _normalize_ride(ride: Ride) -> _RideAmounts:
    return _RideAmounts(
        duration_sec=max(0, int(_number(ride.duration_sec))),
        fare=_number(ride.fare),
        cash=ride_cash_amount(ride),
        card=ride_card_amount(ride) or 0.0,
        is_peak=bool(ride.is_peak),
    )


def _normalize_rules(rules: Rules) -> _EffectiveRules:
    return _EffectiveRules(
        min_hours=_number(rules.min_hours),
        min_trips=int(_number(rules.min_trips)),
        min_peak_trips_percent=_number(rules.min_peak_trips_percent),
        incentive_per_trip=_number(rules.incentive_per_trip),
    )


# =============================================================================
# РАСЧЁТ
# =============================================================================

def required_trips_for(total_hours: float, min_hours: float, min_trips: int) -> int:
    """
    Прогрессивное условие по количеству поездок.

    До порога часов требуется min_trips, за каждый час сверх порога
    добавляется 1.5 поездки с округлением вверх (неполный час тоже считается).
    """
    if total_hours <= min_hours:
        return min_trips
    extra_hours = total_hours - min_hours
    # Округление до 9 знаков убирает погрешность float перед ceil
    extra_trips = math.ceil(round(extra_hours * EXTRA_TRIPS_PER_EXTRA_HOUR, 9))
    return min_trips + extra_trips


def _percent(part: float, whole: float) -> float:
    return part / whole * 100 if whole > 0 else 0.0


def compute_dashboard(
    rides: Iterable[Ride],
    rules: Rules,
    stats: QualityStats,
    now: datetime | None = None,
) -> DashboardSnapshot:
    """
    Рассчитывает снимок недельной статистики по всем поездкам.

    Args:
        rides: Все поездки недели
        rules: Условия бонуса
        stats: Показатели качества (принятие, отмены)
        now: Текущий момент для границ отчётной недели (None: без недели)

    Returns:
        Снимок статистики с итогом по праву на бонус
    """
    ordered = tuple(sorted(rides, key=lambda ride: ride.start, reverse=True))
    amounts = [_normalize_ride(ride) for ride in ordered]
    effective = _normalize_rules(rules)
    acceptance = _optional_percent(stats.acceptance)
    cancel = _optional_percent(stats.cancel)

    total_trips = len(amounts)
    total_seconds = sum(item.duration_sec for item in amounts)
    total_hours = total_seconds / SECONDS_PER_HOUR
    total_fare = sum(item.fare for item in amounts)
    total_cash = sum(item.cash for item in amounts)
    total_card = sum(item.card for item in amounts)

    required_trips = required_trips_for(total_hours, effective.min_hours, effective.min_trips)
    remaining_trips = max(0, required_trips - total_trips)

    peak = [item for item in amounts if item.is_peak]
    peak_trips_count = len(peak)
    peak_time_seconds = sum(item.duration_sec for item in peak)
    peak_trips_percent = _percent(peak_trips_count, total_trips)
    peak_time_percent = _percent(peak_time_seconds, total_seconds)

    total_incentive = total_trips * effective.incentive_per_trip
    income_boost_percent = total_incentive / total_fare * 100 if total_fare > 0 else None

    checks = EligibilityChecks(
        ok_hours=total_hours >= effective.min_hours,
        ok_trips=total_trips >= required_trips and total_trips >= effective.min_trips,
        ok_peak=peak_trips_percent >= effective.min_peak_trips_percent,
        ok_acceptance=acceptance is not None and acceptance >= ACCEPTANCE_MIN_PERCENT,
        ok_cancel=cancel is not None and cancel <= CANCEL_MAX_PERCENT,
    )

    if total_trips == 0:
        status = EligibilityStatus.PENDING
    elif checks.all_met:
        status = EligibilityStatus.ELIGIBLE
    else:
        status = EligibilityStatus.NOT_ELIGIBLE

    return DashboardSnapshot(
        total_trips=total_trips,
        total_seconds=total_seconds,
        total_hours=total_hours,
        total_fare=total_fare,
        total_cash=total_cash,
        total_card=total_card,
        required_trips=required_trips,
        remaining_trips=remaining_trips,
        peak_trips_count=peak_trips_count,
        peak_trips_percent=peak_trips_percent,
        peak_time_seconds=peak_time_seconds,
        peak_time_percent=peak_time_percent,
        total_incentive=total_incentive,
        income_boost_percent=income_boost_percent,
        checks=checks,
        status=status,
        min_hours=effective.min_hours,
        min_trips=effective.min_trips,
        min_peak_trips_percent=effective.min_peak_trips_percent,
        incentive_per_trip=effective.incentive_per_trip,
        acceptance=acceptance,
        cancel=cancel,
        rides=ordered,
        week=current_week(now) if now is not None else None,
    )
