# incentive_tracker/core/rides/service.py
"""
Создание поездок.

Проверка формы завершения поездки, расчёт разбивки оплаты cash/card
и учёт текущей незавершённой поездки.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Optional

from incentive_tracker.common.constants import PaymentMethod
from incentive_tracker.core.peak import is_peak
from incentive_tracker.core.rides.models import Ride


class RideValidationError(ValueError):
    """
    Ошибка проверки данных поездки.

    code: ключ локализации для сообщения пользователю.
    """

    def __init__(self, code: str, message: str | None = None) -> None:
        self.code = code
        super().__init__(message or code)


@dataclass(frozen=True)
class PaymentBreakdown:
    """Итоговая разбивка оплаты поездки."""
    fare: float
    cash_part: float
    card_part: float


def _is_positive(value: Optional[float]) -> bool:
    return value is not None and value > 0


def resolve_payment(
    method: Optional[PaymentMethod],
    fare: Optional[float],
    cash_amount: Optional[float] = None,
) -> PaymentBreakdown:
    """
    Рассчитывает разбивку оплаты по данным формы.

    Args:
        method: Способ оплаты (обязателен)
        fare: Полная стоимость поездки (для mixed необязательна)
        cash_amount: Сумма наличными (только для mixed)

    Returns:
        Разбивка оплаты

    Raises:
        RideValidationError: Данные формы некорректны
    """
    if method is None:
        raise RideValidationError("payment_method_required")

    try:
        method = PaymentMethod(method)
    except ValueError as e:
        raise RideValidationError("payment_method_required", f"Неизвестный способ оплаты: {method}") from e

    if method in (PaymentMethod.CASH, PaymentMethod.CARD):
        if not _is_positive(fare):
            raise RideValidationError("fare_required")
        if method == PaymentMethod.CASH:
            return PaymentBreakdown(fare=fare, cash_part=fare, card_part=0.0)
        return PaymentBreakdown(fare=fare, cash_part=0.0, card_part=fare)

    # Смешанная оплата: наличные обязательны, полная стоимость необязательна
    if not _is_positive(cash_amount):
        raise RideValidationError("cash_amount_required")

    if not _is_positive(fare):
        return PaymentBreakdown(fare=cash_amount, cash_part=cash_amount, card_part=0.0)

    if cash_amount > fare:
        raise RideValidationError("cash_exceeds_fare")

    return PaymentBreakdown(
        fare=fare,
        cash_part=cash_amount,
        card_part=round(fare - cash_amount, 2),
    )


def build_ride(
    start: datetime,
    end: datetime,
    method: Optional[PaymentMethod],
    fare: Optional[float],
    cash_amount: Optional[float],
    tz: tzinfo,
) -> Ride:
    """
    Создаёт завершённую поездку целиком или не создаёт ничего.

    Длительность и признак пика вычисляются один раз и сохраняются в поездке.
    """
    if end < start:
        raise RideValidationError("ride_end_before_start")

    payment = resolve_payment(method, fare, cash_amount)

    return Ride.model_validate(
        {
            "start": start,
            "end": end,
            "duration_sec": round((end - start).total_seconds()),
            "fare": payment.fare,
            "payment": method,
            "cash_part": payment.cash_part,
            "card_part": payment.card_part,
            "is_peak": is_peak(start, tz),
        },
        context={"tz": tz},
    )


@dataclass(frozen=True)
class OpenRide:
    """Начатая, но ещё не завершённая поездка (не сохраняется)."""
    start: datetime


class RideSession:
    """Учёт текущей открытой поездки между «начать» и «завершить»."""

    def __init__(self) -> None:
        self._open: OpenRide | None = None

    @property
    def open_ride(self) -> OpenRide | None:
        """Текущая открытая поездка или None."""
        return self._open

    @property
    def is_open(self) -> bool:
        """Есть ли открытая поездка."""
        return self._open is not None

    def start(self, now: datetime) -> bool:
        """
        Открывает поездку.

        Returns:
            False, если поездка уже открыта (повторный старт игнорируется)
        """
        if self._open is not None:
            return False
        self._open = OpenRide(start=now)
        return True

    def finish(
        self,
        now: datetime,
        method: Optional[PaymentMethod],
        fare: Optional[float],
        cash_amount: Optional[float],
        tz: tzinfo,
    ) -> Ride | None:
        """
        Завершает открытую поездку.

        При ошибке проверки поездка остаётся открытой.

        Returns:
            Созданная поездка или None, если открытой поездки нет
        """
        if self._open is None:
            return None
        ride = build_ride(self._open.start, now, method, fare, cash_amount, tz)
        self._open = None
        return ride

    def discard(self) -> None:
        """Сбрасывает открытую поездку без сохранения."""
        self._open = None
