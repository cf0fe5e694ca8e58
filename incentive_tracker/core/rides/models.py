# incentive_tracker/core/rides/models.py
"""
Модели данных трекера: поездка, условия бонуса, показатели качества, состояние.

Имена полей в JSON совпадают с форматом сохранённого состояния (camelCase),
на входе принимаются и алиасы, и имена атрибутов.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from incentive_tracker.common.constants import (
    DEFAULT_INCENTIVE_PER_TRIP,
    DEFAULT_MIN_HOURS,
    DEFAULT_MIN_PEAK_TRIPS_PERCENT,
    DEFAULT_MIN_TRIPS,
    PaymentMethod,
)

# Допуск при сверке cashPart + cardPart с fare
AMOUNT_TOLERANCE = 0.005


class Ride(BaseModel):
    """Завершённая поездка. Неизменяема после создания."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    start: datetime = Field(..., description="Начало поездки")
    end: datetime = Field(..., description="Окончание поездки")
    duration_sec: int = Field(0, ge=0, alias="durationSec", description="Длительность, сек")
    fare: Optional[float] = Field(None, ge=0.0, description="Стоимость поездки")
    payment: Optional[PaymentMethod] = Field(None, description="Способ оплаты")
    cash_part: Optional[float] = Field(None, ge=0.0, alias="cashPart", description="Получено наличными")
    card_part: Optional[float] = Field(None, ge=0.0, alias="cardPart", description="Оплачено картой")
    is_peak: bool = Field(False, alias="isPeak", description="Началась ли поездка в пиковое время")

    @field_validator("start", "end", mode="after")
    @classmethod
    def attach_timezone(cls, value: datetime, info: ValidationInfo) -> datetime:
        """
        Время без часового пояса считается местным временем трекера.

        Пояс передаётся в контексте валидации (context={"tz": ...}), без него UTC.
        """
        if value.tzinfo is not None:
            return value
        tz = (info.context or {}).get("tz") or timezone.utc
        return value.replace(tzinfo=tz)

    @model_validator(mode="after")
    def check_time_order(self) -> "Ride":
        """Окончание не может быть раньше начала."""
        if self.end < self.start:
            raise ValueError("end раньше start")
        return self

    @property
    def duration_minutes(self) -> float:
        """Длительность в минутах."""
        return self.duration_sec / 60

    @property
    def parts_consistent(self) -> bool:
        """Сходится ли разбивка cash/card с общей стоимостью (если все суммы известны)."""
        if self.fare is None or self.cash_part is None or self.card_part is None:
            return True
        return abs(self.cash_part + self.card_part - self.fare) <= AMOUNT_TOLERANCE


class Rules(BaseModel):
    """Условия еженедельного бонуса, задаются пользователем."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    min_hours: float = Field(DEFAULT_MIN_HOURS, ge=0.0, alias="minHours")
    min_trips: int = Field(DEFAULT_MIN_TRIPS, ge=0, alias="minTrips")
    min_peak_trips_percent: float = Field(
        DEFAULT_MIN_PEAK_TRIPS_PERCENT, ge=0.0, le=100.0, alias="minPeakTripsPercent"
    )
    incentive_per_trip: float = Field(DEFAULT_INCENTIVE_PER_TRIP, ge=0.0, alias="incentivePerTrip")


class QualityStats(BaseModel):
    """Показатели качества из приложения платформы. None означает «не введено»."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    acceptance: Optional[float] = Field(None, ge=0.0, le=100.0, description="Процент принятия заказов")
    cancel: Optional[float] = Field(None, ge=0.0, le=100.0, description="Процент отмен")


class TrackerState(BaseModel):
    """Корневое состояние трекера: условия, показатели качества и поездки недели."""

    model_config = ConfigDict(frozen=True)

    rules: Rules = Field(default_factory=Rules)
    stats: QualityStats = Field(default_factory=QualityStats)
    rides: tuple[Ride, ...] = ()

    def with_ride(self, ride: Ride) -> "TrackerState":
        """Новое состояние с добавленной поездкой."""
        return self.model_copy(update={"rides": (*self.rides, ride)})

    def with_settings(self, rules: Rules, stats: QualityStats) -> "TrackerState":
        """Новое состояние с другими условиями и показателями."""
        return self.model_copy(update={"rules": rules, "stats": stats})

    def cleared(self) -> "TrackerState":
        """Новое состояние без поездок (начало новой недели)."""
        return self.model_copy(update={"rides": ()})

    def to_document(self) -> dict[str, Any]:
        """Сериализует состояние в JSON-совместимый словарь формата хранения."""
        return self.model_dump(mode="json", by_alias=True)
