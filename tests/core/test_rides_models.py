# tests/core/test_rides_models.py
"""
Тесты для моделей состояния (incentive_tracker/core/rides/models.py).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from incentive_tracker.common.constants import PaymentMethod
from incentive_tracker.core.rides.models import QualityStats, Ride, Rules, TrackerState


class TestRide:
    """Тесты для модели Ride."""

    def test_parses_stored_aliases(self) -> None:
        """Поля принимаются в формате хранения (camelCase)."""
        ride = Ride.model_validate({
            "start": "2024-03-04T08:00:00+03:00",
            "end": "2024-03-04T08:30:00+03:00",
            "durationSec": 1800,
            "fare": 50,
            "payment": "cash",
            "cashPart": 50,
            "cardPart": 0,
            "isPeak": True,
        })

        assert ride.duration_sec == 1800
        assert ride.duration_minutes == 30
        assert ride.payment == PaymentMethod.CASH
        assert ride.cash_part == 50.0
        assert ride.is_peak is True

    def test_end_before_start_rejected(self, tz: ZoneInfo) -> None:
        """Окончание раньше начала недопустимо."""
        start = datetime(2024, 3, 4, 8, 0, tzinfo=tz)
        with pytest.raises(ValidationError):
            Ride(start=start, end=start - timedelta(minutes=1))

    def test_naive_time_gets_utc_without_context(self) -> None:
        """Время без пояса и без контекста валидации считается UTC."""
        ride = Ride(start=datetime(2024, 3, 4, 8, 0), end=datetime(2024, 3, 4, 9, 0))

        assert ride.start.tzinfo == timezone.utc
        assert ride.end.tzinfo == timezone.utc

    def test_naive_time_gets_context_timezone(self, tz: ZoneInfo) -> None:
        """Время без пояса считается местным временем пояса из контекста."""
        ride = Ride.model_validate(
            {"start": "2024-03-04T08:00:00", "end": "2024-03-04T08:30:00"},
            context={"tz": tz},
        )

        assert ride.start == datetime(2024, 3, 4, 8, 0, tzinfo=tz)
        assert ride.end.tzinfo == tz

    def test_mixed_awareness_normalized(self, tz: ZoneInfo) -> None:
        """Поездка с одним временем без пояса приводится к сравнимым значениям."""
        ride = Ride(start=datetime(2024, 3, 4, 5, 0), end=datetime(2024, 3, 4, 9, 0, tzinfo=tz))

        assert ride.start.tzinfo is not None
        assert ride.end > ride.start

    def test_negative_fare_rejected(self, tz: ZoneInfo) -> None:
        """Стоимость не может быть отрицательной."""
        start = datetime(2024, 3, 4, 8, 0, tzinfo=tz)
        with pytest.raises(ValidationError):
            Ride(start=start, end=start, fare=-1.0)

    def test_frozen(self, make_ride: Callable[..., Ride]) -> None:
        """Поездка неизменяема после создания."""
        ride = make_ride()
        with pytest.raises(ValidationError):
            ride.fare = 10.0

    @pytest.mark.parametrize(
        "fare,cash,card,expected",
        [
            (100.0, 40.0, 60.0, True),
            (100.0, 40.0, 50.0, False),
            (100.0, 40.0, None, True),
            (10.1, 3.37, 6.73, True),
        ],
    )
    def test_parts_consistent(self, make_ride: Callable[..., Ride], fare, cash, card, expected) -> None:
        """Сверка cashPart + cardPart с fare (только если все суммы известны)."""
        ride = make_ride(fare=fare, payment=PaymentMethod.MIXED, cash_part=cash, card_part=card)
        assert ride.parts_consistent is expected


class TestRules:
    """Тесты для модели Rules."""

    def test_defaults(self) -> None:
        """Условия по умолчанию."""
        rules = Rules()
        assert rules.min_hours == 25.0
        assert rules.min_trips == 35
        assert rules.min_peak_trips_percent == 70.0
        assert rules.incentive_per_trip == 3.0

    def test_peak_percent_bounds(self) -> None:
        """Доля пиковых поездок в пределах 0–100."""
        with pytest.raises(ValidationError):
            Rules(min_peak_trips_percent=120.0)

    def test_dump_by_alias(self) -> None:
        """Сериализация в формат хранения."""
        assert Rules().model_dump(by_alias=True) == {
            "minHours": 25.0,
            "minTrips": 35,
            "minPeakTripsPercent": 70.0,
            "incentivePerTrip": 3.0,
        }


class TestQualityStats:
    """Тесты для модели QualityStats."""

    def test_defaults_are_not_entered(self) -> None:
        """По умолчанию показатели не введены."""
        stats = QualityStats()
        assert stats.acceptance is None
        assert stats.cancel is None

    def test_bounds(self) -> None:
        """Проценты в пределах 0–100."""
        with pytest.raises(ValidationError):
            QualityStats(acceptance=101.0)
        with pytest.raises(ValidationError):
            QualityStats(cancel=-1.0)


class TestTrackerState:
    """Тесты для корневого состояния."""

    def test_with_ride_returns_new_state(self, make_ride: Callable[..., Ride]) -> None:
        """Добавление поездки не меняет исходное состояние."""
        state = TrackerState()
        ride = make_ride()

        updated = state.with_ride(ride)

        assert state.rides == ()
        assert updated.rides == (ride,)

    def test_with_settings(self) -> None:
        """Замена условий и показателей, поездки сохраняются."""
        state = TrackerState()
        rules = Rules(min_hours=10.0)
        stats = QualityStats(acceptance=80.0)

        updated = state.with_settings(rules, stats)

        assert updated.rules == rules
        assert updated.stats == stats
        assert state.rules == Rules()

    def test_cleared_keeps_settings(self, make_ride: Callable[..., Ride]) -> None:
        """Новая неделя удаляет только поездки."""
        state = TrackerState(rules=Rules(min_hours=10.0)).with_ride(make_ride())

        cleared = state.cleared()

        assert cleared.rides == ()
        assert cleared.rules.min_hours == 10.0

    def test_to_document_uses_storage_keys(self, make_ride: Callable[..., Ride]) -> None:
        """Документ хранения использует camelCase ключи."""
        document = TrackerState().with_ride(make_ride()).to_document()

        assert set(document) == {"rules", "stats", "rides"}
        assert "minPeakTripsPercent" in document["rules"]
        assert set(document["rides"][0]) == {
            "start", "end", "durationSec", "fare", "payment", "cashPart", "cardPart", "isPeak",
        }
        assert document["rides"][0]["payment"] == "cash"
