# tests/infra/test_storage.py
"""
Тесты для хранилища состояния (incentive_tracker/infra/storage.py).
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable
from unittest.mock import patch
from zoneinfo import ZoneInfo

import pytest

from incentive_tracker.common.constants import PaymentMethod
from incentive_tracker.core.eligibility import compute_dashboard
from incentive_tracker.core.rides.models import QualityStats, Ride, Rules, TrackerState
from incentive_tracker.infra.storage import (
    StateStorage,
    deserialize_state,
    parse_state,
    serialize_state,
)


@pytest.fixture
def sample_state(make_ride: Callable[..., Ride], week_monday: datetime) -> TrackerState:
    """Состояние с поездками всех способов оплаты."""
    rides = (
        make_ride(start=week_monday, fare=50.0),
        make_ride(start=week_monday + timedelta(hours=2), fare=80.0, payment=PaymentMethod.CARD),
        make_ride(start=week_monday + timedelta(hours=12), fare=100.0, payment=PaymentMethod.MIXED,
                  cash_part=40.0, card_part=60.0, is_peak=False),
    )
    return TrackerState(
        rules=Rules(min_hours=20.0, min_trips=30),
        stats=QualityStats(acceptance=75.5, cancel=None),
        rides=rides,
    )


class TestSerialization:
    """Тесты сериализации состояния."""

    def test_round_trip_gives_same_snapshot(self, sample_state: TrackerState, tz: ZoneInfo) -> None:
        """Снимок статистики до и после сохранения совпадает поле в поле."""
        restored = deserialize_state(serialize_state(sample_state))
        now = datetime(2024, 3, 6, 12, 0, tzinfo=tz)

        before = compute_dashboard(sample_state.rides, sample_state.rules, sample_state.stats, now)
        after = compute_dashboard(restored.rides, restored.rules, restored.stats, now)

        assert after == before
        assert restored == sample_state

    def test_serialized_format(self, sample_state: TrackerState) -> None:
        """Документ хранения содержит ключи rules, stats, rides в camelCase."""
        document = json.loads(serialize_state(sample_state))

        assert document["rules"]["minHours"] == 20.0
        assert document["stats"] == {"acceptance": 75.5, "cancel": None}
        assert document["rides"][2]["cashPart"] == 40.0
        assert document["rides"][2]["isPeak"] is False

    @pytest.mark.parametrize("raw", ["", "not json", "[1, 2]", "null"])
    def test_corrupt_document_gives_defaults(self, raw: str) -> None:
        """Повреждённый документ заменяется состоянием по умолчанию."""
        assert deserialize_state(raw) == TrackerState()


class TestParseState:
    """Тесты для поэлементного разбора документа."""

    def test_missing_fields_defaulted(self) -> None:
        """Отсутствующие поля получают значения по умолчанию по отдельности."""
        parsed = parse_state({"stats": {"acceptance": 80}})

        assert parsed.state.stats.acceptance == 80.0
        assert parsed.state.rules == Rules()
        assert parsed.state.rides == ()
        assert parsed.defaulted_fields == ["rules", "rides"]

    def test_out_of_range_rule_clamped_others_kept(self, sample_state: TrackerState) -> None:
        """Значение условия вне границ прижимается, остальные условия и поездки сохраняются."""
        document = sample_state.to_document()
        document["rules"]["minPeakTripsPercent"] = 500

        parsed = parse_state(document)

        assert parsed.state.rules == Rules(
            min_hours=20.0, min_trips=30, min_peak_trips_percent=100.0,
            incentive_per_trip=sample_state.rules.incentive_per_trip,
        )
        assert parsed.state.rides == sample_state.rides
        assert parsed.coerced_rules == ["minPeakTripsPercent"]
        assert parsed.defaulted_fields == []

    def test_missing_rule_keys_become_zero(self) -> None:
        """Отсутствующие и нечисловые поля условий становятся 0."""
        parsed = parse_state({"rules": {"minHours": 30, "minTrips": "abc"}, "stats": {}, "rides": []})

        assert parsed.state.rules == Rules(
            min_hours=30.0, min_trips=0, min_peak_trips_percent=0.0, incentive_per_trip=0.0
        )
        assert parsed.coerced_rules == ["minTrips", "minPeakTripsPercent", "incentivePerTrip"]

    def test_negative_rule_clamped_to_zero(self) -> None:
        """Отрицательное значение условия прижимается к 0."""
        parsed = parse_state({"rules": {"minHours": -5, "minTrips": 35,
                                        "minPeakTripsPercent": 70, "incentivePerTrip": 3}})

        assert parsed.state.rules.min_hours == 0.0
        assert parsed.state.rules.min_trips == 35
        assert parsed.coerced_rules == ["minHours"]

    def test_mixed_naive_and_aware_rides(self, tz: ZoneInfo, week_monday: datetime) -> None:
        """Поездки со временем с поясом и без него загружаются и считаются вместе."""
        parsed = parse_state(
            {
                "rides": [
                    {"start": "2024-03-04T08:00:00", "end": "2024-03-04T08:30:00",
                     "durationSec": 1800, "fare": 20, "payment": "cash", "isPeak": True},
                    {"start": "2024-03-04T09:00:00Z", "end": "2024-03-04T09:30:00Z",
                     "durationSec": 1800, "fare": 30, "payment": "cash", "isPeak": False},
                ],
            },
            tz,
        )

        first, second = parsed.state.rides
        assert first.start == week_monday
        assert second.start.tzinfo is not None

        snapshot = compute_dashboard(parsed.state.rides, parsed.state.rules, parsed.state.stats)
        assert snapshot.total_trips == 2
        assert snapshot.total_fare == 50.0
        # 09:00Z = 12:00 по Эр-Рияду, эта поездка новее
        assert snapshot.rides[0] == second

    def test_malformed_rides_dropped_one_by_one(self, sample_state: TrackerState) -> None:
        """Некорректная поездка отбрасывается, остальные сохраняются."""
        document = sample_state.to_document()
        document["rides"].append({"start": "yesterday"})
        document["rides"].append("garbage")

        parsed = parse_state(document)

        assert len(parsed.state.rides) == 3
        assert parsed.dropped_rides == 2

    def test_inconsistent_parts_kept(self, sample_state: TrackerState) -> None:
        """Поездки с несходящейся разбивкой сохраняются, но учитываются."""
        document = sample_state.to_document()
        document["rides"][2]["cardPart"] = 10.0

        parsed = parse_state(document)

        assert len(parsed.state.rides) == 3
        assert parsed.inconsistent_rides == 1

    def test_legacy_ride_without_parts(self) -> None:
        """Старые записи без cashPart/cardPart загружаются."""
        parsed = parse_state({
            "rules": {},
            "stats": {},
            "rides": [{
                "start": "2024-03-04T08:00:00+03:00",
                "end": "2024-03-04T08:30:00+03:00",
                "durationSec": 1800,
                "fare": 40,
                "payment": "cash",
                "isPeak": True,
            }],
        })

        ride = parsed.state.rides[0]
        assert ride.cash_part is None
        assert compute_dashboard(parsed.state.rides, parsed.state.rules, parsed.state.stats).total_cash == 40.0


class TestStateStorage:
    """Тесты для файлового хранилища."""

    @pytest.mark.asyncio
    async def test_load_missing_file(self, storage: StateStorage) -> None:
        """Отсутствующий файл даёт состояние по умолчанию."""
        assert await storage.load() == TrackerState()

    @pytest.mark.asyncio
    async def test_save_and_load(self, storage: StateStorage, sample_state: TrackerState) -> None:
        """Сохранённое состояние загружается без изменений."""
        await storage.save(sample_state)
        assert await storage.load() == sample_state

    @pytest.mark.asyncio
    async def test_save_creates_directory(self, storage: StateStorage, sample_state: TrackerState) -> None:
        """Директория хранилища создаётся при первом сохранении."""
        assert not storage.path.parent.exists()
        await storage.save(sample_state)
        assert storage.path.exists()

    @pytest.mark.asyncio
    async def test_save_leaves_no_temp_files(self, storage: StateStorage, sample_state: TrackerState) -> None:
        """После атомарной записи в директории только файл состояния."""
        await storage.save(sample_state)
        await storage.save(sample_state.cleared())

        assert [p.name for p in storage.path.parent.iterdir()] == [storage.path.name]

    @pytest.mark.asyncio
    async def test_failed_replace_keeps_old_file(self, storage: StateStorage, sample_state: TrackerState) -> None:
        """Ошибка записи не портит предыдущее состояние."""
        await storage.save(sample_state)

        with patch("incentive_tracker.infra.storage.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                await storage.save(sample_state.cleared())

        assert await storage.load() == sample_state
        assert [p.name for p in storage.path.parent.iterdir()] == [storage.path.name]

    @pytest.mark.asyncio
    async def test_load_corrupt_file(self, storage: StateStorage) -> None:
        """Повреждённый файл не блокирует работу."""
        storage.path.parent.mkdir(parents=True)
        storage.path.write_text("{broken", encoding="utf-8")

        assert await storage.load() == TrackerState()

    @pytest.mark.asyncio
    async def test_load_naive_ride_uses_storage_timezone(
        self, storage: StateStorage, tz: ZoneInfo, week_monday: datetime
    ) -> None:
        """Время поездки без пояса читается в часовом поясе хранилища."""
        storage.path.parent.mkdir(parents=True)
        storage.path.write_text(json.dumps({
            "rules": {"minHours": 25, "minTrips": 35, "minPeakTripsPercent": 70, "incentivePerTrip": 3},
            "stats": {},
            "rides": [
                {"start": "2024-03-04T08:00:00", "end": "2024-03-04T08:30:00", "durationSec": 1800},
                {"start": "2024-03-04T06:00:00+00:00", "end": "2024-03-04T06:30:00+00:00", "durationSec": 1800},
            ],
        }), encoding="utf-8")

        state = await storage.load()

        assert state.rides[0].start == week_monday
        assert state.rides[0].start.tzinfo == tz
        assert compute_dashboard(state.rides, state.rules, state.stats).total_trips == 2

    @pytest.mark.asyncio
    async def test_export(self, storage: StateStorage, sample_state: TrackerState, tmp_path: Path) -> None:
        """Выгрузка пишет документ с отступами в том же формате."""
        path = await storage.export(sample_state, tmp_path / "export", "week.json")

        text = path.read_text(encoding="utf-8")
        assert text.startswith("{\n  ")
        assert deserialize_state(text) == sample_state
