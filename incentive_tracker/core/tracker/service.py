# incentive_tracker/core/tracker/service.py
"""
Сервис трекера.
Владеет единственным состоянием, сохраняет его после каждого изменения
и пересчитывает статистику по запросу.
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from pathlib import Path
from typing import Optional

from incentive_tracker.common.constants import PaymentMethod, TypeMsg
from incentive_tracker.common.logger import log_info, log_warning
from incentive_tracker.core.eligibility import DashboardSnapshot, compute_dashboard
from incentive_tracker.core.rides import (
    QualityStats,
    Ride,
    RideSession,
    RideValidationError,
    Rules,
    TrackerState,
)
from incentive_tracker.core.rides.service import OpenRide
from incentive_tracker.infra.storage import StateStorage, serialize_state


class TrackerService:
    """
    Сервис трекера.

    Реализует:
    - Начало и завершение поездки
    - Сохранение условий бонуса и показателей качества
    - Сброс недели
    - Расчёт снимка статистики
    - Выгрузку состояния
    """

    def __init__(
        self,
        storage: StateStorage,
        tz: tzinfo,
        export_file_name: str = "incentive-tracker-week.json",
    ) -> None:
        """
        Инициализация сервиса.

        Args:
            storage: Хранилище состояния
            tz: Часовой пояс расписания пиковых периодов и отчётной недели
            export_file_name: Имя файла выгрузки
        """
        self._storage = storage
        self._tz = tz
        self._export_file_name = export_file_name
        self._state = TrackerState()
        self._session = RideSession()

    @property
    def state(self) -> TrackerState:
        """Текущее состояние (неизменяемое значение)."""
        return self._state

    @property
    def open_ride(self) -> OpenRide | None:
        """Открытая поездка или None."""
        return self._session.open_ride

    @property
    def tz(self) -> tzinfo:
        """Часовой пояс трекера."""
        return self._tz

    @property
    def export_file_name(self) -> str:
        """Имя файла выгрузки."""
        return self._export_file_name

    def _now(self, now: datetime | None) -> datetime:
        return now if now is not None else datetime.now(self._tz)

    async def _commit(self, state: TrackerState) -> None:
        """Сохраняет новое состояние и только затем делает его текущим."""
        await self._storage.save(state)
        self._state = state

    async def load(self) -> TrackerState:
        """Загружает состояние из хранилища."""
        self._state = await self._storage.load()
        return self._state

    def start_ride(self, now: datetime | None = None) -> bool:
        """
        Начинает поездку.

        Returns:
            False, если поездка уже открыта
        """
        return self._session.start(self._now(now))

    async def finish_ride(
        self,
        method: Optional[PaymentMethod],
        fare: Optional[float],
        cash_amount: Optional[float] = None,
        now: datetime | None = None,
    ) -> Ride | None:
        """
        Завершает открытую поездку и сохраняет её.

        Args:
            method: Способ оплаты
            fare: Стоимость поездки
            cash_amount: Сумма наличными (для смешанной оплаты)
            now: Момент окончания (по умолчанию текущее время)

        Returns:
            Сохранённая поездка или None, если открытой поездки нет

        Raises:
            RideValidationError: Данные оплаты некорректны (поездка остаётся открытой)
        """
        if not self._session.is_open:
            return None

        try:
            ride = self._session.finish(self._now(now), method, fare, cash_amount, self._tz)
        except RideValidationError as e:
            await log_warning(f"Поездка не сохранена: {e.code}")
            raise

        try:
            await self._commit(self._state.with_ride(ride))
        except OSError:
            # Поездка снова открыта, её можно завершить повторно
            self._session.start(ride.start)
            raise

        await log_info(
            f"Поездка сохранена: {ride.duration_sec} сек, {ride.fare} ({ride.payment.value}), "
            f"пик={ride.is_peak}",
            type_msg=TypeMsg.DEBUG,
        )
        return ride

    async def update_settings(self, rules: Rules, stats: QualityStats) -> TrackerState:
        """Сохраняет условия бонуса и показатели качества."""
        await self._commit(self._state.with_settings(rules, stats))
        await log_info("Настройки бонуса обновлены", type_msg=TypeMsg.DEBUG)
        return self._state

    async def reset_week(self) -> TrackerState:
        """Удаляет все поездки недели и открытую поездку."""
        removed = len(self._state.rides)
        await self._commit(self._state.cleared())
        self._session.discard()
        await log_info(f"Новая неделя: удалено поездок {removed}")
        return self._state

    def dashboard(self, now: datetime | None = None) -> DashboardSnapshot:
        """Рассчитывает снимок статистики по текущему состоянию."""
        return compute_dashboard(
            self._state.rides,
            self._state.rules,
            self._state.stats,
            now=self._now(now),
        )

    async def export(self, directory: Path | str) -> Path:
        """Выгружает состояние в JSON файл в указанной директории."""
        return await self._storage.export(self._state, directory, self._export_file_name)

    def export_bytes(self) -> bytes:
        """Документ выгрузки (JSON с отступами) для скачивания без записи на диск."""
        return serialize_state(self._state, indent=2).encode("utf-8")
