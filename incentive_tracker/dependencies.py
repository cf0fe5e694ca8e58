# incentive_tracker/dependencies.py
"""
Фабрики зависимостей приложения.
"""

from __future__ import annotations

from typing import Optional
from zoneinfo import ZoneInfo

from incentive_tracker.config import settings
from incentive_tracker.core.tracker.service import TrackerService
from incentive_tracker.infra.storage import StateStorage


# Кэшированный экземпляр сервиса (одно состояние на процесс)
_tracker_service: Optional[TrackerService] = None


def get_timezone() -> ZoneInfo:
    """Часовой пояс трекера из конфигурации."""
    return ZoneInfo(settings.domain.TIMEZONE)


def get_tracker_service() -> TrackerService:
    """
    Возвращает сервис трекера.

    Returns:
        TrackerService
    """
    global _tracker_service
    if _tracker_service is None:
        _tracker_service = TrackerService(
            storage=StateStorage(settings.storage.state_path, get_timezone()),
            tz=get_timezone(),
            export_file_name=settings.storage.EXPORT_FILE_NAME,
        )
    return _tracker_service


async def init_tracker_service() -> TrackerService:
    """Создаёт сервис и загружает сохранённое состояние."""
    from incentive_tracker.common.logger import log_info

    service = get_tracker_service()
    await service.load()
    await log_info(f"Трекер инициализирован, хранилище: {settings.storage.state_path}")
    return service


def reset_dependencies() -> None:
    """Сбрасывает кэш сервиса (используется в тестах)."""
    global _tracker_service
    _tracker_service = None
