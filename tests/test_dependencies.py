# tests/test_dependencies.py
"""
Тесты для фабрик зависимостей (incentive_tracker/dependencies.py).
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from incentive_tracker import dependencies
from incentive_tracker.config import settings
from incentive_tracker.core.rides.models import TrackerState


@pytest.fixture(autouse=True)
def _reset():
    dependencies.reset_dependencies()
    yield
    dependencies.reset_dependencies()


class TestTrackerServiceFactory:
    """Тесты для get_tracker_service."""

    def test_singleton(self) -> None:
        """Сервис создаётся один раз на процесс."""
        assert dependencies.get_tracker_service() is dependencies.get_tracker_service()

    def test_timezone_from_settings(self) -> None:
        """Часовой пояс берётся из конфигурации."""
        service = dependencies.get_tracker_service()
        assert str(service.tz) == settings.domain.TIMEZONE

    @pytest.mark.asyncio
    async def test_init_loads_state(self, tmp_path: Path) -> None:
        """Инициализация загружает состояние из хранилища."""
        with patch.object(settings.storage, "STORAGE_DIR", str(tmp_path)):
            service = await dependencies.init_tracker_service()

        assert service.state == TrackerState()
        assert service is dependencies.get_tracker_service()
