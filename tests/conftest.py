# tests/conftest.py
"""
Общие фикстуры и настройки для тестов.
"""

from __future__ import annotations

import os
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Callable
from zoneinfo import ZoneInfo

import pytest

# Логи тестов только в консоль
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from incentive_tracker.common.constants import PaymentMethod
from incentive_tracker.core.rides.models import QualityStats, Ride, Rules
from incentive_tracker.core.tracker.service import TrackerService
from incentive_tracker.infra.storage import StateStorage


# =============================================================================
# ФИКСТУРЫ КОНФИГУРАЦИИ
# =============================================================================

@pytest.fixture(scope="session")
def project_root() -> Path:
    """Корневая директория проекта."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def config_path(project_root: Path) -> Path:
    """Путь к файлу конфигурации."""
    return project_root / "config" / "config.json"


@pytest.fixture(scope="session")
def lang_dict_path(project_root: Path) -> Path:
    """Путь к файлу локализации."""
    return project_root / "config" / "lang_dict.json"


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Мок конфигурации для тестов."""
    return {
        "_comment_system": "test",
        "PROJECT_NAME": "incentive_tracker_test",
        "VERSION": "3.0.0-test",
        "DEBUG": True,
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "DEBUG",
        "LOG_TO_FILE": False,
        "LOG_FILE_PATH": "logs/test.log",
        "LOG_FORMAT": "json",
        "LOG_MAX_BYTES": 1024,
        "LOG_BACKUP_COUNT": 1,
        "STORAGE_DIR": "test_data",
        "STORAGE_KEY": "test-state",
        "EXPORT_FILE_NAME": "test-week.json",
        "DEFAULT_LANGUAGE": "en",
        "SUPPORTED_LANGUAGES": ["ar", "en"],
        "TIMEZONE": "Europe/Berlin",
        "CURRENCY": "EUR",
        "CURRENCY_SYMBOL": "€",
        "WEB_HOST": "0.0.0.0",
        "WEB_PORT": 9090,
        "WEB_TITLE": "Test tracker",
        "WEB_STORAGE_SECRET": "test-secret",
    }


# =============================================================================
# ФИКСТУРЫ ДОМЕНА
# =============================================================================

@pytest.fixture(scope="session")
def tz() -> ZoneInfo:
    """Часовой пояс трекера в тестах."""
    return ZoneInfo("Asia/Riyadh")


@pytest.fixture
def week_monday(tz: ZoneInfo) -> datetime:
    """Понедельник отчётной недели, 08:00 (пиковое время)."""
    return datetime(2024, 3, 4, 8, 0, tzinfo=tz)


@pytest.fixture
def make_ride(tz: ZoneInfo) -> Callable[..., Ride]:
    """Фабрика поездок с разумными значениями по умолчанию."""

    def _make(
        start: datetime | None = None,
        minutes: float = 30,
        fare: float | None = 50.0,
        payment: PaymentMethod | None = PaymentMethod.CASH,
        cash_part: float | None = None,
        card_part: float | None = None,
        is_peak: bool = True,
    ) -> Ride:
        start = start or datetime(2024, 3, 4, 8, 0, tzinfo=tz)
        if cash_part is None and card_part is None and fare is not None:
            if payment == PaymentMethod.CASH:
                cash_part, card_part = fare, 0.0
            elif payment == PaymentMethod.CARD:
                cash_part, card_part = 0.0, fare
        return Ride(
            start=start,
            end=start + timedelta(minutes=minutes),
            duration_sec=round(minutes * 60),
            fare=fare,
            payment=payment,
            cash_part=cash_part,
            card_part=card_part,
            is_peak=is_peak,
        )

    return _make


@pytest.fixture
def default_rules() -> Rules:
    """Условия бонуса по умолчанию (25 часов, 35 поездок, 70% пиковых, 3 за поездку)."""
    return Rules()


@pytest.fixture
def good_stats() -> QualityStats:
    """Показатели качества, удовлетворяющие порогам."""
    return QualityStats(acceptance=90.0, cancel=2.0)


@pytest.fixture
def state_path(tmp_path: Path) -> Path:
    """Путь к файлу состояния во временной директории."""
    return tmp_path / "data" / "state.json"


@pytest.fixture
def storage(state_path: Path, tz: ZoneInfo) -> StateStorage:
    """Хранилище состояния во временной директории."""
    return StateStorage(state_path, tz)


@pytest.fixture
def tracker(storage: StateStorage, tz: ZoneInfo) -> TrackerService:
    """Сервис трекера поверх временного хранилища."""
    return TrackerService(storage=storage, tz=tz, export_file_name="week.json")
