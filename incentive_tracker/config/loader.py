# incentive_tracker/config/loader.py
"""
Загрузчик конфигурации трекера.
Единственный источник истины: config/config.json.
Отдельные значения переопределяются из переменных окружения.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================================================================
# ОПРЕДЕЛЕНИЕ ПУТЕЙ
# =============================================================================

def get_project_root() -> Path:
    """Возвращает корневую директорию проекта."""
    return Path(__file__).parent.parent.parent


def get_config_path() -> Path:
    """
    Возвращает путь к файлу конфигурации.

    Переменная окружения INCENTIVE_TRACKER_CONFIG позволяет указать другой файл.
    """
    override = os.getenv("INCENTIVE_TRACKER_CONFIG")
    if override:
        return Path(override)
    return get_project_root() / "config" / "config.json"


def load_config_json() -> dict[str, Any]:
    """Загружает config.json и возвращает словарь."""
    config_path = get_config_path()
    if not config_path.exists():
        raise FileNotFoundError(f"Файл конфигурации не найден: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        return json.load(f)


# =============================================================================
# PYDANTIC МОДЕЛИ КОНФИГУРАЦИИ
# =============================================================================

class SystemSettings(BaseModel):
    """Системные настройки."""
    PROJECT_NAME: str = "incentive_tracker"
    VERSION: str = "3.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"


class LoggingSettings(BaseModel):
    """Настройки логирования."""
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_FILE_PATH: str = "logs/app.log"
    LOG_FORMAT: str = "colored"
    LOG_MAX_BYTES: int = 10485760
    LOG_BACKUP_COUNT: int = 5

    @field_validator("LOG_FORMAT")
    @classmethod
    def check_format(cls, v: str) -> str:
        """Допустимы только json и colored."""
        if v not in ("json", "colored"):
            raise ValueError(f"Неизвестный формат логов: {v}")
        return v


class StorageSettings(BaseModel):
    """Настройки локального хранения состояния."""
    STORAGE_DIR: str = "data"
    STORAGE_KEY: str = "incentive-tracker-v3-state"
    EXPORT_FILE_NAME: str = "incentive-tracker-week.json"

    @property
    def state_path(self) -> Path:
        """Путь к файлу состояния (имя файла содержит версию ключа)."""
        base = Path(self.STORAGE_DIR)
        if not base.is_absolute():
            base = get_project_root() / base
        return base / f"{self.STORAGE_KEY}.json"


class DomainSettings(BaseModel):
    """Настройки локализации, часового пояса и валюты."""
    DEFAULT_LANGUAGE: str = "ar"
    SUPPORTED_LANGUAGES: list[str] = Field(default_factory=lambda: ["ar", "en"])
    TIMEZONE: str = "Asia/Riyadh"
    CURRENCY: str = "SAR"
    CURRENCY_SYMBOL: str = "ر.س"


class WebSettings(BaseModel):
    """Настройки локального веб-интерфейса."""
    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8080
    WEB_TITLE: str = "Incentive Tracker"
    WEB_STORAGE_SECRET: str = ""

    @field_validator("WEB_STORAGE_SECRET", mode="before")
    @classmethod
    def get_from_env(cls, v: str | None) -> str:
        """Получает секрет хранилища из переменных окружения, если не задан."""
        if not v:
            return os.getenv("WEB_STORAGE_SECRET", "")
        return v


# =============================================================================
# ГЛАВНЫЙ КЛАСС НАСТРОЕК
# =============================================================================

class Settings(BaseSettings):
    """
    Главный класс настроек приложения.
    Агрегирует все секции конфигурации.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    system: SystemSettings = Field(default_factory=SystemSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    domain: DomainSettings = Field(default_factory=DomainSettings)
    web: WebSettings = Field(default_factory=WebSettings)

    @classmethod
    def from_dict(cls, config_data: dict[str, Any]) -> "Settings":
        """
        Создаёт объект Settings из плоского словаря конфигурации.
        Ключи, начинающиеся с _comment_, игнорируются.
        """
        data = {k: v for k, v in config_data.items() if not k.startswith("_comment_")}

        return cls(
            system=SystemSettings(
                PROJECT_NAME=data.get("PROJECT_NAME", "incentive_tracker"),
                VERSION=data.get("VERSION", "3.0.0"),
                DEBUG=data.get("DEBUG", False),
                ENVIRONMENT=os.getenv("ENVIRONMENT", data.get("ENVIRONMENT", "development")),
            ),
            logging=LoggingSettings(
                LOG_LEVEL=os.getenv("LOG_LEVEL", data.get("LOG_LEVEL", "INFO")),
                LOG_TO_FILE=data.get("LOG_TO_FILE", False),
                LOG_FILE_PATH=data.get("LOG_FILE_PATH", "logs/app.log"),
                LOG_FORMAT=data.get("LOG_FORMAT", "colored"),
                LOG_MAX_BYTES=data.get("LOG_MAX_BYTES", 10485760),
                LOG_BACKUP_COUNT=data.get("LOG_BACKUP_COUNT", 5),
            ),
            storage=StorageSettings(
                STORAGE_DIR=os.getenv("STORAGE_DIR", data.get("STORAGE_DIR", "data")),
                STORAGE_KEY=data.get("STORAGE_KEY", "incentive-tracker-v3-state"),
                EXPORT_FILE_NAME=data.get("EXPORT_FILE_NAME", "incentive-tracker-week.json"),
            ),
            domain=DomainSettings(
                DEFAULT_LANGUAGE=data.get("DEFAULT_LANGUAGE", "ar"),
                SUPPORTED_LANGUAGES=data.get("SUPPORTED_LANGUAGES", ["ar", "en"]),
                TIMEZONE=os.getenv("TIMEZONE", data.get("TIMEZONE", "Asia/Riyadh")),
                CURRENCY=data.get("CURRENCY", "SAR"),
                CURRENCY_SYMBOL=data.get("CURRENCY_SYMBOL", "ر.س"),
            ),
            web=WebSettings(
                WEB_HOST=data.get("WEB_HOST", "127.0.0.1"),
                WEB_PORT=int(os.getenv("WEB_PORT", data.get("WEB_PORT", 8080))),
                WEB_TITLE=data.get("WEB_TITLE", "Incentive Tracker"),
                WEB_STORAGE_SECRET=data.get("WEB_STORAGE_SECRET", ""),
            ),
        )

    @classmethod
    def from_config_json(cls) -> "Settings":
        """Создаёт объект Settings из config.json."""
        return cls.from_dict(load_config_json())


@lru_cache()
def get_settings() -> Settings:
    """
    Возвращает синглтон настроек приложения.
    Перед чтением config.json подгружает .env из корня проекта.
    """
    from dotenv import load_dotenv

    env_path = get_project_root() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    return Settings.from_config_json()


# Экспорт синглтона для удобного импорта
settings = get_settings()
