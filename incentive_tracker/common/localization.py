# incentive_tracker/common/localization.py
"""
Модуль локализации.
Загружает и предоставляет доступ к переводам из lang_dict.json.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

FALLBACK_LANGUAGE = "en"


def get_lang_dict_path() -> Path:
    """Возвращает путь к файлу локализации."""
    return Path(__file__).parent.parent.parent / "config" / "lang_dict.json"


@lru_cache()
def load_lang_dict() -> dict[str, dict[str, str]]:
    """
    Загружает словарь локализации из JSON файла.
    Результат кэшируется.

    Returns:
        Словарь вида {ключ: {язык: текст}}
    """
    lang_path = get_lang_dict_path()
    if not lang_path.exists():
        raise FileNotFoundError(f"Файл локализации не найден: {lang_path}")

    with open(lang_path, "r", encoding="utf-8") as f:
        return json.load(f)


def get_text(
    key: str,
    lang: str = "ar",
    default: str | None = None,
    **kwargs: Any,
) -> str:
    """
    Получает локализованный текст по ключу.

    Args:
        key: Ключ перевода
        lang: Код языка (ar, en)
        default: Значение, если ключ не найден
        **kwargs: Параметры для форматирования строки

    Returns:
        Локализованный текст или "[key]", если перевода нет

    Example:
        >>> get_text("report_total_trips", "en")
        'Total trips'
    """
    try:
        lang_dict = load_lang_dict()
    except FileNotFoundError:
        return default if default else f"[{key}]"

    translations = lang_dict.get(key)
    if not translations:
        return default if default else f"[{key}]"

    text = translations.get(lang) or translations.get(FALLBACK_LANGUAGE)
    if not text:
        text = next(iter(translations.values()), f"[{key}]")

    if kwargs:
        try:
            text = text.format(**kwargs)
        except KeyError:
            pass  # Отсутствующие ключи форматирования оставляем как есть

    return text


def get_available_languages() -> list[str]:
    """Возвращает список языков, для которых есть переводы."""
    try:
        lang_dict = load_lang_dict()
    except FileNotFoundError:
        return [FALLBACK_LANGUAGE]
    first_key = next(iter(lang_dict.values()), {})
    return list(first_key.keys())


def validate_lang_dict() -> list[str]:
    """
    Проверяет, что у каждого ключа есть переводы на все языки.

    Returns:
        Список ошибок (пустой, если всё в порядке)
    """
    errors: list[str] = []
    lang_dict = load_lang_dict()
    languages = set(get_available_languages())

    for key, translations in lang_dict.items():
        missing = languages - set(translations)
        if missing:
            errors.append(f"{key}: нет перевода для {', '.join(sorted(missing))}")

    return errors
