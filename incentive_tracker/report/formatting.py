# incentive_tracker/report/formatting.py
"""
Форматирование чисел, сумм и дат для отчёта и интерфейса.
"""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Optional

EMPTY = "-"


def format_money(value: Optional[float], symbol: str) -> str:
    """Сумма с двумя знаками и символом валюты, для None прочерк."""
    if value is None:
        return EMPTY
    return f"{value:.2f} {symbol}"


def format_amount(value: Optional[float]) -> str:
    """Сумма с двумя знаками без валюты, для None прочерк."""
    if value is None:
        return EMPTY
    return f"{value:.2f}"


def format_percent(value: Optional[float], digits: int = 1) -> str:
    """Процент с заданной точностью, для None прочерк."""
    if value is None:
        return EMPTY
    return f"{value:.{digits}f}%"


def format_hours(value: float) -> str:
    return f"{value:.2f}"


def format_datetime(value: Optional[datetime], tz: tzinfo | None = None) -> str:
    """Дата и время в часовом поясе трекера."""
    if value is None:
        return ""
    if tz is not None and value.tzinfo is not None:
        value = value.astimezone(tz)
    return value.strftime("%Y-%m-%d %H:%M:%S")


def format_date(value: datetime) -> str:
    return value.strftime("%Y-%m-%d")
