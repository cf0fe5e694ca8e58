# incentive_tracker/core/tracker/forms.py
"""
Разбор значений форм настроек и завершения поездки.

Пустые поля условий бонуса означают 0, пустые показатели качества означают «не введено» (None).
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from incentive_tracker.core.rides.models import QualityStats, Rules


class FormValidationError(ValueError):
    """
    Ошибка в значении поля формы.

    code: ключ локализации, field: имя поля.
    """

    def __init__(self, code: str, field: str) -> None:
        self.code = code
        self.field = field
        super().__init__(f"{code}: {field}")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_amount(value: Any, field: str = "amount") -> Optional[float]:
    """
    Разбирает числовое поле формы.

    Returns:
        Число или None для пустого поля

    Raises:
        FormValidationError: Значение не является конечным числом
    """
    if _is_blank(value):
        return None
    if isinstance(value, bool):
        raise FormValidationError("invalid_number", field)
    try:
        number = float(value.strip().replace(",", ".")) if isinstance(value, str) else float(value)
    except (TypeError, ValueError) as e:
        raise FormValidationError("invalid_number", field) from e
    if not math.isfinite(number):
        raise FormValidationError("invalid_number", field)
    return number


def parse_rules_form(values: Mapping[str, Any]) -> Rules:
    """
    Собирает условия бонуса из формы настроек.

    Ожидаемые ключи: minHours, minTrips, minPeakTripsPercent, incentivePerTrip.
    """
    numbers: dict[str, float] = {}
    for key in ("minHours", "minTrips", "minPeakTripsPercent", "incentivePerTrip"):
        numbers[key] = parse_amount(values.get(key), key) or 0.0

    min_trips = numbers["minTrips"]
    if not min_trips.is_integer():
        raise FormValidationError("invalid_number", "minTrips")
    numbers["minTrips"] = int(min_trips)

    try:
        return Rules.model_validate(numbers)
    except ValidationError as e:
        field = str(e.errors()[0]["loc"][0]) if e.errors() else "rules"
        raise FormValidationError("out_of_range", field) from e


def parse_quality_form(values: Mapping[str, Any]) -> QualityStats:
    """
    Собирает показатели качества из формы настроек.

    Ожидаемые ключи: acceptance, cancel. Пустое поле даёт None, а не 0.
    """
    data = {
        "acceptance": parse_amount(values.get("acceptance"), "acceptance"),
        "cancel": parse_amount(values.get("cancel"), "cancel"),
    }
    try:
        return QualityStats.model_validate(data)
    except ValidationError as e:
        field = str(e.errors()[0]["loc"][0]) if e.errors() else "stats"
        raise FormValidationError("out_of_range", field) from e
