# incentive_tracker/infra/storage.py
"""
Локальное хранение состояния трекера в JSON файле.

Состояние сохраняется целиком после каждого изменения.
Повреждённый или отсутствующий файл не блокирует работу: используются значения по умолчанию.
"""

from __future__ import annotations

import json
import math
import os
import tempfile
from dataclasses import dataclass, field
from datetime import tzinfo
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from incentive_tracker.common.logger import log_error, log_info, log_warning
from incentive_tracker.common.constants import TypeMsg
from incentive_tracker.core.rides.models import QualityStats, Ride, Rules, TrackerState


# Допустимые границы условий бонуса: (поле, минимум, максимум)
RULE_BOUNDS = (
    ("minHours", 0.0, None),
    ("minTrips", 0.0, None),
    ("minPeakTripsPercent", 0.0, 100.0),
    ("incentivePerTrip", 0.0, None),
)


@dataclass
class ParsedState:
    """Результат разбора сохранённого документа."""
    state: TrackerState
    defaulted_fields: list[str] = field(default_factory=list)
    coerced_rules: list[str] = field(default_factory=list)
    dropped_rides: int = 0
    inconsistent_rides: int = 0


def serialize_state(state: TrackerState, indent: int | None = None) -> str:
    """Сериализует состояние в JSON строку формата хранения."""
    return json.dumps(state.to_document(), ensure_ascii=False, indent=indent)


def _rule_number(value: Any, low: float, high: float | None) -> float | None:
    """Число в границах условия; None, если значение не число."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    number = max(low, number)
    return min(high, number) if high is not None else number


def parse_rules(data: dict[str, Any]) -> tuple[Rules, list[str]]:
    """
    Разбирает сохранённые условия бонуса по полям.

    Отсутствующее или нечисловое поле становится 0, значение вне границ
    прижимается к ближайшей границе. Остальные поля сохраняются как есть.

    Returns:
        Условия и имена полей, которые пришлось исправить
    """
    values: dict[str, float] = {}
    coerced: list[str] = []
    for name, low, high in RULE_BOUNDS:
        raw = data.get(name)
        number = _rule_number(raw, low, high)
        if number is None:
            number = 0.0
        if raw is None or isinstance(raw, bool) or number != raw:
            coerced.append(name)
        values[name] = number
    values["minTrips"] = int(values["minTrips"])
    return Rules.model_validate(values), coerced


def parse_state(data: Any, tz: tzinfo | None = None) -> ParsedState:
    """
    Разбирает сохранённый документ.

    Каждое поле верхнего уровня (rules, stats, rides) проверяется отдельно
    и при отсутствии или ошибке заменяется значением по умолчанию.
    Условия бонуса исправляются по полям, некорректные поездки отбрасываются по одной.

    Args:
        data: Документ хранения
        tz: Часовой пояс для времени поездок без пояса (None: UTC)
    """
    if not isinstance(data, dict):
        return ParsedState(state=TrackerState(), defaulted_fields=["rules", "stats", "rides"])

    defaulted: list[str] = []
    coerced: list[str] = []

    raw_rules = data.get("rules")
    if isinstance(raw_rules, dict):
        rules, coerced = parse_rules(raw_rules)
    else:
        rules = Rules()
        defaulted.append("rules")

    try:
        stats = QualityStats.model_validate(data["stats"])
    except (KeyError, ValidationError):
        stats = QualityStats()
        defaulted.append("stats")

    raw_rides = data.get("rides")
    rides: list[Ride] = []
    dropped = 0
    if isinstance(raw_rides, list):
        for raw in raw_rides:
            try:
                rides.append(Ride.model_validate(raw, context={"tz": tz}))
            except ValidationError:
                dropped += 1
    else:
        defaulted.append("rides")

    return ParsedState(
        state=TrackerState(rules=rules, stats=stats, rides=tuple(rides)),
        defaulted_fields=defaulted,
        coerced_rules=coerced,
        dropped_rides=dropped,
        inconsistent_rides=sum(1 for ride in rides if not ride.parts_consistent),
    )


def deserialize_state(raw: str, tz: tzinfo | None = None) -> TrackerState:
    """Восстанавливает состояние из JSON строки (при ошибке состояние по умолчанию)."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return TrackerState()
    return parse_state(data, tz).state


class StateStorage:
    """Хранилище состояния в одном JSON файле."""

    def __init__(self, path: Path | str, tz: tzinfo | None = None) -> None:
        """
        Args:
            path: Путь к файлу состояния
            tz: Часовой пояс для времени поездок без пояса (None: UTC)
        """
        self._path = Path(path)
        self._tz = tz

    @property
    def path(self) -> Path:
        """Путь к файлу состояния."""
        return self._path

    async def load(self) -> TrackerState:
        """
        Загружает состояние.

        Никогда не выбрасывает исключение: при отсутствии или повреждении файла
        возвращается состояние по умолчанию.
        """
        if not self._path.exists():
            await log_info(f"Файл состояния не найден, используются значения по умолчанию: {self._path}",
                           type_msg=TypeMsg.DEBUG)
            return TrackerState()

        try:
            raw = self._path.read_text(encoding="utf-8")
            data = json.loads(raw)
        except (OSError, ValueError) as e:
            await log_warning(f"Не удалось прочитать состояние {self._path}: {e}")
            return TrackerState()

        parsed = parse_state(data, self._tz)

        if parsed.defaulted_fields:
            await log_warning(
                f"Поля состояния заменены значениями по умолчанию: {', '.join(parsed.defaulted_fields)}"
            )
        if parsed.coerced_rules:
            await log_warning(f"Исправлены поля условий бонуса: {', '.join(parsed.coerced_rules)}")
        if parsed.dropped_rides:
            await log_warning(f"Пропущено некорректных поездок: {parsed.dropped_rides}")
        if parsed.inconsistent_rides:
            await log_warning(
                f"Поездок с несовпадающей разбивкой cash/card: {parsed.inconsistent_rides}"
            )

        await log_info(f"Состояние загружено: {len(parsed.state.rides)} поездок", type_msg=TypeMsg.DEBUG)
        return parsed.state

    async def save(self, state: TrackerState) -> None:
        """
        Сохраняет состояние целиком.

        Запись атомарная: документ пишется во временный файл и заменяет основной.
        """
        payload = serialize_state(state)
        self._path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.",
            suffix=".tmp",
            dir=str(self._path.parent),
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self._path)
        except OSError as e:
            await log_error(f"Ошибка сохранения состояния {self._path}: {e}", exc_info=True)
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    async def export(self, state: TrackerState, directory: Path | str, file_name: str) -> Path:
        """
        Выгружает состояние в читаемый JSON (с отступами) того же формата, что и хранилище.

        Returns:
            Путь к созданному файлу
        """
        target_dir = Path(directory)
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / file_name
        target.write_text(serialize_state(state, indent=2), encoding="utf-8")

        await log_info(f"Состояние выгружено в {target}")
        return target
