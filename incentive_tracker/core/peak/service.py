# incentive_tracker/core/peak/service.py
"""
Классификатор пиковых периодов.

Расписание пиковых окон задано по дням недели (0 = воскресенье ... 6 = суббота)
в минутах от локальной полуночи. Окна полуоткрытые: [start, end).
Ночные окна, переходящие через полночь, записаны двумя окнами в соседних днях.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo


MINUTES_PER_DAY = 24 * 60

SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)


@dataclass(frozen=True)
class PeakWindow:
    """Пиковое окно одного календарного дня."""
    day: int
    start_minute: int
    end_minute: int

    def contains(self, day: int, minute: int) -> bool:
        """Попадает ли минута дня в окно."""
        return day == self.day and self.start_minute <= minute < self.end_minute


def _hm(hours: int, minutes: int = 0) -> int:
    return hours * 60 + minutes


PEAK_WINDOWS: tuple[PeakWindow, ...] = (
    # Вс–Ср: 06:00–19:00
    *(PeakWindow(day, _hm(6), _hm(19)) for day in (SUNDAY, MONDAY, TUESDAY, WEDNESDAY)),
    # Чт: с 06:00 до конца суток, продолжение в Пт 00:00–01:00
    PeakWindow(THURSDAY, _hm(6), MINUTES_PER_DAY),
    PeakWindow(FRIDAY, 0, _hm(1)),
    # Пт и Сб: с 18:00 до конца суток, продолжение на следующий день 00:00–01:00
    PeakWindow(FRIDAY, _hm(18), MINUTES_PER_DAY),
    PeakWindow(SATURDAY, 0, _hm(1)),
    PeakWindow(SATURDAY, _hm(18), MINUTES_PER_DAY),
    PeakWindow(SUNDAY, 0, _hm(1)),
)


def local_day_and_minute(moment: datetime, tz: tzinfo) -> tuple[int, int]:
    """
    Возвращает (день недели, минуты от полуночи) в заданном часовом поясе.

    Наивное время считается уже локальным для tz.
    """
    local = moment.astimezone(tz) if moment.tzinfo is not None else moment
    # isoweekday: пн=1 ... вс=7, приводим к вс=0 ... сб=6
    return local.isoweekday() % 7, _hm(local.hour, local.minute)


def windows_for_day(day: int) -> list[PeakWindow]:
    """Все пиковые окна указанного дня недели."""
    return [window for window in PEAK_WINDOWS if window.day == day]


def is_peak(moment: datetime, tz: tzinfo) -> bool:
    """
    Является ли момент времени пиковым.

    Args:
        moment: Момент времени (обычно начало поездки)
        tz: Часовой пояс, в котором действует расписание

    Returns:
        True, если момент попадает хотя бы в одно пиковое окно
    """
    day, minute = local_day_and_minute(moment, tz)
    return any(window.contains(day, minute) for window in PEAK_WINDOWS)
