# incentive_tracker/core/eligibility/week.py
"""
Границы отчётной недели (с понедельника 00:00 по воскресенье 23:59:59.999999).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta


@dataclass(frozen=True)
class WeekWindow:
    """Отчётная неделя в часовом поясе момента, от которого она рассчитана."""
    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        """Попадает ли момент в неделю (границы включительно)."""
        return self.start <= moment <= self.end


def current_week(now: datetime) -> WeekWindow:
    """Возвращает неделю с понедельника по воскресенье, содержащую now."""
    monday = now.date() - timedelta(days=now.weekday())
    sunday = monday + timedelta(days=6)
    return WeekWindow(
        start=datetime.combine(monday, time.min, tzinfo=now.tzinfo),
        end=datetime.combine(sunday, time.max, tzinfo=now.tzinfo),
    )
