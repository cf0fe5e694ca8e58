# incentive_tracker/common/constants.py
"""
Общие константы и перечисления.
"""

from enum import Enum


class TypeMsg(str, Enum):
    """Типы сообщений для логирования."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class PaymentMethod(str, Enum):
    """Способы оплаты поездки."""
    CASH = "cash"
    CARD = "card"
    MIXED = "mixed"


class EligibilityStatus(str, Enum):
    """Итоговый статус права на бонус за неделю."""
    PENDING = "pending"
    ELIGIBLE = "eligible"
    NOT_ELIGIBLE = "not_eligible"


# Пороги качества платформы (не настраиваются пользователем)
ACCEPTANCE_MIN_PERCENT: float = 65.0
CANCEL_MAX_PERCENT: float = 10.0

# Прогрессивное условие: дополнительных поездок за каждый час сверх минимума
EXTRA_TRIPS_PER_EXTRA_HOUR: float = 1.5

# Условия бонуса по умолчанию
DEFAULT_MIN_HOURS: float = 25.0
DEFAULT_MIN_TRIPS: int = 35
DEFAULT_MIN_PEAK_TRIPS_PERCENT: float = 70.0
DEFAULT_INCENTIVE_PER_TRIP: float = 3.0
