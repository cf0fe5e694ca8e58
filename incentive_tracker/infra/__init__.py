# incentive_tracker/infra/__init__.py
"""
Инфраструктурный слой.
Хранение состояния на устройстве.
"""

from incentive_tracker.infra.storage import (
    ParsedState,
    StateStorage,
    deserialize_state,
    parse_rules,
    parse_state,
    serialize_state,
)

__all__ = [
    "ParsedState",
    "StateStorage",
    "deserialize_state",
    "parse_rules",
    "parse_state",
    "serialize_state",
]
