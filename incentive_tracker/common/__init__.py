# incentive_tracker/common/__init__.py
"""
Общие утилиты, константы и логгер.
"""

from incentive_tracker.common.logger import get_logger, log_info, log_error, log_warning, log_debug
from incentive_tracker.common.constants import TypeMsg
from incentive_tracker.common.localization import get_text, load_lang_dict

__all__ = [
    "get_logger",
    "log_info",
    "log_error",
    "log_warning",
    "log_debug",
    "TypeMsg",
    "get_text",
    "load_lang_dict",
]
