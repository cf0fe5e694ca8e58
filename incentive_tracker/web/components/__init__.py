# incentive_tracker/web/components/__init__.py
"""
Компоненты веб-интерфейса.
"""

from incentive_tracker.web.components.header import create_header

__all__ = ["create_header"]
