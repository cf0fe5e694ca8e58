# incentive_tracker/web/pages/__init__.py
"""
Страницы веб-интерфейса.
"""

from incentive_tracker.web.pages.dashboard import DashboardPage
from incentive_tracker.web.pages.report import report_page
from incentive_tracker.web.pages.rides import build_table_data, rides_page
from incentive_tracker.web.pages.settings import SettingsPage

__all__ = [
    "DashboardPage",
    "SettingsPage",
    "build_table_data",
    "report_page",
    "rides_page",
]
