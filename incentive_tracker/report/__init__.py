# incentive_tracker/report/__init__.py
"""
Читаемый отчёт о неделе бонуса.
"""

from incentive_tracker.report.text import condition_lines, render_text_report, ride_rows, week_info_text

__all__ = [
    "condition_lines",
    "render_text_report",
    "ride_rows",
    "week_info_text",
]
