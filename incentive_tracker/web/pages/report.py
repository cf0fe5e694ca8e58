# incentive_tracker/web/pages/report.py
"""
Страница текстового отчёта о неделе.
"""

from __future__ import annotations

from nicegui import ui

from incentive_tracker.common.localization import get_text
from incentive_tracker.core.tracker import TrackerService
from incentive_tracker.report import render_text_report


async def report_page(service: TrackerService, lang: str, currency_symbol: str) -> None:
    report = render_text_report(service.dashboard(), lang, currency_symbol, service.tz)

    with ui.column().classes("w-full max-w-4xl mx-auto p-4"):
        ui.label(get_text("nav_report", lang)).classes("text-2xl font-bold mb-4")
        with ui.card().classes("w-full p-4"):
            ui.label(report).classes("whitespace-pre-wrap font-mono text-sm")
