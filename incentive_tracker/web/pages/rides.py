# incentive_tracker/web/pages/rides.py
"""
Таблица поездок недели.
"""

from __future__ import annotations

from nicegui import ui

from incentive_tracker.common.localization import get_text
from incentive_tracker.core.tracker import TrackerService
from incentive_tracker.report.text import RIDE_COLUMNS, ride_rows


def build_table_data(service: TrackerService, lang: str) -> tuple[list[dict], list[dict]]:
    """Колонки и строки таблицы поездок (от новых к старым)."""
    columns = [
        {"name": key, "label": get_text(key, lang), "field": key, "align": "left"}
        for key in RIDE_COLUMNS
    ]
    snapshot = service.dashboard()
    rows = [dict(zip(RIDE_COLUMNS, row)) for row in ride_rows(snapshot, lang, service.tz)]
    return columns, rows


async def rides_page(service: TrackerService, lang: str) -> None:
    with ui.column().classes("w-full max-w-5xl mx-auto p-4"):
        ui.label(get_text("rides_title", lang)).classes("text-2xl font-bold mb-4")
        columns, rows = build_table_data(service, lang)
        ui.table(columns=columns, rows=rows, row_key="col_index").classes("w-full")
