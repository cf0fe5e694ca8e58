# incentive_tracker/web/components/header.py
"""
Компонент шапки с навигацией.
"""

from __future__ import annotations

from typing import Callable

from nicegui import ui

from incentive_tracker.common.localization import get_text

NAV_ITEMS = (
    ("nav_dashboard", "/"),
    ("nav_rides", "/rides"),
    ("nav_settings", "/settings"),
    ("nav_report", "/report"),
)


def create_header(lang: str, on_language_toggle: Callable[[], None] | None = None) -> None:
    """Создаёт шапку страницы."""
    with ui.header().classes("items-center justify-between bg-slate-800 text-white"):
        ui.label(get_text("app_title", lang)).classes("text-lg font-bold")

        with ui.row().classes("items-center gap-1"):
            for key, path in NAV_ITEMS:
                ui.button(
                    get_text(key, lang),
                    on_click=lambda p=path: ui.navigate.to(p),
                ).props("flat color=white")
            if on_language_toggle is not None:
                ui.button(get_text("language", lang), on_click=on_language_toggle).props(
                    "flat color=white"
                )
