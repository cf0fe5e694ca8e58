# incentive_tracker/web/app.py
"""
Веб-интерфейс трекера на NiceGUI.
"""

import os

# Локальные данные NiceGUI не храним в корне проекта
os.environ.setdefault("NICEGUI_STORAGE_PATH", "/tmp/incentive_tracker_nicegui")

from nicegui import app, ui

from incentive_tracker.common.constants import TypeMsg
from incentive_tracker.common.logger import log_info
from incentive_tracker.config import settings
from incentive_tracker.dependencies import get_tracker_service, init_tracker_service
from incentive_tracker.web.components.header import create_header
from incentive_tracker.web.pages.dashboard import DashboardPage
from incentive_tracker.web.pages.report import report_page
from incentive_tracker.web.pages.rides import rides_page
from incentive_tracker.web.pages.settings import SettingsPage


def current_language() -> str:
    """Язык интерфейса из пользовательского хранилища NiceGUI."""
    lang = app.storage.user.get("language", settings.domain.DEFAULT_LANGUAGE)
    if lang not in settings.domain.SUPPORTED_LANGUAGES:
        return settings.domain.DEFAULT_LANGUAGE
    return lang


def toggle_language() -> None:
    languages = settings.domain.SUPPORTED_LANGUAGES
    index = languages.index(current_language())
    app.storage.user["language"] = languages[(index + 1) % len(languages)]
    ui.navigate.reload()


def create_layout() -> str:
    """Общая разметка страницы, возвращает язык интерфейса."""
    lang = current_language()
    ui.query("body").props(f'dir={"rtl" if lang == "ar" else "ltr"}')
    create_header(lang, on_language_toggle=toggle_language)
    return lang


def create_app() -> None:

    @ui.page("/")
    async def index_page():
        lang = create_layout()
        page = DashboardPage(get_tracker_service(), lang, settings.domain.CURRENCY_SYMBOL)
        await page.mount()

    @ui.page("/rides")
    async def page_rides():
        lang = create_layout()
        await rides_page(get_tracker_service(), lang)

    @ui.page("/settings")
    async def page_settings():
        lang = create_layout()
        page = SettingsPage(get_tracker_service(), lang)
        await page.mount()

    @ui.page("/report")
    async def page_report():
        lang = create_layout()
        await report_page(get_tracker_service(), lang, settings.domain.CURRENCY_SYMBOL)

    @app.on_startup
    async def startup() -> None:
        await init_tracker_service()
        await log_info("Web UI started", type_msg=TypeMsg.INFO)


def run_web(host: str | None = None, port: int | None = None, reload: bool = False) -> None:
    create_app()
    ui.run(
        host=host or settings.web.WEB_HOST,
        port=port or settings.web.WEB_PORT,
        reload=reload,
        title=settings.web.WEB_TITLE,
        storage_secret=settings.web.WEB_STORAGE_SECRET or "incentive-tracker-local",
        show=False,
    )
