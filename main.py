#!/usr/bin/env python3
# main.py
"""
Главная точка входа трекера недельного бонуса.
Запускает веб-интерфейс, печатает отчёт или выгружает состояние недели.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from incentive_tracker.config import settings
from incentive_tracker.common.logger import setup_logging, log_info, log_error
from incentive_tracker.common.constants import TypeMsg
from incentive_tracker.dependencies import init_tracker_service

MODES = ("web", "report", "export")


def run_web() -> None:
    """Запускает веб-интерфейс (NiceGUI управляет своим циклом событий)."""
    from incentive_tracker.web.app import run_web as start_web

    asyncio.run(log_info(
        f"Запуск веб-интерфейса на {settings.web.WEB_HOST}:{settings.web.WEB_PORT}",
        type_msg=TypeMsg.INFO,
    ))
    start_web()


async def run_report(lang: str) -> None:
    """Печатает текстовый отчёт о текущей неделе."""
    from incentive_tracker.report import render_text_report

    service = await init_tracker_service()
    print(render_text_report(
        service.dashboard(),
        lang=lang,
        currency_symbol=settings.domain.CURRENCY_SYMBOL,
        tz=service.tz,
    ))


async def run_export(directory: str) -> None:
    """Выгружает состояние недели в JSON файл."""
    service = await init_tracker_service()
    try:
        path = await service.export(Path(directory))
    except OSError as e:
        await log_error(f"Ошибка выгрузки: {e}", exc_info=True)
        sys.exit(1)
    print(path)


async def main(mode: str, argument: str | None = None) -> None:
    """
    Главная функция запуска консольных режимов.

    Args:
        mode: Режим запуска (report, export)
        argument: Язык отчёта или директория выгрузки
    """
    await log_info(
        f"{settings.system.PROJECT_NAME} v{settings.system.VERSION}, режим '{mode}'",
        type_msg=TypeMsg.DEBUG,
    )

    if mode == "report":
        lang = argument or settings.domain.DEFAULT_LANGUAGE
        if lang not in settings.domain.SUPPORTED_LANGUAGES:
            print(f"Ошибка: неподдерживаемый язык '{lang}'")
            sys.exit(1)
        await run_report(lang)
    elif mode == "export":
        await run_export(argument or ".")


def print_usage() -> None:
    """Выводит справку по использованию."""
    print(f"""
Incentive Tracker v{settings.system.VERSION} — учёт поездок недели и права на бонус

Использование:
    python main.py [mode] [argument]

Режимы:
    web                    — веб-интерфейс ({settings.web.WEB_HOST}:{settings.web.WEB_PORT})
    report [lang]          — текстовый отчёт о неделе (ar, en)
    export [directory]     — выгрузка состояния в {settings.storage.EXPORT_FILE_NAME}

Без аргументов запускается веб-интерфейс.
""")


if __name__ == "__main__":
    mode = "web"
    argument = None

    if len(sys.argv) > 1:
        arg = sys.argv[1].lower()
        if arg in ("--help", "-h"):
            print_usage()
            sys.exit(0)
        elif arg in MODES:
            mode = arg
        else:
            print(f"Ошибка: неизвестный режим '{arg}'")
            print_usage()
            sys.exit(1)
    if len(sys.argv) > 2:
        argument = sys.argv[2]

    setup_logging()

    try:
        if mode == "web":
            run_web()
        else:
            asyncio.run(main(mode, argument))
    except KeyboardInterrupt:
        pass
