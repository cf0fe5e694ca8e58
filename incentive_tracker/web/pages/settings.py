# incentive_tracker/web/pages/settings.py
"""
Настройки бонуса, показатели качества, новая неделя и выгрузка.
"""

from __future__ import annotations

from typing import Any

from nicegui import ui

from incentive_tracker.common.localization import get_text
from incentive_tracker.common.logger import log_error, log_info
from incentive_tracker.core.tracker import (
    FormValidationError,
    TrackerService,
    parse_quality_form,
    parse_rules_form,
)

RULE_FIELDS = (
    ("minHours", "min_hours_input"),
    ("minTrips", "min_trips_input"),
    ("minPeakTripsPercent", "min_peak_input"),
    ("incentivePerTrip", "incentive_input"),
)

QUALITY_FIELDS = (
    ("acceptance", "acceptance_input"),
    ("cancel", "cancel_input"),
)


class SettingsPage:
    def __init__(self, service: TrackerService, lang: str):
        self.service = service
        self.lang = lang
        self.inputs: dict[str, ui.number] = {}

    def _t(self, key: str, **kwargs) -> str:
        return get_text(key, self.lang, **kwargs)

    def form_values(self) -> dict[str, Any]:
        return {name: field.value for name, field in self.inputs.items()}

    async def mount(self) -> None:
        state = self.service.state
        rules = state.rules.model_dump(by_alias=True)
        stats = state.stats.model_dump(by_alias=True)

        with ui.column().classes("w-full max-w-2xl mx-auto p-4 gap-4"):
            with ui.card().classes("w-full p-4"):
                ui.label(self._t("rules_section")).classes("text-lg font-semibold")
                for name, label_key in RULE_FIELDS:
                    self.inputs[name] = ui.number(self._t(label_key), value=rules[name], min=0).classes(
                        "w-full"
                    )

            with ui.card().classes("w-full p-4"):
                ui.label(self._t("quality_section")).classes("text-lg font-semibold")
                for name, label_key in QUALITY_FIELDS:
                    self.inputs[name] = ui.number(
                        self._t(label_key), value=stats[name], min=0, max=100
                    ).classes("w-full")

            with ui.row().classes("gap-2"):
                ui.button(self._t("save_settings"), icon="save", on_click=self._on_save).props(
                    "color=primary"
                )
                ui.button(self._t("export"), icon="download", on_click=self._on_export).props("outline")
                ui.button(self._t("new_week"), icon="restart_alt", on_click=self._confirm_reset).props(
                    "color=negative outline"
                )

    async def _on_save(self) -> None:
        values = self.form_values()
        try:
            rules = parse_rules_form(values)
            stats = parse_quality_form(values)
            await self.service.update_settings(rules, stats)
        except FormValidationError as e:
            ui.notify(self._t(e.code, field=e.field), type="negative")
            return
        except OSError as e:
            await log_error(f"Не удалось сохранить настройки: {e}")
            ui.notify(str(e), type="negative")
            return
        ui.notify(self._t("settings_saved"), type="positive")

    async def _on_export(self) -> None:
        ui.download(self.service.export_bytes(), filename=self.service.export_file_name)
        await log_info(f"Состояние выгружено в браузер: {self.service.export_file_name}")

    def _confirm_reset(self) -> None:
        with ui.dialog() as dialog, ui.card().classes("p-4"):
            ui.label(self._t("new_week_confirm"))
            with ui.row().classes("justify-end w-full"):
                ui.button(self._t("cancel"), on_click=dialog.close).props("flat")
                ui.button(
                    self._t("confirm"),
                    on_click=lambda: self._on_reset(dialog),
                ).props("color=negative")
        dialog.open()

    async def _on_reset(self, dialog: ui.dialog) -> None:
        dialog.close()
        try:
            await self.service.reset_week()
        except OSError as e:
            await log_error(f"Не удалось начать новую неделю: {e}")
            ui.notify(str(e), type="negative")
            return
        ui.notify(self._t("week_reset_done"), type="positive")
