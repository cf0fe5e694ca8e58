# incentive_tracker/web/pages/dashboard.py
"""
Главная страница: сводка недели, начало и завершение поездки.
"""

from __future__ import annotations

from typing import Optional

from nicegui import ui

from incentive_tracker.common.constants import PaymentMethod
from incentive_tracker.common.localization import get_text
from incentive_tracker.common.logger import log_error
from incentive_tracker.core.eligibility import DashboardSnapshot
from incentive_tracker.core.rides import RideValidationError
from incentive_tracker.core.tracker import FormValidationError, TrackerService, parse_amount
from incentive_tracker.report.formatting import (
    format_datetime,
    format_hours,
    format_money,
    format_percent,
)
from incentive_tracker.web.presenters import (
    StatusText,
    eligibility_badge,
    hours_status,
    income_boost_text,
    peak_status,
    quality_hints,
    remaining_trips_status,
    required_trips_text,
)


class DashboardPage:
    def __init__(self, service: TrackerService, lang: str, currency_symbol: str):
        self.service = service
        self.lang = lang
        self.currency_symbol = currency_symbol
        self.dialog: Optional[ui.dialog] = None
        self.payment_toggle: Optional[ui.toggle] = None
        self.fare_input: Optional[ui.number] = None
        self.cash_input: Optional[ui.number] = None

    def _t(self, key: str, **kwargs) -> str:
        return get_text(key, self.lang, **kwargs)

    def _money(self, value: Optional[float]) -> str:
        return format_money(value, self.currency_symbol)

    async def mount(self) -> None:
        with ui.column().classes("w-full max-w-4xl mx-auto p-4 gap-4"):
            self.ride_controls()
            self.summary()
        self._build_finish_dialog()

    @ui.refreshable
    def ride_controls(self) -> None:
        """Блок текущей поездки."""
        open_ride = self.service.open_ride
        with ui.card().classes("w-full p-4"):
            if open_ride is None:
                ui.label(self._t("no_open_ride")).classes("text-gray-500")
            else:
                ui.label(
                    self._t("open_ride_since", start=format_datetime(open_ride.start, self.service.tz))
                ).classes("font-semibold")
            with ui.row().classes("gap-2"):
                ui.button(self._t("start_ride"), icon="play_arrow", on_click=self._on_start).props(
                    "color=positive"
                ).set_enabled(open_ride is None)
                ui.button(self._t("end_ride"), icon="stop", on_click=self._open_finish_dialog).props(
                    "color=negative"
                ).set_enabled(open_ride is not None)

    @ui.refreshable
    def summary(self) -> None:
        """Карточки статистики недели."""
        snapshot = self.service.dashboard()

        with ui.row().classes("w-full gap-4"):
            self._stat_card(
                self._t("report_total_trips"),
                str(snapshot.total_trips),
                remaining_trips_status(snapshot, self.lang),
            )
            self._stat_card(
                self._t("report_total_hours"),
                format_hours(snapshot.total_hours),
                hours_status(snapshot, self.lang),
            )
            self._stat_card(
                self._t("report_peak_trips"),
                f"{snapshot.peak_trips_count} ({format_percent(snapshot.peak_trips_percent)})",
                peak_status(snapshot, self.lang),
            )
            self._stat_card(self._t("report_peak_time"), format_percent(snapshot.peak_time_percent))

        with ui.row().classes("w-full gap-4"):
            self._stat_card(self._t("report_total_fare"), self._money(snapshot.total_fare))
            self._stat_card(self._t("report_total_cash"), self._money(snapshot.total_cash))
            self._stat_card(self._t("report_total_card"), self._money(snapshot.total_card))

        with ui.row().classes("w-full gap-4"):
            with ui.card().classes("p-4 flex-grow"):
                ui.label(self._t("card_required_trips")).classes("text-sm text-gray-600")
                ui.label(str(snapshot.required_trips)).classes("text-2xl font-bold")
                ui.label(required_trips_text(snapshot, self.lang)).classes("text-xs text-gray-500")
            with ui.card().classes("p-4 flex-grow"):
                ui.label(self._t("report_total_incentive")).classes("text-sm text-gray-600")
                ui.label(self._money(snapshot.total_incentive)).classes("text-2xl font-bold")
                ui.label(income_boost_text(snapshot, self.lang)).classes("text-xs text-gray-500")

        self._status_card(snapshot)

    def _stat_card(self, title: str, value: str, status: StatusText | None = None) -> None:
        with ui.card().classes("p-4 flex-grow"):
            ui.label(title).classes("text-sm text-gray-600")
            ui.label(value).classes("text-2xl font-bold")
            if status is not None:
                ui.label(status.text).classes(f"text-xs rounded px-2 py-1 {status.classes}")

    def _status_card(self, snapshot: DashboardSnapshot) -> None:
        badge = eligibility_badge(snapshot, self.lang)
        with ui.card().classes("w-full p-4"):
            with ui.row().classes("items-center justify-between w-full"):
                ui.label(self._t("card_status")).classes("text-lg font-semibold")
                ui.label(badge.text).classes(f"rounded px-3 py-1 font-bold {badge.classes}")
            ui.label(self._t("card_quality")).classes("text-sm text-gray-600 mt-2")
            for hint in quality_hints(snapshot, self.lang):
                ui.label(hint).classes("text-sm")

    def _build_finish_dialog(self) -> None:
        with ui.dialog() as self.dialog, ui.card().classes("w-96 p-4"):
            ui.label(self._t("end_ride")).classes("text-lg font-bold")
            ui.label(self._t("payment_method")).classes("text-sm text-gray-600")
            self.payment_toggle = ui.toggle(
                {
                    PaymentMethod.CASH.value: self._t("pay_cash"),
                    PaymentMethod.CARD.value: self._t("pay_card"),
                    PaymentMethod.MIXED.value: self._t("pay_mixed"),
                }
            )
            self.fare_input = ui.number(self._t("fare_input"), min=0, format="%.2f").classes("w-full")
            self.cash_input = ui.number(self._t("cash_input"), min=0, format="%.2f").classes("w-full")
            self.cash_input.bind_visibility_from(
                self.payment_toggle, "value", backward=lambda v: v == PaymentMethod.MIXED.value
            )
            with ui.row().classes("justify-end w-full"):
                ui.button(self._t("cancel"), on_click=self.dialog.close).props("flat")
                ui.button(self._t("confirm"), on_click=self._on_finish).props("color=primary")

    def _open_finish_dialog(self) -> None:
        if self.dialog is None:
            return
        self.payment_toggle.value = None
        self.fare_input.value = None
        self.cash_input.value = None
        self.dialog.open()

    def _refresh(self) -> None:
        self.ride_controls.refresh()
        self.summary.refresh()

    def _on_start(self) -> None:
        if not self.service.start_ride():
            ui.notify(self._t("ride_already_open"), type="warning")
        self._refresh()

    async def _on_finish(self) -> None:
        method = self.payment_toggle.value
        try:
            fare = parse_amount(self.fare_input.value, "fare")
            cash = (
                parse_amount(self.cash_input.value, "cash")
                if method == PaymentMethod.MIXED.value
                else None
            )
            ride = await self.service.finish_ride(
                PaymentMethod(method) if method else None, fare, cash
            )
        except RideValidationError as e:
            ui.notify(self._t(e.code), type="negative")
            return
        except FormValidationError as e:
            ui.notify(self._t(e.code, field=e.field), type="negative")
            return
        except OSError as e:
            await log_error(f"Не удалось сохранить поездку: {e}")
            ui.notify(str(e), type="negative")
            return

        self.dialog.close()
        if ride is not None:
            ui.notify(self._t("ride_recorded"), type="positive")
        self._refresh()
