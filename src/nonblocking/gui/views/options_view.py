"""Settings panel built from AppConfig field metadata."""

from __future__ import annotations

from typing import Any

from nicegui import ui

from nonblocking.core.utils.logging import get_logger
from nonblocking.gui.app_config import AppConfig

logger = get_logger(__name__)


class OptionsView:
    """Edit app config values in place and save them to disk.

    Values are validated by AppConfig.set_attribute() on every change. They
    take effect for pages opened after the change.
    """

    def __init__(self, app_config: AppConfig) -> None:
        self._app_config = app_config

    def render(self) -> None:
        with ui.expansion("Settings").classes("w-full"):
            ui.label("Changes apply to newly opened pages.").classes("text-sm text-gray-500")
            for field_name in self._app_config.field_names():
                metadata = self._app_config.get_field_metadata(field_name)
                label = metadata.get("label", field_name.replace("_", " ").title())
                with ui.row().classes("w-full items-center gap-4"):
                    ui.label(label).classes("min-w-40 text-sm")
                    self._create_widget(field_name, metadata, self._app_config.get_attribute(field_name))
            ui.button("Save", on_click=self._on_save).props("dense")

    def _create_widget(self, field_name: str, metadata: dict[str, Any], current_value: Any) -> ui.element:
        widget_type = metadata.get("widget_type", "number")

        if widget_type == "select":
            return ui.select(
                options=list(metadata.get("options", [])),
                value=current_value,
                on_change=lambda e, fn=field_name: self._on_value_change(fn, e.value),
            )

        if widget_type != "number":
            logger.warning(f"Unknown widget_type '{widget_type}' for field '{field_name}', using number")
        return ui.number(
            value=current_value,
            min=metadata.get("min"),
            max=metadata.get("max"),
            step=metadata.get("step", 1),
            on_change=lambda e, fn=field_name: self._on_value_change(fn, e.value),
        )

    def _on_value_change(self, field_name: str, new_value: Any) -> None:
        try:
            self._app_config.set_attribute(field_name, new_value)
        except (AttributeError, ValueError) as e:
            logger.error(f"Failed to update app config '{field_name}': {e}")
            ui.notify(f"Invalid value for {field_name}: {e}", type="negative")

    def _on_save(self) -> None:
        try:
            self._app_config.save()
        except OSError as e:
            logger.error(f"Failed to save app config: {e}")
            ui.notify(f"Could not save settings: {e}", type="negative")
            return
        ui.notify("Settings saved", type="positive")
