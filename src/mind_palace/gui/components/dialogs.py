"""新建宫殿 / 设置 对话框。"""

from __future__ import annotations

from typing import Callable

from nicegui import ui

from mind_palace.models import PROVIDERS


def open_new_palace_dialog(on_create: Callable[[str], None]):
    """输入主题并新建宫殿。"""
    with ui.dialog() as dialog, ui.card().style("min-width: 360px;"):
        ui.label("NEW PALACE").classes("palace-title")
        topic_input = ui.input(
            label="主题",
            placeholder="e.g. Ancient Rome, Organic Chemistry...",
        ).classes("w-full")

        def _submit():
            topic = (topic_input.value or "").strip()
            if not topic:
                ui.notify("请输入主题", type="warning")
                return
            dialog.close()
            on_create(topic)

        topic_input.on("keydown.enter", _submit)
        with ui.row().classes("w-full justify-end"):
            ui.button("CANCEL", on_click=dialog.close).props("flat no-caps")
            ui.button("BUILD", on_click=_submit).props("flat no-caps").style(
                "color: var(--ember);"
            )
    dialog.open()


def open_settings_dialog(topic: str, provider: str,
                         on_save: Callable[[str, str], None]):
    """修改主题和 LLM provider。"""
    with ui.dialog() as dialog, ui.card().style("min-width: 360px;"):
        ui.label("SETTINGS").classes("palace-title")
        topic_input = ui.input(label="主题", value=topic).classes("w-full")
        provider_select = ui.select(
            options=list(PROVIDERS), value=provider, label="LLM provider",
        ).classes("w-full")

        def _submit():
            dialog.close()
            on_save((topic_input.value or "").strip(), provider_select.value)

        with ui.row().classes("w-full justify-end"):
            ui.button("CANCEL", on_click=dialog.close).props("flat no-caps")
            ui.button("SAVE", on_click=_submit).props("flat no-caps").style(
                "color: var(--ember);"
            )
    dialog.open()
