"""侧栏 — 查看物件并编辑记忆笔记。"""

from __future__ import annotations

from typing import Callable

from nicegui import ui

from mind_palace.palace.types import PalaceObject, Room
from mind_palace.gui.theme import INK_DIM, PAGE_MID


class MemorySidebar:
    """选中物件时显示；保存时回调 on_save(memory)。"""

    def __init__(self, on_save: Callable[[str], None], on_close: Callable[[], None]):
        self._on_save = on_save
        self._on_close = on_close
        self._container: ui.element | None = None

    def create(self, parent: ui.element) -> ui.element:
        with parent:
            self._container = ui.column().style(
                f"width: 300px; min-width: 300px; padding: 16px; gap: 12px; "
                f"background: {PAGE_MID}; border-left: 1px solid rgba(90,74,58,0.3);"
            )
            self._container.set_visibility(False)
        return self._container

    def show(self, room: Room | None, obj: PalaceObject | None):
        if self._container is None:
            return
        self._container.clear()
        if room is None or obj is None:
            self._container.set_visibility(False)
            return

        with self._container:
            with ui.row().classes("w-full items-start justify-between no-wrap"):
                with ui.column().style("gap: 2px;"):
                    ui.label(room.name.upper()).style(
                        f"color: {INK_DIM}; font-size: 11px; letter-spacing: 1px;"
                    )
                    ui.label(obj.name).classes("palace-title").style("font-size: 16px;")
                ui.icon("close", size="18px").style(
                    f"color: {INK_DIM}; cursor: pointer;"
                ).on("click", lambda: self._on_close())

            ui.label(obj.description).style("font-size: 13px; font-style: italic;")

            ui.label("MEMORY NOTE").style(
                f"color: {INK_DIM}; font-size: 11px; letter-spacing: 1px;"
            )
            memory_input = ui.textarea(
                value=obj.memory,
                placeholder="What do you want to remember here? Visualize it vividly...",
            ).props("outlined autogrow").classes("w-full")

            ui.button(
                "SAVE",
                on_click=lambda: self._on_save(memory_input.value or ""),
            ).props("flat no-caps").classes("w-full").style(
                "color: var(--page); background: var(--ember); letter-spacing: 1px;"
            )
        self._container.set_visibility(True)
