"""宫殿页面 — 顶栏 + 画布 + 记忆侧栏。"""

from __future__ import annotations

from nicegui import ui

from mind_palace.controller import PalaceController
from mind_palace.engine.room_generator import RoomGenerationError
from mind_palace.gui.components.dialogs import open_new_palace_dialog, open_settings_dialog
from mind_palace.gui.components.memory_sidebar import MemorySidebar
from mind_palace.gui.components.palace_canvas import PalaceCanvas
from mind_palace.gui.theme import ERROR, INK_DIM, PAGE, PAGE_MID
from mind_palace.layout.geometry import Hit
from mind_palace.palace.store import PalaceStoreError


def create_palace_page():
    """创建宫殿主页面。"""
    controller = PalaceController()
    generating = False

    ui.query("body").style(f"background: {PAGE}; margin: 0;")

    try:
        controller.load()
    except PalaceStoreError as e:
        ui.notify(f"读取宫殿失败: {e}", type="negative")

    with ui.column().style("width: 100%; height: 100vh; gap: 0;"):
        # ── 顶栏 ──
        with ui.row().classes("w-full items-center justify-between no-wrap").style(
            f"height: 56px; padding: 0 24px; background: {PAGE_MID}; "
            f"border-bottom: 1px solid rgba(90,74,58,0.3); flex-shrink: 0;"
        ):
            with ui.row().classes("items-baseline gap-2 no-wrap"):
                ui.label("⬡ MIND PALACE").classes("palace-title").style("font-size: 15px;")
                topic_label = ui.label("").classes("palace-topic").style("font-size: 13px;")

            with ui.row().classes("items-center gap-4 no-wrap"):
                ui.icon("settings", size="20px").style(
                    f"color: {INK_DIM}; cursor: pointer;"
                ).on("click", lambda: _open_settings())
                error_label = ui.label("").style(f"color: {ERROR}; font-size: 12px;")
                generate_btn = ui.button(
                    "+ GENERATE ROOM", on_click=lambda: _handle_generate(),
                ).props("flat no-caps").style(
                    "color: var(--page); background: var(--ember); "
                    "font-size: 12px; letter-spacing: 1px;"
                )

        # ── 主体 ──
        with ui.row().classes("w-full no-wrap").style("flex: 1; min-height: 0; gap: 0;") as body:
            canvas_area = ui.column().style("flex: 1; overflow: auto; min-width: 0;")
            empty_area = ui.column().classes("items-center justify-center").style(
                "flex: 1; gap: 12px;"
            )

    sidebar = MemorySidebar(
        on_save=lambda memory: _handle_save_memory(memory),
        on_close=lambda: _handle_select(None),
    )
    canvas = PalaceCanvas(controller, on_select=lambda hit: _handle_select(hit))
    canvas.create(canvas_area)
    sidebar.create(body)

    with empty_area:
        ui.label("No palace yet.").style(f"color: {INK_DIM}; font-style: italic;")
        ui.button(
            "BUILD A PALACE",
            on_click=lambda: open_new_palace_dialog(_handle_create),
        ).props("flat no-caps").style("color: var(--ember); letter-spacing: 1px;")

    def _render():
        palace = controller.palace
        topic_label.text = f"— {palace.topic}" if palace else ""
        generate_btn.set_visibility(palace is not None)
        empty_area.set_visibility(palace is None)
        canvas_area.set_visibility(palace is not None)
        canvas.refresh()
        sidebar.show(controller.selected_room, controller.selected_object)

    def _handle_select(hit: Hit | None):
        if hit is None:
            controller.deselect()
        _render()

    def _handle_create(topic: str):
        try:
            controller.create_palace(topic)
        except (ValueError, PalaceStoreError) as e:
            ui.notify(str(e), type="negative")
        _render()

    async def _handle_generate():
        nonlocal generating
        if generating or controller.palace is None:
            return
        generating = True
        error_label.text = ""
        generate_btn.disable()
        generate_btn.classes(add="animate-breathe")
        try:
            room = await controller.generate_room_async()
            ui.notify(f"新房间: {room.name}", type="positive")
        except (RoomGenerationError, PalaceStoreError) as e:
            error_label.text = "Failed to generate room. Check your API key."
            ui.notify(str(e), type="negative")
        finally:
            generating = False
            generate_btn.enable()
            generate_btn.classes(remove="animate-breathe")
        _render()

    def _handle_save_memory(memory: str):
        selected = controller.selection
        if selected is None or selected.object_id is None:
            return
        try:
            controller.save_memory(selected.room_id, selected.object_id, memory)
            ui.notify("已保存", type="positive")
        except (KeyError, PalaceStoreError) as e:
            ui.notify(str(e), type="negative")
        _render()

    def _open_settings():
        palace = controller.palace
        open_settings_dialog(
            topic=palace.topic if palace else "",
            provider=controller.provider,
            on_save=_handle_settings,
        )

    def _handle_settings(topic: str, provider: str):
        try:
            controller.update_settings(topic=topic or None, provider=provider)
        except (ValueError, PalaceStoreError) as e:
            ui.notify(str(e), type="negative")
        _render()

    _render()
