"""宫殿画布组件 — SVG 渲染 + Python 侧命中测试。"""

from __future__ import annotations

import base64
from typing import Callable

from nicegui import events, ui

from mind_palace.controller import PalaceController
from mind_palace.layout.geometry import Hit, get_canvas_size
from mind_palace.render.svg import render_palace_svg


class PalaceCanvas:
    """把宫殿画成一张可点击的图；点击坐标交给 controller.click 解析。"""

    def __init__(self, controller: PalaceController,
                 on_select: Callable[[Hit | None], None]):
        self._controller = controller
        self._on_select = on_select
        self._container: ui.element | None = None

    def create(self, parent: ui.element) -> ui.element:
        with parent:
            self._container = ui.element("div").classes("palace-canvas").style(
                "overflow: auto; padding: 24px;"
            )
        self.refresh()
        return self._container

    def refresh(self):
        """宫殿尺寸可能变化，整体重建图片元素。"""
        if self._container is None:
            return
        palace = self._controller.palace
        self._container.clear()
        if palace is None:
            return
        selected = self._controller.selection
        svg = render_palace_svg(
            palace, selected_object_id=selected.object_id if selected else None,
        )
        width, height = get_canvas_size(palace.rooms)
        source = "data:image/svg+xml;base64," + base64.b64encode(svg.encode("utf-8")).decode("ascii")
        with self._container:
            # image_x / image_y 是图片自身像素坐标，与 SVG 画布坐标一致
            ui.interactive_image(
                source,
                on_mouse=self._handle_mouse,
                events=["click"],
            ).style(f"width: {int(width)}px; height: {int(height)}px;")

    def _handle_mouse(self, e: events.MouseEventArguments):
        hit = self._controller.click(e.image_x, e.image_y)
        self._on_select(hit)
