"""宫殿 SVG 渲染 — 走廊线、带门洞的墙、房间名、物件圆点。"""

from __future__ import annotations

from xml.sax.saxutils import escape

from mind_palace.gui.theme import (
    INK, INK_DIM, PAGE, WALL, WALL_SOFT, OBJ_ANNOTATED, OBJ_EMPTY, OBJ_SELECTED,
)
from mind_palace.layout.constants import DEFAULT_LAYOUT, LayoutConfig
from mind_palace.layout.geometry import get_canvas_size, object_to_pixel, room_to_pixel
from mind_palace.layout.walls import Segment, corridor_lines, wall_segments
from mind_palace.palace.types import Palace, PalaceObject, Room

_NAME_OFFSET = 18  # 房间名基线距顶墙
_LABEL_GAP = 11    # 物件名距圆点底部


def _num(v: float) -> str:
    return f"{v:g}"


def _line(seg: Segment, stroke: str, width: float, extra: str = "") -> str:
    return (
        f'<line x1="{_num(seg.x1)}" y1="{_num(seg.y1)}" '
        f'x2="{_num(seg.x2)}" y2="{_num(seg.y2)}" '
        f'stroke="{stroke}" stroke-width="{width}" stroke-linecap="round"{extra}/>'
    )


def _object_fill(obj: PalaceObject, selected_object_id: str | None) -> str:
    if obj.id == selected_object_id:
        return OBJ_SELECTED
    return OBJ_ANNOTATED if obj.memory else OBJ_EMPTY


def _render_room(room: Room, rooms: list[Room], selected_object_id: str | None,
                 layout: LayoutConfig) -> list[str]:
    x, y = room_to_pixel(room, layout)
    parts = [
        f'<g class="room" data-room-id="{escape(room.id)}">',
        f'<rect x="{_num(x)}" y="{_num(y)}" width="{_num(layout.room_width)}" '
        f'height="{_num(layout.room_height)}" fill="{PAGE}" stroke="none"/>',
    ]
    parts.extend(_line(seg, WALL, 2) for seg in wall_segments(room, rooms, layout))
    parts.append(
        f'<text x="{_num(x + layout.room_width / 2)}" y="{_num(y + _NAME_OFFSET)}" '
        f'text-anchor="middle" fill="{INK}" font-size="12" font-weight="700" '
        f'font-family="Georgia, serif">{escape(room.name)}</text>'
    )
    for obj in room.objects:
        cx, cy = object_to_pixel(room, obj, layout)
        selected = obj.id == selected_object_id
        stroke = OBJ_SELECTED if selected else WALL
        parts.append(
            f'<circle class="object" data-object-id="{escape(obj.id)}" '
            f'cx="{_num(cx)}" cy="{_num(cy)}" r="{_num(layout.obj_radius)}" '
            f'fill="{_object_fill(obj, selected_object_id)}" stroke="{stroke}" stroke-width="1.5"/>'
        )
        parts.append(
            f'<text x="{_num(cx)}" y="{_num(cy + layout.obj_radius + _LABEL_GAP)}" '
            f'text-anchor="middle" fill="{INK_DIM}" font-size="9" '
            f'font-family="monospace">{escape(obj.name)}</text>'
        )
    parts.append("</g>")
    return parts


def render_palace_svg(palace: Palace, selected_object_id: str | None = None,
                      layout: LayoutConfig = DEFAULT_LAYOUT) -> str:
    """渲染整座宫殿为独立 SVG 字符串，尺寸由 get_canvas_size 决定。"""
    width, height = get_canvas_size(palace.rooms, layout)
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{_num(width)}" '
        f'height="{_num(height)}" viewBox="0 0 {_num(width)} {_num(height)}">'
    ]
    # 走廊线画在房间下面
    parts.extend(
        _line(seg, WALL_SOFT, 1, ' class="corridor"')
        for seg in corridor_lines(palace.rooms, layout)
    )
    for room in palace.rooms:
        parts.extend(_render_room(room, palace.rooms, selected_object_id, layout))
    parts.append("</svg>")
    return "\n".join(parts)
