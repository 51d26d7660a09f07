"""网格 → 像素坐标变换、画布尺寸与点击命中测试。

所有函数都是纯函数：只读取参数和布局常量（``LayoutConfig``），
可被任意数量的调用方并发使用。

房间左上角像素::

    x = padding + grid.x * (room_width + gutter)
    y = padding + grid.y * (room_height + gutter)

物件像素 = 房间左上角 + 相对位置 * 房间尺寸。点击解析时物件优先于房间
（物件更小，且绘制在房间之上）。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, NamedTuple

from mind_palace.layout.constants import DEFAULT_LAYOUT, LayoutConfig
from mind_palace.palace.types import PalaceObject, Room


class Point(NamedTuple):
    x: float
    y: float


class Size(NamedTuple):
    width: float
    height: float


@dataclass(frozen=True)
class Hit:
    """一次点击命中的实体；object_id 为 None 表示命中房间本身。"""
    room_id: str
    object_id: str | None = None

    @property
    def is_object(self) -> bool:
        return self.object_id is not None


def room_to_pixel(room: Room, layout: LayoutConfig = DEFAULT_LAYOUT) -> Point:
    """房间矩形左上角的像素坐标。任意整数网格坐标均有定义（含负数）。"""
    return Point(
        layout.canvas_padding + room.grid_position.x * layout.stride_x,
        layout.canvas_padding + room.grid_position.y * layout.stride_y,
    )


def room_center(room: Room, layout: LayoutConfig = DEFAULT_LAYOUT) -> Point:
    x, y = room_to_pixel(room, layout)
    return Point(x + layout.room_width / 2, y + layout.room_height / 2)


def object_to_pixel(
    room: Room, obj: PalaceObject, layout: LayoutConfig = DEFAULT_LAYOUT,
) -> Point:
    """物件圆心的像素坐标。相对位置在 [0,1]² 内时落在房间矩形内。"""
    x, y = room_to_pixel(room, layout)
    return Point(
        x + obj.relative_position.x * layout.room_width,
        y + obj.relative_position.y * layout.room_height,
    )


def hit_test_object(
    px: float, py: float, room: Room, obj: PalaceObject,
    layout: LayoutConfig = DEFAULT_LAYOUT,
) -> bool:
    """点到物件圆心的距离 <= 半径即命中（边界算命中）。"""
    cx, cy = object_to_pixel(room, obj, layout)
    return math.hypot(px - cx, py - cy) <= layout.obj_radius


def hit_test_room(
    px: float, py: float, room: Room, layout: LayoutConfig = DEFAULT_LAYOUT,
) -> bool:
    """闭区间矩形测试，四条边都算命中。"""
    x, y = room_to_pixel(room, layout)
    return x <= px <= x + layout.room_width and y <= py <= y + layout.room_height


def get_canvas_size(
    rooms: Iterable[Room], layout: LayoutConfig = DEFAULT_LAYOUT,
) -> Size:
    """能完整容纳已占用网格范围（含留白）的画布尺寸。

    稀疏网格同样保留从 0 到 max 的完整矩形。空宫殿返回单房间的最小尺寸；
    负坐标按 0 处理，结果不会小于该最小尺寸。
    """
    rooms = list(rooms)
    pad2 = layout.canvas_padding * 2
    if not rooms:
        return Size(pad2 + layout.room_width, pad2 + layout.room_height)

    max_x = max(0, max(r.grid_position.x for r in rooms))
    max_y = max(0, max(r.grid_position.y for r in rooms))
    return Size(
        pad2 + (max_x + 1) * layout.room_width + max_x * layout.gutter,
        pad2 + (max_y + 1) * layout.room_height + max_y * layout.gutter,
    )


def rooms_are_connected(a: Room, b: Room) -> bool:
    """连接关系只记录在一侧，但语义上是双向的，所以两侧都要查。"""
    return b.id in a.connections or a.id in b.connections


def pick(
    px: float, py: float, rooms: Iterable[Room],
    layout: LayoutConfig = DEFAULT_LAYOUT,
) -> Hit | None:
    """把一次点击解析为物件、房间或空白（None）。"""
    rooms = list(rooms)
    for room in rooms:
        for obj in room.objects:
            if hit_test_object(px, py, room, obj, layout):
                return Hit(room.id, obj.id)
    for room in rooms:
        if hit_test_room(px, py, room, layout):
            return Hit(room.id)
    return None
