"""墙体与门洞推导 — 供渲染层使用。

一面墙上开门洞需要同时满足：相邻网格格子里有房间（邻接），并且两个房间
相互连接（``rooms_are_connected``）。只邻接不连接的房间之间是实墙。
"""

from __future__ import annotations

from typing import Iterable, NamedTuple

from mind_palace.layout.constants import DEFAULT_LAYOUT, LayoutConfig
from mind_palace.layout.geometry import room_to_pixel, rooms_are_connected
from mind_palace.palace.types import Room

SIDES = ("north", "south", "west", "east")

NEIGHBOR_OFFSETS = {
    "north": (0, -1),
    "south": (0, 1),
    "west": (-1, 0),
    "east": (1, 0),
}


class Segment(NamedTuple):
    x1: float
    y1: float
    x2: float
    y2: float


def neighbor(room: Room, rooms: Iterable[Room], side: str) -> Room | None:
    """side 方向上相邻格子里的房间（不判断是否连接）。"""
    dx, dy = NEIGHBOR_OFFSETS[side]
    tx = room.grid_position.x + dx
    ty = room.grid_position.y + dy
    for other in rooms:
        if other.id != room.id and other.grid_position.x == tx and other.grid_position.y == ty:
            return other
    return None


def doorways(room: Room, rooms: Iterable[Room]) -> dict[str, bool]:
    """四个方向上是否开门洞。"""
    rooms = list(rooms)
    result = {}
    for side in SIDES:
        other = neighbor(room, rooms, side)
        result[side] = other is not None and rooms_are_connected(room, other)
    return result


def _split(x1: float, y1: float, x2: float, y2: float, has_door: bool,
           door_size: float) -> list[Segment]:
    if not has_door:
        return [Segment(x1, y1, x2, y2)]
    half = door_size / 2
    if y1 == y2:
        mid = (x1 + x2) / 2
        return [Segment(x1, y1, mid - half, y2), Segment(mid + half, y1, x2, y2)]
    mid = (y1 + y2) / 2
    return [Segment(x1, y1, x2, mid - half), Segment(x1, mid + half, x2, y2)]


def wall_segments(
    room: Room, rooms: Iterable[Room], layout: LayoutConfig = DEFAULT_LAYOUT,
) -> list[Segment]:
    """房间四面墙的线段：实墙 1 段，有门洞的墙 2 段（中间留 door_size 空隙）。"""
    doors = doorways(room, rooms)
    x, y = room_to_pixel(room, layout)
    w, h = layout.room_width, layout.room_height
    edges = {
        "north": (x, y, x + w, y),
        "south": (x, y + h, x + w, y + h),
        "west": (x, y, x, y + h),
        "east": (x + w, y, x + w, y + h),
    }
    segments: list[Segment] = []
    for side in SIDES:
        segments.extend(_split(*edges[side], doors[side], layout.door_size))
    return segments


def corridor_lines(
    rooms: Iterable[Room], layout: LayoutConfig = DEFAULT_LAYOUT,
) -> list[Segment]:
    """相邻且连接的房间之间的走廊线（按无序 id 对去重），从一侧墙中点连到对侧墙中点。"""
    rooms = list(rooms)
    by_id = {r.id: r for r in rooms}
    w, h = layout.room_width, layout.room_height
    drawn: set[tuple[str, str]] = set()
    lines: list[Segment] = []

    for room in rooms:
        for conn_id in room.connections:
            key = tuple(sorted((room.id, conn_id)))
            if key in drawn:
                continue
            other = by_id.get(conn_id)
            if other is None:
                continue
            dx = other.grid_position.x - room.grid_position.x
            dy = other.grid_position.y - room.grid_position.y
            ax, ay = room_to_pixel(room, layout)
            bx, by = room_to_pixel(other, layout)
            if (dx, dy) == (0, 1):
                line = Segment(ax + w / 2, ay + h, bx + w / 2, by)
            elif (dx, dy) == (0, -1):
                line = Segment(ax + w / 2, ay, bx + w / 2, by + h)
            elif (dx, dy) == (1, 0):
                line = Segment(ax + w, ay + h / 2, bx, by + h / 2)
            elif (dx, dy) == (-1, 0):
                line = Segment(ax, ay + h / 2, bx + w, by + h / 2)
            else:
                # 不相邻的连接没有可画的走廊
                continue
            drawn.add(key)
            lines.append(line)
    return lines
