from __future__ import annotations

from mind_palace.layout.constants import DOOR_SIZE, ROOM_HEIGHT, ROOM_WIDTH
from mind_palace.layout.geometry import room_to_pixel
from mind_palace.layout.walls import (
    Segment,
    corridor_lines,
    doorways,
    neighbor,
    wall_segments,
)
from mind_palace.palace.types import GridPosition, Room


def _room(room_id: str, x: int, y: int, connections: list[str] | None = None) -> Room:
    return Room(id=room_id, name=room_id, grid_position=GridPosition(x, y),
                connections=connections or [])


def test_doorways_between_connected_neighbors() -> None:
    a = _room("a", 0, 0, ["b"])
    b = _room("b", 1, 0)
    rooms = [a, b]
    assert doorways(a, rooms) == {"north": False, "south": False, "west": False, "east": True}
    assert doorways(b, rooms) == {"north": False, "south": False, "west": True, "east": False}


def test_adjacent_but_unconnected_is_solid_wall() -> None:
    a = _room("a", 0, 0)
    b = _room("b", 0, 1)
    assert neighbor(a, [a, b], "south") is b
    assert not any(doorways(a, [a, b]).values())


def test_connected_but_not_adjacent_has_no_doorway() -> None:
    a = _room("a", 0, 0, ["c"])
    c = _room("c", 2, 0)
    assert not any(doorways(a, [a, c]).values())


def test_wall_segments_solid_room_has_four_edges() -> None:
    a = _room("a", 0, 0)
    x, y = room_to_pixel(a)
    segs = wall_segments(a, [a])
    assert len(segs) == 4
    assert Segment(x, y, x + ROOM_WIDTH, y) in segs
    assert Segment(x + ROOM_WIDTH, y, x + ROOM_WIDTH, y + ROOM_HEIGHT) in segs


def test_wall_segments_doorway_leaves_centered_gap() -> None:
    a = _room("a", 0, 0, ["b"])
    b = _room("b", 1, 0)
    x, y = room_to_pixel(a)
    segs = wall_segments(a, [a, b])
    assert len(segs) == 5

    east = [s for s in segs if s.x1 == s.x2 == x + ROOM_WIDTH]
    assert len(east) == 2
    top, bottom = sorted(east, key=lambda s: s.y1)
    mid = y + ROOM_HEIGHT / 2
    assert top == Segment(x + ROOM_WIDTH, y, x + ROOM_WIDTH, mid - DOOR_SIZE / 2)
    assert bottom == Segment(x + ROOM_WIDTH, mid + DOOR_SIZE / 2, x + ROOM_WIDTH, y + ROOM_HEIGHT)
    assert bottom.y1 - top.y2 == DOOR_SIZE


def test_horizontal_doorway_gap() -> None:
    a = _room("a", 0, 0)
    b = _room("b", 0, 1, ["a"])
    bx, by = room_to_pixel(b)
    north = [s for s in wall_segments(b, [a, b]) if s.y1 == s.y2 == by]
    assert len(north) == 2
    left, right = sorted(north, key=lambda s: s.x1)
    assert right.x1 - left.x2 == DOOR_SIZE
    assert left.x1 == bx and right.x2 == bx + ROOM_WIDTH


def test_corridor_lines_dedupe_and_skip_unknown() -> None:
    a = _room("a", 0, 0, ["b"])
    b = _room("b", 1, 0, ["a", "ghost"])
    lines = corridor_lines([a, b])
    assert len(lines) == 1
    ax, ay = room_to_pixel(a)
    bx, by = room_to_pixel(b)
    assert lines[0] == Segment(ax + ROOM_WIDTH, ay + ROOM_HEIGHT / 2, bx, by + ROOM_HEIGHT / 2)


def test_corridor_lines_vertical_and_non_adjacent() -> None:
    a = _room("a", 0, 0)
    b = _room("b", 0, 1, ["a", "far"])
    far = _room("far", 3, 3)
    lines = corridor_lines([a, b, far])
    ax, ay = room_to_pixel(a)
    bx, by = room_to_pixel(b)
    assert lines == [Segment(bx + ROOM_WIDTH / 2, by, ax + ROOM_WIDTH / 2, ay + ROOM_HEIGHT)]
