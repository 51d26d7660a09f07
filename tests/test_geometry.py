from __future__ import annotations

import math

from mind_palace.layout.constants import (
    CANVAS_PADDING, DEFAULT_LAYOUT, GUTTER, OBJ_RADIUS, ROOM_HEIGHT, ROOM_WIDTH, LayoutConfig,
)
from mind_palace.layout.geometry import (
    Hit,
    get_canvas_size,
    hit_test_object,
    hit_test_room,
    object_to_pixel,
    pick,
    room_center,
    room_to_pixel,
    rooms_are_connected,
)
from mind_palace.palace.types import GridPosition, PalaceObject, RelativePosition, Room


def _room(x: int, y: int, room_id: str = "r1", connections: list[str] | None = None,
          objects: list[PalaceObject] | None = None) -> Room:
    return Room(
        id=room_id,
        name="Test Room",
        grid_position=GridPosition(x, y),
        connections=connections or [],
        objects=objects or [],
    )


def _obj(rx: float, ry: float, obj_id: str = "o1") -> PalaceObject:
    return PalaceObject(id=obj_id, name="Test Obj", relative_position=RelativePosition(rx, ry))


def test_room_to_pixel_origin_is_canvas_padding() -> None:
    assert room_to_pixel(_room(0, 0)) == (CANVAS_PADDING, CANVAS_PADDING)


def test_room_to_pixel_stride_per_grid_step() -> None:
    for gx in (-3, 0, 1, 7):
        for gy in (-1, 0, 2):
            x0, y0 = room_to_pixel(_room(gx, gy))
            x1, _ = room_to_pixel(_room(gx + 1, gy))
            _, y1 = room_to_pixel(_room(gx, gy + 1))
            assert x1 - x0 == ROOM_WIDTH + GUTTER
            assert y1 - y0 == ROOM_HEIGHT + GUTTER


def test_room_to_pixel_accepts_negative_grid() -> None:
    assert room_to_pixel(_room(-1, 0)).x == CANVAS_PADDING - ROOM_WIDTH - GUTTER


def test_object_to_pixel_center_matches_room_center() -> None:
    room = _room(2, 1)
    x, y = room_to_pixel(room)
    assert object_to_pixel(room, _obj(0.5, 0.5)) == (x + ROOM_WIDTH / 2, y + ROOM_HEIGHT / 2)
    assert object_to_pixel(room, _obj(0.5, 0.5)) == room_center(room)


def test_object_to_pixel_corners_stay_inside_room() -> None:
    room = _room(1, 1)
    x, y = room_to_pixel(room)
    assert object_to_pixel(room, _obj(0.0, 0.0)) == (x, y)
    assert object_to_pixel(room, _obj(1.0, 1.0)) == (x + ROOM_WIDTH, y + ROOM_HEIGHT)


def test_hit_test_object_center_and_radius() -> None:
    room = _room(0, 0)
    obj = _obj(0.5, 0.5)
    cx, cy = object_to_pixel(room, obj)
    assert hit_test_object(cx, cy, room, obj)
    assert hit_test_object(cx + OBJ_RADIUS - 1, cy, room, obj)
    assert not hit_test_object(cx + OBJ_RADIUS + 2, cy, room, obj)
    assert not hit_test_object(cx, cy - OBJ_RADIUS - 1.5, room, obj)


def test_hit_test_object_boundary_is_inclusive() -> None:
    room = _room(0, 0)
    obj = _obj(0.25, 0.75)
    cx, cy = object_to_pixel(room, obj)
    assert hit_test_object(cx, cy + OBJ_RADIUS, room, obj)
    d = OBJ_RADIUS / math.sqrt(2)
    assert hit_test_object(cx + d * 0.999, cy + d * 0.999, room, obj)


def test_hit_test_room_inside_and_outside() -> None:
    room = _room(0, 0)
    assert hit_test_room(CANVAS_PADDING + 10, CANVAS_PADDING + 10, room)
    assert not hit_test_room(0, 0, room)


def test_hit_test_room_edges_are_inclusive() -> None:
    room = _room(1, 0)
    x, y = room_to_pixel(room)
    assert hit_test_room(x, y, room)
    assert hit_test_room(x + ROOM_WIDTH, y + ROOM_HEIGHT, room)
    assert not hit_test_room(x + ROOM_WIDTH + 0.5, y, room)
    assert not hit_test_room(x - GUTTER / 2, y + 10, room)


def test_canvas_size_empty_is_single_room_minimum() -> None:
    width, height = get_canvas_size([])
    assert width > 0 and height > 0
    assert (width, height) == (CANVAS_PADDING * 2 + ROOM_WIDTH, CANVAS_PADDING * 2 + ROOM_HEIGHT)


def test_canvas_size_single_room_equals_minimum() -> None:
    assert get_canvas_size([_room(0, 0)]) == get_canvas_size([])


def test_canvas_size_two_rooms_side_by_side() -> None:
    width, height = get_canvas_size([_room(0, 0, "a"), _room(1, 0, "b")])
    assert width == CANVAS_PADDING * 2 + ROOM_WIDTH * 2 + GUTTER
    assert height == CANVAS_PADDING * 2 + ROOM_HEIGHT


def test_canvas_size_sparse_grid_reserves_full_extent() -> None:
    width, height = get_canvas_size([_room(0, 0, "a"), _room(2, 3, "b")])
    assert width == CANVAS_PADDING * 2 + 3 * ROOM_WIDTH + 2 * GUTTER
    assert height == CANVAS_PADDING * 2 + 4 * ROOM_HEIGHT + 3 * GUTTER


def test_canvas_size_negative_grid_clamped_to_minimum() -> None:
    assert get_canvas_size([_room(-2, -1)]) == get_canvas_size([])


def test_rooms_are_connected_all_truth_combinations() -> None:
    a = _room(0, 0, "a", connections=["b"])
    b = _room(1, 0, "b")
    assert rooms_are_connected(a, b)
    assert rooms_are_connected(b, a)

    a = _room(0, 0, "a")
    b = _room(1, 0, "b", connections=["a"])
    assert rooms_are_connected(a, b)

    a = _room(0, 0, "a")
    b = _room(1, 0, "b")
    assert not rooms_are_connected(a, b)


def test_pick_prefers_object_over_room() -> None:
    obj = _obj(0.5, 0.5, "o1")
    room = _room(0, 0, "a", objects=[obj])
    cx, cy = object_to_pixel(room, obj)
    assert pick(cx, cy, [room]) == Hit("a", "o1")
    assert pick(cx + 30, cy, [room]) == Hit("a")
    assert pick(0, 0, [room]) is None


def test_pick_checks_all_objects_before_any_room() -> None:
    # 相对坐标越界，物件圆点落进了右侧房间 b 的矩形里
    edge_obj = _obj(1.25, 0.5, "edge")
    a = _room(0, 0, "a", objects=[edge_obj])
    b = _room(1, 0, "b")
    cx, cy = object_to_pixel(a, edge_obj)
    assert hit_test_room(cx, cy, b)
    hit = pick(cx, cy, [b, a])
    assert hit is not None and hit.is_object
    assert hit.room_id == "a"


def test_layout_config_is_injectable() -> None:
    tiny = LayoutConfig(room_width=10, room_height=10, gutter=0, canvas_padding=0)
    assert room_to_pixel(_room(3, 2), tiny) == (30, 20)
    assert get_canvas_size([_room(1, 1)], tiny) == (20, 20)
    assert DEFAULT_LAYOUT.stride_x == ROOM_WIDTH + GUTTER
