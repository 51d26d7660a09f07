from __future__ import annotations

import pytest

from mind_palace.palace.types import (
    GridPosition,
    Palace,
    PalaceObject,
    RelativePosition,
    Room,
    generate_id,
)


def _room(room_id: str, x: int, y: int, connections: list[str] | None = None) -> Room:
    return Room(
        id=room_id,
        name=f"Room {room_id}",
        grid_position=GridPosition(x, y),
        connections=connections or [],
        objects=[PalaceObject(id=f"{room_id}-o1", name="Lamp",
                              relative_position=RelativePosition(0.3, 0.6))],
    )


def test_generate_id_non_empty_and_unique() -> None:
    ids = [generate_id() for _ in range(1000)]
    assert all(isinstance(i, str) and i for i in ids)
    assert len(set(ids)) == len(ids)


def test_palace_to_dict_uses_wire_keys() -> None:
    palace = Palace(topic="Ancient Rome", rooms=[_room("a", 0, 0)])
    data = palace.to_dict()
    assert data["topic"] == "Ancient Rome"
    room = data["rooms"][0]
    assert room["gridPosition"] == {"x": 0, "y": 0}
    assert room["connections"] == []
    assert room["objects"][0]["relativePosition"] == {"x": 0.3, "y": 0.6}
    assert room["objects"][0]["memory"] == ""


def test_palace_from_dict_tolerates_missing_optional_fields() -> None:
    palace = Palace.from_dict({"topic": "Chemistry"})
    assert palace.rooms == []

    palace = Palace.from_dict({
        "topic": "Chemistry",
        "rooms": [{
            "id": "r1", "name": "Lab",
            "gridPosition": {"x": 2, "y": 1},
            "objects": [{"id": "o1", "name": "Flask", "relativePosition": {"x": 0.5, "y": 0.5}}],
        }],
    })
    room = palace.rooms[0]
    assert room.grid_position == GridPosition(2, 1)
    assert room.connections == []
    assert room.objects[0].memory == ""
    assert Palace.from_dict(palace.to_dict()) == palace


def test_set_memory_updates_only_target_object() -> None:
    palace = Palace(topic="t", rooms=[_room("a", 0, 0), _room("b", 1, 0, ["a"])])
    obj = palace.set_memory("b", "b-o1", "Caesar crossed the Rubicon")
    assert obj.memory == "Caesar crossed the Rubicon"
    assert palace.find_object("a", "a-o1").memory == ""
    assert palace.annotated_count() == 1


def test_set_memory_unknown_ids_raise() -> None:
    palace = Palace(topic="t", rooms=[_room("a", 0, 0)])
    with pytest.raises(KeyError):
        palace.set_memory("a", "missing", "x")
    with pytest.raises(KeyError):
        palace.set_memory("missing", "a-o1", "x")


def test_add_room_rejects_occupied_cell() -> None:
    palace = Palace(topic="t", rooms=[_room("a", 0, 0)])
    with pytest.raises(ValueError):
        palace.add_room(_room("b", 0, 0))
    assert len(palace.rooms) == 1


def test_add_room_drops_unknown_connections() -> None:
    palace = Palace(topic="t", rooms=[_room("a", 0, 0)])
    room = palace.add_room(_room("b", 1, 0, ["a", "ghost", "a"]))
    assert room.connections == ["a"]
    assert [r.id for r in palace.rooms] == ["a", "b"]


def test_add_room_shifts_negative_grid() -> None:
    palace = Palace(topic="t", rooms=[_room("a", 0, 0)])
    palace.add_room(_room("b", -1, 0, ["a"]))
    palace.add_room(_room("c", 0, -1, ["a"]))
    positions = {r.id: (r.grid_position.x, r.grid_position.y) for r in palace.rooms}
    assert positions == {"a": (1, 1), "b": (0, 1), "c": (0, 0)}
