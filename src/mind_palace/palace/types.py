"""宫殿数据模型 — Palace / Room / PalaceObject 及其 JSON 序列化。"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field


def generate_id() -> str:
    """生成进程内唯一 id：毫秒时间戳 + 随机部分，不依赖全局计数器。"""
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}"


@dataclass
class GridPosition:
    x: int = 0
    y: int = 0

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> GridPosition:
        return cls(x=int(data.get("x", 0)), y=int(data.get("y", 0)))


@dataclass
class RelativePosition:
    """房间内的相对位置，0.0–1.0（不做范围校验）。"""
    x: float = 0.5
    y: float = 0.5

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> RelativePosition:
        return cls(x=float(data.get("x", 0.5)), y=float(data.get("y", 0.5)))


@dataclass
class PalaceObject:
    id: str
    name: str
    description: str = ""
    relative_position: RelativePosition = field(default_factory=RelativePosition)
    memory: str = ""  # 空字符串 = 尚未记录

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "relativePosition": self.relative_position.to_dict(),
            "memory": self.memory,
        }

    @classmethod
    def from_dict(cls, data: dict) -> PalaceObject:
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            description=str(data.get("description", "")),
            relative_position=RelativePosition.from_dict(data.get("relativePosition") or {}),
            memory=str(data.get("memory") or ""),
        )


@dataclass
class Room:
    id: str
    name: str
    description: str = ""
    grid_position: GridPosition = field(default_factory=GridPosition)
    connections: list[str] = field(default_factory=list)
    objects: list[PalaceObject] = field(default_factory=list)

    def find_object(self, object_id: str) -> PalaceObject | None:
        for obj in self.objects:
            if obj.id == object_id:
                return obj
        return None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "gridPosition": self.grid_position.to_dict(),
            "connections": list(self.connections),
            "objects": [o.to_dict() for o in self.objects],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Room:
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            description=str(data.get("description", "")),
            grid_position=GridPosition.from_dict(data.get("gridPosition") or {}),
            connections=[str(c) for c in data.get("connections") or []],
            objects=[PalaceObject.from_dict(o) for o in data.get("objects") or []],
        )


@dataclass
class Palace:
    """一座记忆宫殿：主题 + 按创建顺序排列的房间。整体作为持久化单元。"""

    topic: str
    rooms: list[Room] = field(default_factory=list)

    def find_room(self, room_id: str) -> Room | None:
        for room in self.rooms:
            if room.id == room_id:
                return room
        return None

    def find_object(self, room_id: str, object_id: str) -> PalaceObject | None:
        room = self.find_room(room_id)
        return room.find_object(object_id) if room else None

    def room_at(self, x: int, y: int) -> Room | None:
        for room in self.rooms:
            if room.grid_position.x == x and room.grid_position.y == y:
                return room
        return None

    def add_room(self, room: Room) -> Room:
        """追加新房间。

        - 网格位置已被占用 → ValueError
        - connections 中指向不存在房间的 id 会被丢弃
        - 出现负坐标时整体平移，保证所有坐标 >= 0
        """
        pos = room.grid_position
        if self.room_at(pos.x, pos.y) is not None:
            raise ValueError(f"网格位置 ({pos.x}, {pos.y}) 已被占用")

        known = {r.id for r in self.rooms}
        room.connections = [c for c in dict.fromkeys(room.connections) if c in known]
        self.rooms.append(room)
        self._normalize_grid()
        return room

    def _normalize_grid(self):
        if not self.rooms:
            return
        min_x = min(r.grid_position.x for r in self.rooms)
        min_y = min(r.grid_position.y for r in self.rooms)
        shift_x = -min_x if min_x < 0 else 0
        shift_y = -min_y if min_y < 0 else 0
        if not shift_x and not shift_y:
            return
        for r in self.rooms:
            r.grid_position = GridPosition(
                x=r.grid_position.x + shift_x,
                y=r.grid_position.y + shift_y,
            )

    def set_memory(self, room_id: str, object_id: str, memory: str) -> PalaceObject:
        obj = self.find_object(room_id, object_id)
        if obj is None:
            raise KeyError(f"找不到物件 {room_id}/{object_id}")
        obj.memory = memory
        return obj

    def annotated_count(self) -> int:
        return sum(1 for r in self.rooms for o in r.objects if o.memory)

    def to_dict(self) -> dict:
        return {
            "topic": self.topic,
            "rooms": [r.to_dict() for r in self.rooms],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Palace:
        palace = cls(
            topic=str(data.get("topic", "")),
            rooms=[Room.from_dict(r) for r in data.get("rooms") or []],
        )
        # 旧文件里可能存有负坐标
        palace._normalize_grid()
        return palace
