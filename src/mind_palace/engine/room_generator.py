"""房间生成 — 调用 LLM 生成一个主题房间，并为房间和物件分配 id。"""

from __future__ import annotations

import json
import logging
import os

from google import genai
from google.genai import types

from mind_palace.models import DEFAULT_PROVIDER, MODEL_GEMINI, MODEL_OPENAI, PROVIDERS
from mind_palace.palace.types import (
    GridPosition, PalaceObject, RelativePosition, Room, generate_id,
)

logger = logging.getLogger(__name__)

_SYSTEM_INSTRUCTION = "You output ONLY valid JSON with no explanation, markdown, or code blocks."

_PROMPT = """\
Generate a room for a mind palace themed around "{topic}".
{existing}

Requirements:
- 3 to 5 vivid, memorable objects per room
- Each object should be a strong visual anchor for the loci memory method
- relativePosition x and y are 0.0–1.0 within the room (spread objects out, avoid edges)

Return ONLY valid JSON in this exact format, no explanation:
{{
  "name": "Room Name",
  "description": "Brief atmospheric description",
  "gridPosition": {{ "x": <integer>, "y": <integer> }},
  "connections": ["<existing room id>"],
  "objects": [
    {{
      "name": "Object Name",
      "description": "Vivid sensory description useful as a memory anchor",
      "relativePosition": {{ "x": <0.0-1.0>, "y": <0.0-1.0> }}
    }}
  ]
}}"""


class RoomGenerationError(Exception):
    """房间生成失败（LLM 调用失败、JSON 无效、结构不符）。"""


def build_prompt(topic: str, rooms: list[Room]) -> str:
    """构建房间生成 prompt。第一个房间固定放在 (0, 0)。"""
    if not rooms:
        existing = (
            'This is the first room. Place it at gridPosition { "x": 0, "y": 0 } '
            "with an empty connections array."
        )
    else:
        listing = "\n".join(
            f'- "{r.name}" at grid position ({r.grid_position.x}, {r.grid_position.y}) '
            f'with id "{r.id}"'
            for r in rooms
        )
        occupied = ", ".join(f"({r.grid_position.x},{r.grid_position.y})" for r in rooms)
        existing = (
            f"Existing rooms:\n{listing}\n\n"
            f"Occupied positions: {occupied}\n\n"
            "Place the new room adjacent (up/down/left/right) to an existing room at an "
            "unoccupied position. Set connections to the id(s) of directly adjacent rooms."
        )
    return _PROMPT.format(topic=topic, existing=existing)


def _strip_code_fence(raw: str) -> str:
    raw = raw.strip()
    if raw.startswith("```"):
        raw = raw.split("\n", 1)[1] if "\n" in raw else raw[3:]
        raw = raw.rsplit("```", 1)[0]
    return raw.strip()


def _require(data: dict, key: str, kind: type | tuple[type, ...], where: str):
    value = data.get(key) if isinstance(data, dict) else None
    if not isinstance(value, kind) or isinstance(value, bool):
        raise RoomGenerationError(f"{where}.{key} 缺失或类型错误")
    return value


def _require_grid_int(grid: dict, key: str) -> int:
    value = _require(grid, key, (int, float), "gridPosition")
    if isinstance(value, float) and not value.is_integer():
        raise RoomGenerationError(f"gridPosition.{key} 必须是整数")
    grid[key] = int(value)
    return grid[key]


def parse_room(text: str) -> dict:
    """解析 LLM 返回的房间 JSON 并校验结构。"""
    try:
        data = json.loads(_strip_code_fence(text or ""))
    except (json.JSONDecodeError, ValueError) as e:
        raise RoomGenerationError(f"LLM 返回的不是有效 JSON: {e}") from e
    if not isinstance(data, dict):
        raise RoomGenerationError("LLM 返回的 JSON 不是对象")

    _require(data, "name", str, "room")
    _require(data, "description", str, "room")
    grid = _require(data, "gridPosition", dict, "room")
    _require_grid_int(grid, "x")
    _require_grid_int(grid, "y")
    connections = data.get("connections") or []
    if not isinstance(connections, list) or not all(isinstance(c, str) for c in connections):
        raise RoomGenerationError("room.connections 必须是字符串数组")
    objects = _require(data, "objects", list, "room")
    for i, obj in enumerate(objects):
        where = f"objects[{i}]"
        if not isinstance(obj, dict):
            raise RoomGenerationError(f"{where} 不是对象")
        _require(obj, "name", str, where)
        rel = _require(obj, "relativePosition", dict, where)
        _require(rel, "x", (int, float), f"{where}.relativePosition")
        _require(rel, "y", (int, float), f"{where}.relativePosition")
    return data


def assign_ids(room_data: dict) -> Room:
    """为生成的房间及其物件分配新 id，memory 初始化为空字符串。"""
    grid = room_data["gridPosition"]
    return Room(
        id=generate_id(),
        name=room_data["name"],
        description=room_data.get("description", ""),
        grid_position=GridPosition(x=int(grid["x"]), y=int(grid["y"])),
        connections=list(room_data.get("connections") or []),
        objects=[
            PalaceObject(
                id=generate_id(),
                name=obj["name"],
                description=str(obj.get("description", "")),
                relative_position=RelativePosition(
                    x=float(obj["relativePosition"]["x"]),
                    y=float(obj["relativePosition"]["y"]),
                ),
                memory="",
            )
            for obj in room_data["objects"]
        ],
    )


class RoomGenerator:
    """按 provider 调用 LLM 生成房间。client 可注入（测试用）。"""

    def __init__(self, provider: str = DEFAULT_PROVIDER, client=None,
                 api_key: str | None = None):
        if provider not in PROVIDERS:
            raise RoomGenerationError(f"未知的 provider: {provider}")
        self._provider = provider
        self._client = client
        self._api_key = api_key

    @property
    def provider(self) -> str:
        return self._provider

    def _get_client(self):
        if self._client is not None:
            return self._client
        if self._provider == "openai":
            from openai import OpenAI
            self._client = OpenAI(api_key=self._api_key or os.environ.get("OPENAI_API_KEY"))
        else:
            self._client = genai.Client(api_key=self._api_key or os.environ.get("GEMINI_API_KEY"))
        return self._client

    def _call_gemini(self, prompt: str) -> str:
        response = self._get_client().models.generate_content(
            model=MODEL_GEMINI,
            contents=[types.Content(role="user", parts=[types.Part(text=prompt)])],
            config=types.GenerateContentConfig(
                system_instruction=_SYSTEM_INSTRUCTION,
                temperature=0.9,
                max_output_tokens=4096,
            ),
        )
        return response.text or ""

    def _call_openai(self, prompt: str) -> str:
        response = self._get_client().chat.completions.create(
            model=MODEL_OPENAI,
            messages=[
                {"role": "system", "content": _SYSTEM_INSTRUCTION},
                {"role": "user", "content": prompt},
            ],
            max_completion_tokens=4096,
        )
        return response.choices[0].message.content or ""

    def generate(self, topic: str, rooms: list[Room]) -> Room:
        """生成一个新房间。任何失败都抛出 RoomGenerationError，不重试。"""
        prompt = build_prompt(topic, rooms)
        try:
            if self._provider == "openai":
                text = self._call_openai(prompt)
            else:
                text = self._call_gemini(prompt)
        except Exception as e:
            logger.warning("房间生成调用失败 provider=%s: %s", self._provider, e)
            raise RoomGenerationError(f"LLM 调用失败: {e}") from e

        room = assign_ids(parse_room(text))
        logger.info(
            "生成房间「%s」@(%d, %d)，%d 个物件",
            room.name, room.grid_position.x, room.grid_position.y, len(room.objects),
        )
        return room
