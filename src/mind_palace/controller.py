"""PalaceController — 宫殿操作控制层，供 GUI / CLI 共用。"""

from __future__ import annotations

import asyncio
import logging
import os

from dotenv import load_dotenv

from mind_palace.engine.room_generator import RoomGenerationError, RoomGenerator
from mind_palace.layout.geometry import Hit, pick
from mind_palace.models import DEFAULT_PROVIDER, PROVIDERS
from mind_palace.palace.store import PalaceStore
from mind_palace.palace.types import Palace, PalaceObject, Room

load_dotenv()

logger = logging.getLogger(__name__)


class PalaceController:
    """持有当前会话的宫殿（单用户），负责生成、注释、设置和点击解析。"""

    def __init__(self, store: PalaceStore | None = None,
                 generator: RoomGenerator | None = None,
                 provider: str | None = None):
        self._store = store or PalaceStore()
        self._generator = generator
        self._provider = (
            generator.provider if generator
            else provider or os.environ.get("MIND_PALACE_PROVIDER", DEFAULT_PROVIDER)
        )
        self._palace: Palace | None = None
        self._selected: Hit | None = None

    @property
    def palace(self) -> Palace | None:
        return self._palace

    @property
    def provider(self) -> str:
        return self._provider

    def load(self) -> Palace | None:
        self._palace = self._store.load()
        self._selected = None
        return self._palace

    def create_palace(self, topic: str) -> Palace:
        topic = topic.strip()
        if not topic:
            raise ValueError("主题不能为空")
        self._palace = Palace(topic=topic)
        self._selected = None
        self._store.save(self._palace)
        logger.info("新建宫殿: %s", topic)
        return self._palace

    def _require_palace(self) -> Palace:
        if self._palace is None:
            raise RuntimeError("还没有宫殿，请先创建")
        return self._palace

    def _get_generator(self) -> RoomGenerator:
        if self._generator is None or self._generator.provider != self._provider:
            self._generator = RoomGenerator(provider=self._provider)
        return self._generator

    def generate_room(self) -> Room:
        """生成新房间、追加到宫殿并保存。"""
        palace = self._require_palace()
        room = self._get_generator().generate(palace.topic, palace.rooms)
        try:
            palace.add_room(room)
        except ValueError as e:
            raise RoomGenerationError(str(e)) from e
        self._store.save(palace)
        return room

    async def generate_room_async(self) -> Room:
        """在线程池里跑阻塞的 LLM 调用，避免卡住 UI 事件循环。"""
        return await asyncio.to_thread(self.generate_room)

    def save_memory(self, room_id: str, object_id: str, memory: str) -> PalaceObject:
        palace = self._require_palace()
        obj = palace.set_memory(room_id, object_id, memory)
        self._store.save(palace)
        return obj

    def update_settings(self, topic: str | None = None, provider: str | None = None):
        """修改主题（会保存）和 provider（仅本次会话）。"""
        if provider is not None:
            if provider not in PROVIDERS:
                raise ValueError(f"未知的 provider: {provider}")
            self._provider = provider
        if topic is not None and self._palace is not None:
            topic = topic.strip()
            if topic and topic != self._palace.topic:
                self._palace.topic = topic
                self._store.save(self._palace)

    # ── 选择 / 点击 ──

    def click(self, px: float, py: float) -> Hit | None:
        """解析一次画布点击：物件优先，其次房间，否则取消选择。"""
        if self._palace is None:
            self._selected = None
            return None
        self._selected = pick(px, py, self._palace.rooms)
        return self._selected

    def deselect(self):
        self._selected = None

    @property
    def selection(self) -> Hit | None:
        return self._selected

    @property
    def selected_room(self) -> Room | None:
        if self._palace is None or self._selected is None:
            return None
        return self._palace.find_room(self._selected.room_id)

    @property
    def selected_object(self) -> PalaceObject | None:
        room = self.selected_room
        if room is None or self._selected.object_id is None:
            return None
        return room.find_object(self._selected.object_id)
