"""宫殿持久化 — 单个 JSON 文件，整体读写，后写覆盖先写。"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from mind_palace.palace.types import Palace

logger = logging.getLogger(__name__)

DATA_DIR = Path(os.environ.get("MIND_PALACE_DATA", "data"))
PALACE_PATH = DATA_DIR / "palace.json"


class PalaceStoreError(Exception):
    """读写宫殿文件失败。"""


class PalaceStore:
    """data/palace.json 的读写封装。"""

    def __init__(self, path: str | Path | None = None):
        self._path = Path(path) if path else PALACE_PATH

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Palace | None:
        """读取宫殿。文件不存在或内容为 {} 时返回 None（表示还没有宫殿）。"""
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise PalaceStoreError(f"读取宫殿失败: {e}") from e
        if not isinstance(data, dict):
            raise PalaceStoreError("宫殿文件格式错误：顶层不是 JSON 对象")
        if not data:
            return None
        try:
            return Palace.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise PalaceStoreError(f"宫殿文件格式错误: {e}") from e

    def save(self, palace: Palace):
        """整体写入宫殿文件。"""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(palace.to_dict(), ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
        except OSError as e:
            raise PalaceStoreError(f"写入宫殿失败: {e}") from e
        logger.info("宫殿已保存: %s（%d 个房间）", self._path, len(palace.rooms))
