"""宫殿布局常量 — 像素单位，运行期不可修改。"""

from __future__ import annotations

from dataclasses import dataclass

ROOM_WIDTH = 180
ROOM_HEIGHT = 140
GUTTER = 40          # 网格上房间之间的间距
CANVAS_PADDING = 40  # 整个宫殿四周的留白
OBJ_RADIUS = 8       # 物件圆点半径
DOOR_SIZE = 30       # 墙上门洞宽度


@dataclass(frozen=True)
class LayoutConfig:
    """一组布局尺寸，几何函数通过参数注入。"""
    room_width: float = ROOM_WIDTH
    room_height: float = ROOM_HEIGHT
    gutter: float = GUTTER
    canvas_padding: float = CANVAS_PADDING
    obj_radius: float = OBJ_RADIUS
    door_size: float = DOOR_SIZE

    @property
    def stride_x(self) -> float:
        return self.room_width + self.gutter

    @property
    def stride_y(self) -> float:
        return self.room_height + self.gutter


DEFAULT_LAYOUT = LayoutConfig()
