"""日志等级与等级样式注册表。

- `Level`：按严重程度排序的等级枚举，`ALWAYS` 为不参与过滤的哨兵等级
- `LevelStyle`：单个等级的显示标签与 ANSI 颜色转义序列
- `LevelRegistry`：运行时可修改的等级 -> 样式映射
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict, Union

from pydantic import BaseModel

RESET_COLOR = "\x1b[0m"


class Level(IntEnum):
    """日志等级。

    前六个等级按严重程度全序排列；`ALWAYS` 只是“无条件输出”的标记，
    过滤时不与最低等级比较。
    """

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    CRITICAL = 4
    FATAL = 5
    ALWAYS = 6

    @classmethod
    def parse(cls, value: Union["Level", int, str]) -> "Level":
        """把等级对象、整数或名称（不区分大小写）转换为 `Level`。"""
        if isinstance(value, Level):
            return value
        if isinstance(value, int):
            return cls(value)
        name = str(value).strip().upper()
        name = _LEVEL_ALIASES.get(name, name)
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"unknown log level: {value!r}") from None


_LEVEL_ALIASES: Dict[str, str] = {
    "WARNING": "WARN",
    "LOG": "ALWAYS",
    "OUT": "ALWAYS",
}


class LevelStyle(BaseModel):
    """单个等级的显示样式。字符串不做校验，由调用方负责。"""

    label: str
    color: str


_DEFAULT_STYLES: Dict[Level, LevelStyle] = {
    Level.DEBUG: LevelStyle(label="DEBUG", color="\x1b[36m"),  # 浅蓝
    Level.INFO: LevelStyle(label="INFO", color="\x1b[32m"),  # 绿
    Level.WARN: LevelStyle(label="WARNING", color="\x1b[33m"),  # 黄
    Level.ERROR: LevelStyle(label="ERROR", color="\x1b[31m"),  # 红
    Level.CRITICAL: LevelStyle(label="CRITICAL", color="\x1b[1;31m"),  # 粗体红
    Level.FATAL: LevelStyle(label="FATAL", color="\x1b[4;1;31m"),  # 粗体下划线红
    Level.ALWAYS: LevelStyle(label="OUT", color="\x1b[34m"),  # 蓝
}


class LevelRegistry:
    """等级样式注册表。

    本身不加锁；由 `LogEngine` 在流锁内读写。
    """

    def __init__(self) -> None:
        self._styles: Dict[Level, LevelStyle] = dict(_DEFAULT_STYLES)

    def set_label(self, level: Any, text: str) -> None:
        lv = Level.parse(level)
        self._styles[lv] = self._styles[lv].model_copy(update={"label": text})

    def set_color(self, level: Any, escape: str) -> None:
        lv = Level.parse(level)
        self._styles[lv] = self._styles[lv].model_copy(update={"color": escape})

    def get_label(self, level: Any) -> str:
        return self._styles[Level.parse(level)].label

    def get_color(self, level: Any) -> str:
        return self._styles[Level.parse(level)].color

    def styles(self) -> Dict[Level, LevelStyle]:
        """返回当前样式的快照。"""
        return dict(self._styles)

    def reset(self) -> None:
        """恢复默认标签与颜色。"""
        self._styles = dict(_DEFAULT_STYLES)


__all__ = ["Level", "LevelStyle", "LevelRegistry", "RESET_COLOR"]
