"""命名计时器注册表。

标签 -> 单调时钟起点（纳秒）。注册表本身不加锁，也不负责报告缺失的标签；
这两件事由 `LogEngine` 完成。
"""

from __future__ import annotations

import time
from enum import Enum
from typing import Callable, Dict, Optional

# 查询不存在的标签时返回的哨兵值（与请求的单位无关）
INVALID_DURATION = -1


class TimeUnit(str, Enum):
    """时长截断单位，值即为输出时使用的单位后缀。"""

    NANOSECONDS = "ns"
    MICROSECONDS = "us"
    MILLISECONDS = "ms"
    SECONDS = "s"
    HOURS = "h"

    @property
    def nanoseconds(self) -> int:
        return _NS_PER_UNIT[self]

    def truncate(self, elapsed_ns: int) -> int:
        """按整数除法截断（不四舍五入）。"""
        return elapsed_ns // self.nanoseconds


_NS_PER_UNIT: Dict[TimeUnit, int] = {
    TimeUnit.NANOSECONDS: 1,
    TimeUnit.MICROSECONDS: 1_000,
    TimeUnit.MILLISECONDS: 1_000_000,
    TimeUnit.SECONDS: 1_000_000_000,
    TimeUnit.HOURS: 3_600_000_000_000,
}


class TimerRegistry:
    """标签到起始时刻的映射。

    重复 start 同一标签会静默覆盖；pop 会移除条目，peek 不会。
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None) -> None:
        self._clock: Callable[[], int] = clock or time.perf_counter_ns
        self._starts: Dict[str, int] = {}

    def start(self, label: str) -> str:
        self._starts[label] = self._clock()
        return label

    def pop(self, label: str) -> Optional[int]:
        """移除标签并返回经过的纳秒数；标签不存在时返回 None。"""
        now = self._clock()
        start = self._starts.pop(label, None)
        if start is None:
            return None
        return max(now - start, 0)

    def peek(self, label: str) -> Optional[int]:
        """返回经过的纳秒数但保留标签；标签不存在时返回 None。"""
        now = self._clock()
        start = self._starts.get(label)
        if start is None:
            return None
        return max(now - start, 0)

    def __contains__(self, label: object) -> bool:
        return label in self._starts

    def __len__(self) -> int:
        return len(self._starts)

    def labels(self) -> list[str]:
        return list(self._starts)

    def clear(self) -> None:
        self._starts.clear()


__all__ = ["INVALID_DURATION", "TimeUnit", "TimerRegistry"]
