"""单一输出目标（控制台或日志文件）。

Sink 不加锁；并发访问由 `LogEngine` 的流锁协调。
"""

from __future__ import annotations

import sys
from typing import IO, Optional


class Sink:
    """当前写入目标 + 是否着色。

    - target 为 None 时表示控制台，写入时才解析为当前的 ``sys.stdout``
    - 同一时刻至多一个目标生效
    - 切换到文件会关闭着色，关闭文件后不会自动恢复
    """

    def __init__(self, target: Optional[IO[str]] = None, *, color: bool = True) -> None:
        self._target: Optional[IO[str]] = target
        self._file: Optional[IO[str]] = None
        self.color_enabled: bool = color

    @property
    def target(self) -> IO[str]:
        if self._target is None:
            return sys.stdout
        return self._target

    @property
    def is_console(self) -> bool:
        return self._target is None

    @property
    def file(self) -> Optional[IO[str]]:
        return self._file

    def set_target(self, stream: Optional[IO[str]]) -> None:
        self._target = stream

    def attach_file(self, handle: IO[str]) -> None:
        """把已打开的文件设为当前目标，并关闭着色。"""
        self._file = handle
        self._target = handle
        self.color_enabled = False

    def close_file(self) -> None:
        """若文件仍是当前目标则切回控制台，然后关闭文件。没有文件时什么也不做。"""
        handle = self._file
        if handle is None:
            return
        if self._target is handle:
            self._target = None
        self._file = None
        try:
            handle.close()
        except OSError:
            pass

    def write(self, text: str) -> None:
        try:
            self.target.write(text)
        except (OSError, ValueError):
            # 目标已关闭或不可写：尽力而为，不影响调用方
            pass

    def write_colored(self, text: str, color: str, reset: str) -> None:
        self.write(f"{color}{text}{reset}")

    def flush(self) -> None:
        flush = getattr(self.target, "flush", None)
        if flush is None:
            return
        try:
            flush()
        except (OSError, ValueError):
            pass


__all__ = ["Sink"]
