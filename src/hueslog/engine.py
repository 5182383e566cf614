"""日志引擎：等级过滤、流锁与输出编排。

一个 `LogEngine` 实例持有全部可变状态（最低等级、当前等级、样式注册表、
输出目标、计时器），因此测试可以构造彼此隔离的实例。所有共享状态都在同一把
可重入锁内访问：计时器缺失时的报错会在持锁状态下再次进入日志调用。

设计约束：
- 日志、计时器与 Sink 路径上不向调用方抛出异常
- 配置失败与计时器缺失都转换为 ERROR 级别的日志行
"""

from __future__ import annotations

import os
import threading
from contextlib import contextmanager
from typing import IO, Any, Callable, Iterator, Optional, Sequence

from .formatter import DefaultFormatter, ObjectFormatter
from .levels import RESET_COLOR, Level, LevelRegistry
from .sink import Sink
from .timers import INVALID_DURATION, TimerRegistry, TimeUnit

DEFAULT_LOG_FILE_NAME = "Log.log"


class LogEngine:
    """进程级日志状态机。"""

    def __init__(
        self,
        *,
        min_level: Any = Level.INFO,
        target: Optional[IO[str]] = None,
        color: bool = True,
        formatter: Optional[ObjectFormatter] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self._lock = threading.RLock()
        self._min_level = Level.parse(min_level)
        self._current_level = Level.INFO
        self._levels = LevelRegistry()
        self._sink = Sink(target, color=color)
        self._formatter: ObjectFormatter = formatter or DefaultFormatter()
        self._timers = TimerRegistry(clock)

    # ------------------------------------------------------------------
    # 状态访问
    # ------------------------------------------------------------------
    @property
    def minimum_level(self) -> Level:
        return self._min_level

    @property
    def current_level(self) -> Level:
        return self._current_level

    @property
    def levels(self) -> LevelRegistry:
        return self._levels

    @property
    def sink(self) -> Sink:
        return self._sink

    @property
    def formatter(self) -> ObjectFormatter:
        return self._formatter

    @property
    def timers(self) -> TimerRegistry:
        return self._timers

    @property
    def color_enabled(self) -> bool:
        return self._sink.color_enabled

    @contextmanager
    def stream_lock(self) -> Iterator["LogEngine"]:
        """持有流锁，把多次调用组合为一段不被其他线程打断的输出。"""
        with self._lock:
            yield self

    # ------------------------------------------------------------------
    # 核心输出
    # ------------------------------------------------------------------
    def is_enabled_for(self, level: Level) -> bool:
        return level is Level.ALWAYS or level >= self._min_level

    def get_label(self, level: Optional[Any] = None) -> str:
        lv = self._current_level if level is None else Level.parse(level)
        return self._levels.get_label(lv)

    def get_color(self, level: Optional[Any] = None) -> str:
        """返回等级颜色；着色关闭时返回空字符串。"""
        if not self._sink.color_enabled:
            return ""
        lv = self._current_level if level is None else Level.parse(level)
        return self._levels.get_color(lv)

    def _print_without_label(self, text: str) -> None:
        if self._sink.color_enabled:
            self._sink.write_colored(text, self.get_color(), RESET_COLOR)
        else:
            self._sink.write(text)

    def _print(self, text: str) -> None:
        decoration = f"[{self.get_label()}] "
        if self._sink.color_enabled:
            self._sink.write_colored(decoration, self.get_color(), RESET_COLOR)
        else:
            self._sink.write(decoration)
        self._print_without_label(text)

    def _emit(self, level: Level, with_label: bool, values: Sequence[Any]) -> None:
        with self._lock:
            if level < self._min_level and level is not Level.ALWAYS:
                return
            if not values:
                return

            self._current_level = level
            first, rest = values[0], values[1:]
            if with_label:
                self._print(self._formatter.render(first))
            else:
                self._print_without_label(self._formatter.render(first))
            # 只有第一个值可以带标签
            for value in rest:
                self._print_without_label(self._formatter.render(value))
            self._sink.flush()

    def log(self, level: Any, *values: Any) -> None:
        """以指定等级输出（带标签）。

        非法的 level 在加锁和输出之前抛出 ValueError。
        """
        self._emit(Level.parse(level), True, values)

    def debug(self, *values: Any) -> None:
        self._emit(Level.DEBUG, True, values)

    def info(self, *values: Any) -> None:
        self._emit(Level.INFO, True, values)

    def warn(self, *values: Any) -> None:
        self._emit(Level.WARN, True, values)

    warning = warn

    def error(self, *values: Any) -> None:
        self._emit(Level.ERROR, True, values)

    def critical(self, *values: Any) -> None:
        self._emit(Level.CRITICAL, True, values)

    def fatal(self, *values: Any) -> None:
        self._emit(Level.FATAL, True, values)

    def out(self, *values: Any) -> None:
        """无视最低等级输出，且不带标签。"""
        self._emit(Level.ALWAYS, False, values)

    # ------------------------------------------------------------------
    # 配置
    # ------------------------------------------------------------------
    def set_minimum_level(self, level: Any) -> Level:
        lv = Level.parse(level)
        with self._lock:
            self._min_level = lv
            return self._min_level

    def set_log_label(self, level: Any, label: str) -> None:
        with self._lock:
            self._levels.set_label(level, label)

    def set_log_color(self, level: Any, escape: str) -> None:
        with self._lock:
            self._levels.set_color(level, escape)

    def enable_color(self) -> None:
        with self._lock:
            self._sink.color_enabled = True

    def disable_color(self) -> None:
        with self._lock:
            self._sink.color_enabled = False

    def set_out_stream(self, stream: Optional[IO[str]]) -> None:
        """切换输出目标；传入 None 恢复到控制台。"""
        with self._lock:
            self._sink.set_target(stream)

    # ------------------------------------------------------------------
    # 日志文件
    # ------------------------------------------------------------------
    def init_log_file(
        self, directory: str, filename: str = DEFAULT_LOG_FILE_NAME
    ) -> Optional[str]:
        """在 directory 下打开日志文件并切换输出目标。

        目录不存在时递归创建。失败时输出一条 ERROR 日志并保持原目标不变。
        成功返回日志文件路径，失败返回 None。
        """
        with self._lock:
            directory = os.fspath(directory)
            if directory:
                try:
                    os.makedirs(directory, exist_ok=True)
                except OSError as exc:
                    self._report_file_error(directory, filename, exc)
                    return None

            path = os.path.join(directory, filename) if directory else filename
            try:
                handle = open(path, "w", encoding="utf-8")
            except OSError as exc:
                self._report_file_error(directory, filename, exc)
                return None

            if self._sink.file is not None:
                self.close_log_file()
            self._sink.attach_file(handle)
            return path

    def _report_file_error(self, directory: str, filename: str, exc: OSError) -> None:
        reason = exc.strerror or str(exc)
        self.error("failed to open log file '", directory, "/", filename, "': ", reason, "\n")

    def close_log_file(self) -> None:
        """关闭当前日志文件；若它是当前目标则切回控制台。不会重新开启着色。"""
        with self._lock:
            self._sink.close_file()

    # ------------------------------------------------------------------
    # 计时器
    # ------------------------------------------------------------------
    def start_timer(self, label: str) -> str:
        with self._lock:
            return self._timers.start(label)

    def end_timer(self, label: str, unit: TimeUnit = TimeUnit.MILLISECONDS) -> int:
        """移除计时器并返回经过时长；标签不存在时报错并返回 INVALID_DURATION。

        非法的 unit 在读取计时器之前抛出 ValueError，计时器保持不变。
        """
        tu = TimeUnit(unit)
        with self._lock:
            elapsed = self._timers.pop(label)
            return self._convert(label, elapsed, tu)

    def get_timer(self, label: str, unit: TimeUnit = TimeUnit.MILLISECONDS) -> int:
        """同 end_timer，但保留计时器。"""
        tu = TimeUnit(unit)
        with self._lock:
            elapsed = self._timers.peek(label)
            return self._convert(label, elapsed, tu)

    def _convert(self, label: str, elapsed: Optional[int], unit: TimeUnit) -> int:
        if elapsed is None:
            self.error("Label ", label, " not found!\n")
            return INVALID_DURATION
        return unit.truncate(elapsed)

    def log_duration(
        self,
        label: str,
        unit: TimeUnit = TimeUnit.MILLISECONDS,
        *,
        prefix: Optional[str] = None,
        suffix: Optional[str] = None,
        level: Any = Level.ALWAYS,
    ) -> int:
        """结束计时器并输出 ``<prefix><时长><suffix>``，返回时长。"""
        tu, lv = TimeUnit(unit), Level.parse(level)
        with self._lock:
            duration = self.end_timer(label, tu)
            self._log_duration_line(label, duration, tu, prefix, suffix, lv)
            return duration

    def log_duration_persistent(
        self,
        label: str,
        unit: TimeUnit = TimeUnit.MILLISECONDS,
        *,
        prefix: Optional[str] = None,
        suffix: Optional[str] = None,
        level: Any = Level.ALWAYS,
    ) -> int:
        """读取计时器（不移除）并输出时长，返回时长。"""
        tu, lv = TimeUnit(unit), Level.parse(level)
        with self._lock:
            duration = self.get_timer(label, tu)
            self._log_duration_line(label, duration, tu, prefix, suffix, lv)
            return duration

    def _log_duration_line(
        self,
        label: str,
        duration: int,
        unit: TimeUnit,
        prefix: Optional[str],
        suffix: Optional[str],
        level: Level,
    ) -> None:
        # 缺失已由查询本身报告，这里只是不再输出
        if duration == INVALID_DURATION:
            return
        if prefix is None:
            prefix = f"{label}: "
        if suffix is None:
            suffix = f"{unit.value}\n"
        self._emit(level, level is not Level.ALWAYS, (prefix, duration, suffix))


__all__ = ["LogEngine", "DEFAULT_LOG_FILE_NAME"]
