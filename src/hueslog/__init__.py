"""hueslog：带等级、着色与命名计时器的极简进程级日志工具。

特性：
- 等级过滤（DEBUG ~ FATAL）与无条件输出
- 控制台着色，日志文件自动去色
- 线程安全、可重入的流锁
- 命名计时器，支持 ns/us/ms/s/h 截断
- 可选的标准库 logging / loguru 拦截

模块级函数转发到 `get_engine()` 返回的默认引擎。
"""

from typing import Any, Optional

from .engine import DEFAULT_LOG_FILE_NAME, LogEngine
from .formatter import DefaultFormatter, ObjectFormatter
from .levels import RESET_COLOR, Level, LevelRegistry, LevelStyle
from .logger import configure_engine, get_engine
from .timers import INVALID_DURATION, TimeUnit


def log(level: Any, *values: Any) -> None:
    get_engine().log(level, *values)


def debug(*values: Any) -> None:
    get_engine().debug(*values)


def info(*values: Any) -> None:
    get_engine().info(*values)


def warn(*values: Any) -> None:
    get_engine().warn(*values)


def error(*values: Any) -> None:
    get_engine().error(*values)


def critical(*values: Any) -> None:
    get_engine().critical(*values)


def fatal(*values: Any) -> None:
    get_engine().fatal(*values)


def out(*values: Any) -> None:
    get_engine().out(*values)


def set_minimum_level(level: Any) -> Level:
    return get_engine().set_minimum_level(level)


def set_log_label(level: Any, label: str) -> None:
    get_engine().set_log_label(level, label)


def set_log_color(level: Any, escape: str) -> None:
    get_engine().set_log_color(level, escape)


def enable_color() -> None:
    get_engine().enable_color()


def disable_color() -> None:
    get_engine().disable_color()


def set_out_stream(stream: Any) -> None:
    get_engine().set_out_stream(stream)


def init_log_file(directory: str, filename: str = DEFAULT_LOG_FILE_NAME) -> Optional[str]:
    return get_engine().init_log_file(directory, filename)


def close_log_file() -> None:
    get_engine().close_log_file()


def start_timer(label: str) -> str:
    return get_engine().start_timer(label)


def end_timer(label: str, unit: TimeUnit = TimeUnit.MILLISECONDS) -> int:
    return get_engine().end_timer(label, unit)


def get_timer(label: str, unit: TimeUnit = TimeUnit.MILLISECONDS) -> int:
    return get_engine().get_timer(label, unit)


def log_duration(label: str, unit: TimeUnit = TimeUnit.MILLISECONDS, **kwargs: Any) -> int:
    return get_engine().log_duration(label, unit, **kwargs)


def log_duration_persistent(
    label: str, unit: TimeUnit = TimeUnit.MILLISECONDS, **kwargs: Any
) -> int:
    return get_engine().log_duration_persistent(label, unit, **kwargs)


__all__ = [
    "DEFAULT_LOG_FILE_NAME",
    "INVALID_DURATION",
    "RESET_COLOR",
    "DefaultFormatter",
    "Level",
    "LevelRegistry",
    "LevelStyle",
    "LogEngine",
    "ObjectFormatter",
    "TimeUnit",
    "configure_engine",
    "get_engine",
    "log",
    "debug",
    "info",
    "warn",
    "error",
    "critical",
    "fatal",
    "out",
    "set_minimum_level",
    "set_log_label",
    "set_log_color",
    "enable_color",
    "disable_color",
    "set_out_stream",
    "init_log_file",
    "close_log_file",
    "start_timer",
    "end_timer",
    "get_timer",
    "log_duration",
    "log_duration_persistent",
]
