"""进程级默认引擎与配置入口。

- `get_engine()` 返回导入时创建的默认 `LogEngine`
- `configure_engine()` 把一组配置一次性应用到引擎上
"""

from __future__ import annotations

import threading
from typing import Any, Mapping, Optional

from .engine import DEFAULT_LOG_FILE_NAME, LogEngine
from .levels import Level

# 保护默认引擎的替换
_ENGINE_LOCK = threading.Lock()

# 默认引擎在导入时创建
_ENGINE: LogEngine = LogEngine()


def get_engine(force_reload: bool = False) -> LogEngine:
    """返回全局默认引擎（单例）。

    如果 force_reload=True，会关闭旧引擎的日志文件并创建新实例。
    """

    global _ENGINE
    if not force_reload:
        return _ENGINE
    with _ENGINE_LOCK:
        _ENGINE.close_log_file()
        _ENGINE = LogEngine()
        return _ENGINE


def configure_engine(
    engine: Optional[LogEngine] = None,
    *,
    min_level: Any = Level.INFO,
    color: bool = True,
    log_dir: Optional[str] = None,
    log_file_name: str = DEFAULT_LOG_FILE_NAME,
    labels: Optional[Mapping[str, str]] = None,
    colors: Optional[Mapping[str, str]] = None,
    intercept_stdlib: bool = False,
    intercept_loguru: bool = False,
) -> LogEngine:
    """配置并返回引擎（未传入时使用默认引擎）。

    着色开关先于日志文件应用：打开文件会自动关闭着色。
    """

    if engine is None:
        engine = get_engine()

    with engine.stream_lock():
        engine.set_minimum_level(min_level)
        for level, label in (labels or {}).items():
            engine.set_log_label(level, label)
        for level, escape in (colors or {}).items():
            engine.set_log_color(level, escape)

        if color:
            engine.enable_color()
        else:
            engine.disable_color()

        if log_dir:
            engine.init_log_file(log_dir, log_file_name)

    # 延迟导入以避免循环依赖
    if intercept_stdlib:
        from .bridge import intercept_stdlib as _intercept_stdlib

        _intercept_stdlib(engine)
    if intercept_loguru:
        from .bridge import intercept_loguru as _intercept_loguru

        _intercept_loguru(engine)

    return engine


__all__ = ["get_engine", "configure_engine"]
