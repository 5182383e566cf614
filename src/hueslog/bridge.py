"""把其他日志前端（标准库 logging、loguru）重定向到 `LogEngine`。

引擎仍然是唯一的输出目标：这里只做拦截和转发，不做多路分发。
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from loguru import logger as _loguru_logger

from .engine import LogEngine
from .levels import Level

_STDLIB_LEVELS = (
    (logging.CRITICAL, Level.CRITICAL),
    (logging.ERROR, Level.ERROR),
    (logging.WARNING, Level.WARN),
    (logging.INFO, Level.INFO),
)

_LOGURU_LEVELS: Dict[str, Level] = {
    "TRACE": Level.DEBUG,
    "DEBUG": Level.DEBUG,
    "INFO": Level.INFO,
    "SUCCESS": Level.INFO,
    "WARNING": Level.WARN,
    "ERROR": Level.ERROR,
    "CRITICAL": Level.CRITICAL,
}


def level_from_stdlib(levelno: int) -> Level:
    """把标准库数值等级映射为最接近且不高于它的 `Level`。"""
    for threshold, level in _STDLIB_LEVELS:
        if levelno >= threshold:
            return level
    return Level.DEBUG


def level_from_loguru(name: str) -> Level:
    # 自定义的 loguru 等级统一按 INFO 处理
    return _LOGURU_LEVELS.get(name.upper(), Level.INFO)


class InterceptHandler(logging.Handler):
    """标准库 logging 处理器：把记录转发给引擎。"""

    def __init__(self, engine: LogEngine, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.engine = engine

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = record.getMessage()
        except Exception:
            self.handleError(record)
            return
        self.engine.log(level_from_stdlib(record.levelno), message, "\n")


def intercept_stdlib(engine: LogEngine) -> InterceptHandler:
    """把 InterceptHandler 设为 root logger 的唯一处理器。"""
    handler = InterceptHandler(engine)
    logging.root.handlers = [handler]
    logging.root.setLevel(0)
    return handler


def loguru_sink(engine: LogEngine) -> Callable[[Any], None]:
    """返回可传给 ``loguru.logger.add`` 的可调用 sink。"""

    def _sink(message: Any) -> None:
        record = message.record
        engine.log(level_from_loguru(record["level"].name), record["message"], "\n")

    return _sink


def intercept_loguru(engine: LogEngine) -> int:
    """移除 loguru 现有处理器并安装转发 sink，返回处理器 id。"""
    _loguru_logger.remove()
    return _loguru_logger.add(loguru_sink(engine), level="TRACE", format="{message}")


__all__ = [
    "InterceptHandler",
    "intercept_stdlib",
    "intercept_loguru",
    "loguru_sink",
    "level_from_stdlib",
    "level_from_loguru",
]
