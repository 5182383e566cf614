"""对象格式化器：把任意值转换为可输出的字符串。"""

from __future__ import annotations

import abc
from typing import Any, Callable, Dict


class ObjectFormatter(abc.ABC):
    """格式化器接口（抽象基类）。

    最小合同：
    - render(value) -> str
    - 实现不得抛出异常；无法转换的值应退化为低保真的文本表示。
    """

    @abc.abstractmethod
    def render(self, value: Any) -> str:
        """返回 value 的字符串表示。"""


def _type_name(value: Any) -> str:
    cls = type(value)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def _is_streamable(value: Any) -> bool:
    # 自定义了 __str__ 或 __repr__ 的类型视为可直接转文本
    cls = type(value)
    return cls.__str__ is not object.__str__ or cls.__repr__ is not object.__repr__


class DefaultFormatter(ObjectFormatter):
    """默认格式化器。

    查找顺序：
    1. str 原样输出；bytes 类字符缓冲区按 UTF-8 解码（视为文本而不是地址）
    2. 通过 `register` 为该类型（或其 MRO 中的基类）注册的渲染函数
    3. 类型自身定义的 `__str__` / `__repr__`
    4. 回退为 ``"<类型名> at 0x<id>"``
    """

    def __init__(self) -> None:
        self._renderers: Dict[type, Callable[[Any], str]] = {}

    def register(self, cls: type, renderer: Callable[[Any], str]) -> None:
        # 注册时确保传入的是类型，避免意外把实例当作键
        if not isinstance(cls, type):
            raise TypeError("renderer key must be a type")
        self._renderers[cls] = renderer

    def fallback(self, value: Any) -> str:
        return f"{_type_name(value)} at 0x{id(value):x}"

    def render(self, value: Any) -> str:
        if isinstance(value, str):
            return value
        if isinstance(value, (bytes, bytearray, memoryview)):
            return bytes(value).decode("utf-8", errors="replace")

        for klass in type(value).__mro__:
            renderer = self._renderers.get(klass)
            if renderer is None:
                continue
            try:
                return str(renderer(value))
            except Exception:
                return self.fallback(value)

        if not _is_streamable(value):
            return self.fallback(value)
        try:
            return str(value)
        except Exception:
            # 转换失败时退化为类型名 + 标识
            return self.fallback(value)


__all__ = ["ObjectFormatter", "DefaultFormatter"]
