"""日志配置适配器。

本模块负责把 `Settings` 中的字段映射为 `hueslog.logger.configure_engine` 可接受的参数，
并提供 `apply_logging_from_settings` 做一次性或幂等的配置调用。
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

from hueslog.config.settings import Settings, get_settings

if TYPE_CHECKING:  # pragma: no cover - 仅用于类型检查的导入
    from hueslog.engine import LogEngine


def map_settings_to_engine_kwargs(settings: Settings) -> Dict[str, Any]:
    """把 Settings 映射为传给 configure_engine 的关键字参数字典。"""
    return {
        "min_level": settings.min_level,
        "color": settings.color,
        "log_dir": settings.log_dir,
        "log_file_name": settings.log_file_name,
        "labels": dict(settings.labels),
        "colors": dict(settings.colors),
        "intercept_stdlib": settings.intercept_stdlib,
        "intercept_loguru": settings.intercept_loguru,
    }


def apply_logging_from_settings(
    settings: Optional[Settings] = None, engine: Optional["LogEngine"] = None
) -> "LogEngine":
    """从 settings 加载并应用日志配置。

    如果未传入 settings，会使用 `get_settings()` 获取单例；
    未传入 engine 时配置默认引擎。
    """
    if settings is None:
        settings = get_settings()

    kwargs = map_settings_to_engine_kwargs(settings)

    # 延迟导入日志模块以避免循环依赖
    from hueslog.logger import configure_engine

    return configure_engine(engine, **kwargs)


__all__ = ["map_settings_to_engine_kwargs", "apply_logging_from_settings"]
