"""日志配置（基于 pydantic-settings）。

环境变量优先；`hueslog.config.log` 负责把配置应用到引擎。
"""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hueslog.levels import Level


class Settings(BaseSettings):
    """日志配置模型（可通过环境变量注入）。

    环境变量前缀：HUESLOG_
    例如 HUESLOG_MIN_LEVEL=DEBUG
    复合字段使用 JSON，例如 HUESLOG_LABELS='{"warn": "WARN"}'
    """

    min_level: str = "INFO"
    color: bool = True
    log_dir: Optional[str] = None
    log_file_name: str = "Log.log"
    labels: Dict[str, str] = Field(default_factory=dict)
    colors: Dict[str, str] = Field(default_factory=dict)
    intercept_stdlib: bool = False
    intercept_loguru: bool = False

    model_config = SettingsConfigDict(env_prefix="HUESLOG_")

    @field_validator("min_level")
    @classmethod
    def validate_min_level(cls, v: str) -> str:
        """验证等级名称并规范化为大写的枚举名。"""
        return Level.parse(v).name

    @field_validator("labels", "colors")
    @classmethod
    def validate_level_keys(cls, v: Dict[str, str]) -> Dict[str, str]:
        """验证键均为合法的等级名称。"""
        return {Level.parse(key).name: value for key, value in v.items()}


# module-level cached settings
_SETTINGS: Optional[Settings] = None


def get_settings(force_reload: bool = False) -> Settings:
    """返回全局 Settings 单例（按需从环境加载）。

    如果 force_reload=True，会从环境/来源重新创建实例。
    """

    global _SETTINGS
    if _SETTINGS is None or force_reload:
        _SETTINGS = Settings()
    return _SETTINGS


__all__ = ["Settings", "get_settings"]
