"""测试 hueslog.config.log 模块。"""

import io
import os
from unittest.mock import MagicMock, patch

from hueslog.config.log import (
    apply_logging_from_settings,
    map_settings_to_engine_kwargs,
)
from hueslog.config.settings import Settings
from hueslog.engine import LogEngine
from hueslog.levels import Level


class TestMapSettingsToEngineKwargs:
    """测试 map_settings_to_engine_kwargs 函数。"""

    def test_default_settings_mapping(self):
        """测试默认 Settings 到 engine kwargs 的映射。"""
        kwargs = map_settings_to_engine_kwargs(Settings())

        assert kwargs == {
            "min_level": "INFO",
            "color": True,
            "log_dir": None,
            "log_file_name": "Log.log",
            "labels": {},
            "colors": {},
            "intercept_stdlib": False,
            "intercept_loguru": False,
        }

    def test_custom_settings_mapping(self):
        """测试自定义 Settings 到 engine kwargs 的映射。"""
        settings = Settings(
            min_level="critical",
            color=False,
            log_dir="/custom/logs",
            log_file_name="custom.log",
            labels={"debug": "D"},
            colors={"info": "<i>"},
            intercept_stdlib=True,
            intercept_loguru=True,
        )
        kwargs = map_settings_to_engine_kwargs(settings)

        assert kwargs["min_level"] == "CRITICAL"
        assert kwargs["color"] is False
        assert kwargs["log_dir"] == "/custom/logs"
        assert kwargs["log_file_name"] == "custom.log"
        assert kwargs["labels"] == {"DEBUG": "D"}
        assert kwargs["colors"] == {"INFO": "<i>"}
        assert kwargs["intercept_stdlib"] is True
        assert kwargs["intercept_loguru"] is True


class TestApplyLoggingFromSettings:
    """测试 apply_logging_from_settings 函数。"""

    @patch("hueslog.logger.configure_engine")
    def test_apply_with_default_settings(self, mock_configure):
        """测试使用默认 settings 应用日志配置。"""
        apply_logging_from_settings()

        assert mock_configure.call_count == 1
        args, kwargs = mock_configure.call_args
        assert args == (None,)
        assert kwargs["min_level"] == "INFO"
        assert kwargs["color"] is True

    @patch("hueslog.logger.configure_engine")
    @patch("hueslog.config.log.get_settings")
    def test_apply_calls_get_settings_when_none(self, mock_get_settings, mock_configure):
        """测试当 settings=None 时调用 get_settings()。"""
        mock_get_settings.return_value = MagicMock()

        apply_logging_from_settings(settings=None)

        mock_get_settings.assert_called_once()
        mock_configure.assert_called_once()

    @patch("hueslog.logger.configure_engine")
    @patch("hueslog.config.log.get_settings")
    def test_apply_does_not_call_get_settings_when_provided(
        self, mock_get_settings, mock_configure
    ):
        """测试当提供 settings 时不调用 get_settings()。"""
        apply_logging_from_settings(settings=Settings(min_level="debug"))

        mock_get_settings.assert_not_called()
        mock_configure.assert_called_once()


class TestLogConfigIntegration:
    """config.log 模块的集成测试。"""

    def test_end_to_end_flow(self):
        """测试从环境变量到引擎配置的完整流程。"""
        buf = io.StringIO()
        engine = LogEngine(target=buf)

        with patch.dict(
            os.environ,
            {
                "HUESLOG_MIN_LEVEL": "warning",
                "HUESLOG_COLOR": "false",
                "HUESLOG_LABELS": '{"warn": "W"}',
            },
        ):
            settings = Settings()
            result = apply_logging_from_settings(settings, engine)

        assert result is engine
        assert engine.minimum_level is Level.WARN

        engine.info("hidden\n")
        engine.warn("shown\n")
        assert buf.getvalue() == "[W] shown\n"

    def test_idempotent_configuration(self, tmp_path):
        """测试配置可以多次调用（幂等性）。"""
        engine = LogEngine(target=io.StringIO())
        settings = Settings(log_dir=str(tmp_path), log_file_name="app.log")

        apply_logging_from_settings(settings, engine)
        apply_logging_from_settings(settings, engine)
        apply_logging_from_settings(settings, engine)
        engine.info("once\n")
        engine.close_log_file()

        assert (tmp_path / "app.log").read_text(encoding="utf-8") == "[INFO] once\n"
