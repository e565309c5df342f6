"""Tests for configuration and logging setup"""

import logging

from core.config import DEFAULT_LRCLIB_URL, DEFAULT_VOLUME, load_config
from core.logging_setup import setup_logging


class TestLoadConfig:
    def test_defaults(self, temp_dir):
        config = load_config(app_data_dir=str(temp_dir), env={})

        assert config.app_data_dir == str(temp_dir)
        assert config.log_level == "INFO"
        assert config.log_file == str(temp_dir / "arkia.log")
        assert config.lrclib_url == DEFAULT_LRCLIB_URL
        assert config.volume == DEFAULT_VOLUME

    def test_environment_overrides(self, temp_dir):
        env = {
            "ARKIA_LOG_LEVEL": "debug",
            "ARKIA_LOG_FILE": str(temp_dir / "custom.log"),
            "ARKIA_LRCLIB_URL": "http://localhost:3000/",
            "ARKIA_VOLUME": "0.25",
        }
        config = load_config(app_data_dir=str(temp_dir), env=env)

        assert config.log_level == "DEBUG"
        assert config.log_file == str(temp_dir / "custom.log")
        assert config.lrclib_url == "http://localhost:3000"
        assert config.volume == 0.25

    def test_dash_disables_log_file(self, temp_dir):
        config = load_config(app_data_dir=str(temp_dir), env={"ARKIA_LOG_FILE": "-"})
        assert config.log_file is None

    def test_volume_is_clamped(self, temp_dir):
        assert load_config(app_data_dir=str(temp_dir), env={"ARKIA_VOLUME": "3"}).volume == 1.0
        assert load_config(app_data_dir=str(temp_dir), env={"ARKIA_VOLUME": "-1"}).volume == 0.0

    def test_invalid_volume_uses_default(self, temp_dir, caplog):
        with caplog.at_level(logging.WARNING):
            config = load_config(app_data_dir=str(temp_dir), env={"ARKIA_VOLUME": "loud"})
        assert config.volume == DEFAULT_VOLUME
        assert "ARKIA_VOLUME" in caplog.text


class TestSetupLogging:
    def _own_handlers(self, root):
        return [h for h in root.handlers if getattr(h, "_arkia", False)]

    def test_writes_to_log_file_and_is_idempotent(self, temp_dir):
        config = load_config(app_data_dir=str(temp_dir), env={"ARKIA_LOG_LEVEL": "DEBUG"})
        root = setup_logging(config)
        try:
            setup_logging(config)
            assert len(self._own_handlers(root)) == 2

            logging.getLogger("arkia.test").info("hello from test")
            for h in self._own_handlers(root):
                h.flush()

            assert "hello from test" in (temp_dir / "arkia.log").read_text(encoding="utf-8")
        finally:
            for h in self._own_handlers(root):
                root.removeHandler(h)
                h.close()
            root.setLevel(logging.WARNING)
