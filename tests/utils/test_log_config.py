"""로그 설정 테스트"""

import logging

import pytest

from lyricdeck.utils import log_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("LYRICDECK_LOG_LEVEL", raising=False)
    monkeypatch.delenv("LYRICDECK_DEBUG", raising=False)


class TestResolveLevel:

    def test_default(self):
        assert log_config.resolve_level() == logging.INFO
        assert log_config.resolve_level(logging.WARNING) == logging.WARNING

    @pytest.mark.parametrize("value, expected", [
        ("debug", logging.DEBUG),
        (" Warning ", logging.WARNING),
        ("15", 15),
        ("nonsense", logging.INFO),
    ])
    def test_level_env(self, monkeypatch, value, expected):
        monkeypatch.setenv("LYRICDECK_LOG_LEVEL", value)

        assert log_config.resolve_level() == expected

    @pytest.mark.parametrize("value, expected", [
        ("1", logging.DEBUG),
        ("yes", logging.DEBUG),
        ("0", logging.INFO),
    ])
    def test_debug_flag(self, monkeypatch, value, expected):
        monkeypatch.setenv("LYRICDECK_DEBUG", value)

        assert log_config.resolve_level() == expected

    def test_level_env_wins_over_debug_flag(self, monkeypatch):
        monkeypatch.setenv("LYRICDECK_LOG_LEVEL", "ERROR")
        monkeypatch.setenv("LYRICDECK_DEBUG", "1")

        assert log_config.resolve_level() == logging.ERROR


class TestConfigureRoot:

    def test_sets_root_level(self, monkeypatch):
        root = logging.getLogger()
        original = root.level
        monkeypatch.setenv("LYRICDECK_LOG_LEVEL", "WARNING")
        try:
            assert log_config.configure_root() == logging.WARNING
            assert root.level == logging.WARNING
        finally:
            root.setLevel(original)
