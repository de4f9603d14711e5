"""
Tests for config.py module.
Covers: all config values, type correctness, defaults, and env overrides.
"""

import importlib
import os
from pathlib import Path
from unittest.mock import patch

import pytest


def _reload_config(env):
    with patch("dotenv.load_dotenv"):
        with patch.dict(os.environ, env, clear=True):
            import config
            importlib.reload(config)
            return config


@pytest.fixture(autouse=True)
def restore_config():
    yield
    import config
    importlib.reload(config)


class TestConfigDefaults:
    def test_default_symbol(self):
        assert _reload_config({}).DEFAULT_SYMBOL == "_"

    def test_comment_marker(self):
        assert _reload_config({}).COMMENT_MARKER == "#"

    def test_exploration_limits(self):
        config = _reload_config({})
        assert config.MAX_STEPS == 1000
        assert config.MAX_DEPTH == 3

    def test_window_padding(self):
        assert _reload_config({}).WINDOW_PADDING == 2

    def test_log_level(self):
        assert _reload_config({}).LOG_LEVEL == "INFO"


class TestConfigOverrides:
    def test_symbols_from_env(self):
        config = _reload_config({"TM_DEFAULT_SYMBOL": "B", "TM_COMMENT_MARKER": ";"})
        assert config.DEFAULT_SYMBOL == "B"
        assert config.COMMENT_MARKER == ";"

    def test_limits_from_env(self):
        config = _reload_config({"TM_MAX_STEPS": "50", "TM_MAX_DEPTH": "7"})
        assert config.MAX_STEPS == 50
        assert config.MAX_DEPTH == 7

    def test_invalid_int_raises(self):
        with pytest.raises(ValueError):
            _reload_config({"TM_MAX_STEPS": "lots"})


class TestConfigPaths:
    def test_project_root_is_path(self):
        import config
        assert isinstance(config.PROJECT_ROOT, Path)

    def test_project_root_contains_config(self):
        import config
        assert (config.PROJECT_ROOT / "config.py").exists()
