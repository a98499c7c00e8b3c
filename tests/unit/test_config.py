# =============================================================================
# tests/unit/test_config.py
# Unit Tests for settings resolution and connector wiring
# =============================================================================

import logging
from pathlib import Path

import pytest

from rubber_core.api import APIConfigManager, FormulaConnector, StockConnector
from rubber_core.config import DEFAULT_API_URL, load_settings
from rubber_core.errors import ConfigurationError
from rubber_core.services import ColorService, FormulaService, create_services


@pytest.fixture
def clean_env(monkeypatch):
    for var in ("RUBBER_API_URL", "RUBBER_API_KEY", "RUBBER_API_TIMEOUT", "RUBBER_DB_PATH", "RUBBER_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


class TestLoadSettings:

    def test_defaults(self, mock_streamlit, clean_env):
        settings = load_settings()

        assert settings.base_url == DEFAULT_API_URL
        assert settings.timeout == 30
        assert settings.api_key is None

    def test_environment(self, mock_streamlit, clean_env):
        clean_env.setenv("RUBBER_API_URL", "http://localhost:8787/")
        clean_env.setenv("RUBBER_API_TIMEOUT", "5")
        clean_env.setenv("RUBBER_DB_PATH", "/tmp/x.db")

        settings = load_settings()

        assert settings.base_url == "http://localhost:8787"
        assert settings.timeout == 5.0
        assert settings.db_path == Path("/tmp/x.db")

    def test_secrets_override_environment(self, mock_streamlit, clean_env):
        clean_env.setenv("RUBBER_API_URL", "http://env.example")
        mock_streamlit.secrets = {"api": {"base_url": "https://secrets.example", "timeout": 10}}

        settings = load_settings()

        assert settings.base_url == "https://secrets.example"
        assert settings.timeout == 10

    def test_explicit_overrides_win(self, mock_streamlit, clean_env):
        mock_streamlit.secrets = {"api": {"base_url": "https://secrets.example"}}

        assert load_settings(base_url="https://override.example").base_url == "https://override.example"

    @pytest.mark.parametrize("overrides", [
        {"base_url": "ftp://nope"},
        {"base_url": "not a url"},
        {"timeout": "soon"},
        {"timeout": 0},
    ])
    def test_invalid_settings_raise(self, mock_streamlit, clean_env, overrides):
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(**overrides)

        assert exc_info.value.recoverable is False

    def test_log_level_value(self, mock_streamlit, clean_env):
        assert load_settings(log_level="debug").log_level_value == logging.DEBUG
        assert load_settings(log_level="chatty").log_level_value == logging.INFO


class TestWiring:

    def test_config_manager_builds_connectors(self, mock_streamlit, clean_env):
        manager = APIConfigManager(load_settings(base_url="http://api.test", api_key="secret"))

        stock = manager.get_stock_connector()
        formulas = manager.get_formula_connector(timeout=3)

        assert isinstance(stock, StockConnector)
        assert isinstance(formulas, FormulaConnector)
        assert stock.collection_url() == "http://api.test/stock"
        assert formulas.config.timeout == 3
        assert stock.session.headers["Authorization"] == "Bearer secret"

    def test_unknown_connector(self, mock_streamlit, clean_env):
        with pytest.raises(ValueError):
            APIConfigManager(load_settings()).get_connector("colors")

    def test_create_services(self, mock_streamlit, clean_env, tmp_path, server):
        settings = load_settings(base_url=server.base_url, db_path=str(tmp_path / "s.db"))

        colors, formulas = create_services(settings, session=server)

        assert isinstance(colors, ColorService)
        assert isinstance(formulas, FormulaService)
        assert colors.load_colors().success
        assert colors.order_store.db.db_path == tmp_path / "s.db"
