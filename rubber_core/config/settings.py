# =============================================================================
# rubber_core/config/settings.py
# Runtime settings: Streamlit secrets -> environment -> defaults
# =============================================================================

from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import streamlit as st

from rubber_core.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api-rubber-hono.onrender.com"
DEFAULT_TIMEOUT = 30
DEFAULT_DB_PATH = Path(__file__).parent.parent.parent / "local_data" / "rubber_stock.db"

# Environment variable -> setting name
ENV_VARS = {
    "RUBBER_API_URL": "base_url",
    "RUBBER_API_KEY": "api_key",
    "RUBBER_API_TIMEOUT": "timeout",
    "RUBBER_DB_PATH": "db_path",
    "RUBBER_LOG_LEVEL": "log_level",
}


@dataclass
class Settings:
    """Resolved runtime configuration."""
    base_url: str = DEFAULT_API_URL
    api_key: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    db_path: Path = DEFAULT_DB_PATH
    log_level: str = "INFO"

    @property
    def log_level_value(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO


def _load_from_secrets() -> Dict[str, Any]:
    """
    Read the [api] and [storage] tables of .streamlit/secrets.toml.

    Expected secrets.toml format:
        [api]
        base_url = "https://api-rubber-hono.onrender.com"
        timeout = 30

        [storage]
        db_path = "local_data/rubber_stock.db"
    """
    values: Dict[str, Any] = {}
    try:
        if "api" in st.secrets:
            values.update(dict(st.secrets["api"]))
        if "storage" in st.secrets:
            values.update(dict(st.secrets["storage"]))
    except Exception as e:
        # No secrets file outside a Streamlit deployment
        logger.debug(f"Streamlit secrets not available: {e}")
    return values


def _load_from_env() -> Dict[str, Any]:
    return {
        setting: os.environ[var]
        for var, setting in ENV_VARS.items()
        if os.environ.get(var)
    }


def load_settings(**overrides) -> Settings:
    """
    Resolve settings. Priority: overrides > secrets > environment > defaults.

    Raises:
        ConfigurationError: if the base URL or timeout is unusable
    """
    merged: Dict[str, Any] = {}
    merged.update(_load_from_env())
    merged.update(_load_from_secrets())
    merged.update({k: v for k, v in overrides.items() if v is not None})

    base_url = str(merged.get("base_url", DEFAULT_API_URL)).strip().rstrip("/")
    if not base_url.startswith(("http://", "https://")):
        raise ConfigurationError(
            f"Invalid API base URL: {base_url!r}",
            config_key="base_url",
            expected_type="http(s) URL",
        )

    try:
        timeout = float(merged.get("timeout", DEFAULT_TIMEOUT))
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"Invalid API timeout: {merged.get('timeout')!r}",
            config_key="timeout",
            expected_type="number",
        )
    if timeout <= 0:
        raise ConfigurationError(
            f"API timeout must be positive, got {timeout}",
            config_key="timeout",
            expected_type="positive number",
        )

    return Settings(
        base_url=base_url,
        api_key=merged.get("api_key"),
        timeout=timeout,
        db_path=Path(merged.get("db_path", DEFAULT_DB_PATH)),
        log_level=str(merged.get("log_level", "INFO")),
    )
