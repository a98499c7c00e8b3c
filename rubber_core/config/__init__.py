"""
Runtime configuration (Streamlit secrets, environment, defaults).
"""

from .settings import Settings, load_settings, DEFAULT_API_URL, DEFAULT_TIMEOUT, DEFAULT_DB_PATH

__all__ = ["Settings", "load_settings", "DEFAULT_API_URL", "DEFAULT_TIMEOUT", "DEFAULT_DB_PATH"]
