"""
API Configuration Manager
Centralized creation of connector instances from resolved settings
"""
from typing import Any, Dict, Optional

import requests

from rubber_core.config import Settings, load_settings

from .base_connector import BaseAPIConnector, APIConfig
from .stock_connector import StockConnector
from .formula_connector import FormulaConnector


class APIConfigManager:
    """
    Builds configured connectors.

    Usage:
        config_manager = APIConfigManager()
        stock = config_manager.get_stock_connector()
        colors = stock.fetch_all()
    """

    # Registry of available connectors
    CONNECTORS = {
        "stock": StockConnector,
        "formulas": FormulaConnector,
    }

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        """
        Args:
            settings: Resolved settings (loaded from secrets/env if None)
            session: Shared requests session; each connector gets its own if None
        """
        self.settings = settings or load_settings()
        self.session = session

    def _build_config(self, resource: str, overrides: Dict[str, Any]) -> APIConfig:
        return APIConfig(
            api_name=f"rubber_{resource}",
            base_url=overrides.get("base_url", self.settings.base_url),
            api_key=overrides.get("api_key", self.settings.api_key),
            headers=overrides.get("headers"),
            timeout=overrides.get("timeout", self.settings.timeout),
        )

    def get_connector(self, resource: str, **overrides) -> BaseAPIConnector:
        connector_class = self.CONNECTORS.get(resource)
        if not connector_class:
            raise ValueError(f"Unknown connector: {resource}")
        return connector_class(self._build_config(resource, overrides), session=self.session)

    def get_stock_connector(self, **overrides) -> StockConnector:
        return self.get_connector("stock", **overrides)

    def get_formula_connector(self, **overrides) -> FormulaConnector:
        return self.get_connector("formulas", **overrides)
