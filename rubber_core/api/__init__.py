"""
Remote API Module
Connectors for the rubber stock / formulas REST API
"""

from .base_connector import BaseAPIConnector, APIConfig
from .stock_connector import StockConnector
from .formula_connector import FormulaConnector
from .config_manager import APIConfigManager

__all__ = [
    # Base classes
    "BaseAPIConnector",
    "APIConfig",
    "APIConfigManager",

    # Resource connectors
    "StockConnector",
    "FormulaConnector",
]
