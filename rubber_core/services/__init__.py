# =============================================================================
# rubber_core/services/__init__.py
# Service Layer for the Rubber Stock core
# Separates sync/reconciliation logic from UI presentation
# =============================================================================
"""
Service Layer

Every public operation returns a ServiceResult; nothing here raises on a
failed request. Callers branch on the result:

Usage Example:
-------------
    from rubber_core.services import create_services
    from rubber_core.models import Ingredient

    colors, formulas = create_services()

    result = colors.load_colors()          # reconciled with the saved order
    if not result:
        print(result.error_code, result.error)

    found = formulas.get_formula("Negro")
    if found.not_found:
        ...
    formulas.add_ingredient("Negro", Ingredient("Espumante", 650, "gr"))
"""

from typing import Optional, Tuple

import requests

from rubber_core.api import APIConfigManager
from rubber_core.config import Settings, load_settings
from rubber_core.storage import LocalDatabase

from .base_service import BaseService, ServiceResult
from .order_store import ColorOrderStore, reconcile_order, COLOR_ORDER_KEY
from .color_service import ColorService
from .ingredient_editor import IngredientEditor, validate_ingredient
from .formula_service import FormulaService

__all__ = [
    # Base classes
    "BaseService",
    "ServiceResult",
    # Ordering
    "ColorOrderStore",
    "reconcile_order",
    "COLOR_ORDER_KEY",
    # Resource services
    "ColorService",
    "FormulaService",
    "IngredientEditor",
    "validate_ingredient",
    # Convenience
    "create_services",
]


def create_services(
    settings: Optional[Settings] = None,
    session: Optional[requests.Session] = None,
    db: Optional[LocalDatabase] = None,
) -> Tuple[ColorService, FormulaService]:
    """
    Wire connectors, local store and services from configuration.

    Args:
        settings: Resolved settings (secrets/env/defaults if None)
        session: Optional shared requests session
        db: Optional local database (one at settings.db_path if None)

    Returns:
        Tuple of (ColorService, FormulaService)
    """
    settings = settings or load_settings()
    manager = APIConfigManager(settings, session=session)
    db = db or LocalDatabase(settings.db_path)

    color_service = ColorService(manager.get_stock_connector(), ColorOrderStore(db))
    formula_service = FormulaService(manager.get_formula_connector())
    return color_service, formula_service
