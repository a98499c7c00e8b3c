# =============================================================================
# rubber_core/services/formula_service.py
# Formula operations for the formulas screen
# =============================================================================

from __future__ import annotations
from typing import List, Optional

from rubber_core.api import FormulaConnector
from rubber_core.errors import DomainValidationError, DuplicateNameError, handle_error
from rubber_core.models import Formula, Ingredient

from .base_service import BaseService, ServiceResult
from .ingredient_editor import IngredientEditor, validate_ingredient


class FormulaService(BaseService):
    """
    Public entry points for formulas.

    The remote API keys formulas by display name. Local ids (e.g.
    "negro-pega") are never turned back into names by re-capitalising;
    get_formula_by_id looks the name up in the last listed collection.

    Usage:
        service = FormulaService(connector)
        service.list_formulas()
        result = service.get_formula_by_id("negro-pega")
        service.add_ingredient(result.data.name, Ingredient("Espumante", 650))
    """

    def __init__(self, connector: FormulaConnector):
        super().__init__()
        self.connector = connector
        self.editor = IngredientEditor(connector)
        self.formulas: List[Formula] = []

    # =========================================================================
    # READ
    # =========================================================================

    def list_formulas(self) -> ServiceResult:
        result = self.safe_execute("Listing formulas", self.connector.fetch_all)
        if result:
            self.formulas = list(result.data)
        return result

    def get_formula(self, name: str) -> ServiceResult:
        """Fetch by display name. A missing formula fails with error_code NOT_FOUND."""
        return self.safe_execute(f"Fetching formula {name!r}", self.connector.fetch_one, name)

    def resolve_name(self, formula_id: str, refresh: bool = True) -> Optional[str]:
        """Display name for a local id, from the listed collection."""
        match = self._find_by_id(formula_id)
        if match is None and refresh and self.list_formulas():
            match = self._find_by_id(formula_id)
        return match.name if match else None

    def get_formula_by_id(self, formula_id: str) -> ServiceResult:
        name = self.resolve_name(formula_id)
        if name is None:
            return ServiceResult.fail(f"Formula {formula_id!r} not found", error_code="NOT_FOUND")
        return self.get_formula(name)

    def _find_by_id(self, formula_id: str) -> Optional[Formula]:
        return next((f for f in self.formulas if f.id == formula_id), None)

    # =========================================================================
    # WRITE
    # =========================================================================

    def add_formula(self, formula: Formula) -> ServiceResult:
        """Create a formula; rejected locally if unnamed or already listed."""
        try:
            if not formula.name or not formula.name.strip():
                raise DomainValidationError("A formula name is required", field="name")
            if any(existing.matches_name(formula.name) for existing in self.formulas):
                raise DuplicateNameError(
                    f"Formula {formula.name.strip()!r} already exists", name=formula.name
                )
            for ingredient in formula.ingredients:
                validate_ingredient(ingredient)
        except DomainValidationError as e:
            handle_error(e, show_user_message=False)
            return ServiceResult.from_exception(e)

        result = self.safe_execute(f"Adding formula {formula.name!r}", self.connector.create, formula)
        if result:
            self.formulas.append(formula)
        return result

    def update_formula(
        self,
        name: str,
        formula: Formula,
        expected_version: Optional[str] = None,
    ) -> ServiceResult:
        """Whole-formula PUT to /formulas/{name}."""
        return self.safe_execute(
            f"Updating formula {name!r}",
            self.connector.replace,
            name,
            formula,
            if_match=expected_version,
        )

    def delete_formula(self, name: str) -> ServiceResult:
        result = self.safe_execute(f"Deleting formula {name!r}", self.connector.delete, name)
        if result:
            self.formulas = [f for f in self.formulas if f.name != name]
        return result

    # =========================================================================
    # INGREDIENTS
    # =========================================================================

    def add_ingredient(
        self, name: str, ingredient: Ingredient, expected_version: Optional[str] = None
    ) -> ServiceResult:
        return self.editor.add_ingredient(name, ingredient, expected_version)

    def update_ingredient(
        self, name: str, index: int, ingredient: Ingredient, expected_version: Optional[str] = None
    ) -> ServiceResult:
        return self.editor.update_ingredient(name, index, ingredient, expected_version)

    def delete_ingredient(
        self, name: str, index: int, expected_version: Optional[str] = None
    ) -> ServiceResult:
        return self.editor.delete_ingredient(name, index, expected_version)
