# =============================================================================
# rubber_core/services/ingredient_editor.py
# Single-ingredient edits on top of a whole-formula PUT
# =============================================================================
"""
The formulas API has no per-ingredient endpoint. Every ingredient edit is:

    1. GET    /formulas/{name}      (fetch the current formula)
    2. mutate the ingredient list in memory
    3. PUT    /formulas/{name}      (replace the whole formula)

Steps 1-3 are not atomic. Two edits to the same formula running at the same
time can overwrite each other, since each PUT carries a snapshot taken before
the other one landed. Callers must not run edits on one formula in parallel.

`expected_version` is the hook for closing that gap: when given, the fetched
formula's version (the server ETag) must match it, and it is sent back as
If-Match on the PUT. Nothing is retried.

None of the operations return the updated formula; re-fetch to see it.
"""

from __future__ import annotations
from numbers import Number
from typing import Callable, List, Optional

from rubber_core.api import FormulaConnector
from rubber_core.errors import (
    DomainValidationError,
    IngredientIndexError,
    VersionConflictError,
    handle_error,
)
from rubber_core.models import Ingredient

from .base_service import BaseService, ServiceResult

Mutation = Callable[[List[Ingredient]], None]


def validate_ingredient(ingredient: Ingredient) -> None:
    """Reject an ingredient before any request is made."""
    if not isinstance(ingredient.name, str) or not ingredient.name.strip():
        raise DomainValidationError("An ingredient name is required", field="name")
    if "[" in ingredient.name or "]" in ingredient.name:
        raise DomainValidationError(
            "Ingredient names cannot contain square brackets", field="name"
        )
    if isinstance(ingredient.quantity, bool) or not isinstance(ingredient.quantity, Number):
        raise DomainValidationError(
            f"Quantity must be a number, got {ingredient.quantity!r}", field="quantity"
        )
    if ingredient.quantity < 0:
        raise DomainValidationError("Quantity cannot be negative", field="quantity")


class IngredientEditor(BaseService):
    """Add, update and delete one ingredient of a formula keyed by display name."""

    def __init__(self, connector: FormulaConnector):
        super().__init__()
        self.connector = connector

    def add_ingredient(
        self,
        formula_name: str,
        ingredient: Ingredient,
        expected_version: Optional[str] = None,
    ) -> ServiceResult:
        """Append an ingredient to the end of the formula."""
        rejected = self._precheck(ingredient=ingredient)
        if rejected is not None:
            return rejected

        def append(items: List[Ingredient]) -> None:
            items.append(ingredient)

        return self._edit(
            f"Adding ingredient {ingredient.name!r} to {formula_name!r}",
            formula_name,
            append,
            expected_version,
        )

    def update_ingredient(
        self,
        formula_name: str,
        index: int,
        ingredient: Ingredient,
        expected_version: Optional[str] = None,
    ) -> ServiceResult:
        """Replace the ingredient at index; index must be within [0, length)."""
        rejected = self._precheck(index=index, ingredient=ingredient)
        if rejected is not None:
            return rejected

        def replace_at(items: List[Ingredient]) -> None:
            if index >= len(items):
                raise IngredientIndexError(index, len(items))
            items[index] = ingredient

        return self._edit(
            f"Updating ingredient #{index} of {formula_name!r}",
            formula_name,
            replace_at,
            expected_version,
        )

    def delete_ingredient(
        self,
        formula_name: str,
        index: int,
        expected_version: Optional[str] = None,
    ) -> ServiceResult:
        """Remove the ingredient at index; index must be within [0, length)."""
        rejected = self._precheck(index=index)
        if rejected is not None:
            return rejected

        def remove_at(items: List[Ingredient]) -> None:
            if index >= len(items):
                raise IngredientIndexError(index, len(items))
            del items[index]

        return self._edit(
            f"Deleting ingredient #{index} of {formula_name!r}",
            formula_name,
            remove_at,
            expected_version,
        )

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _precheck(
        self,
        index: Optional[int] = None,
        ingredient: Optional[Ingredient] = None,
    ) -> Optional[ServiceResult]:
        """Checks that need no fetch. Returns a failed result or None."""
        try:
            if index is not None and (isinstance(index, bool) or not isinstance(index, int)):
                raise DomainValidationError(f"Index must be an integer, got {index!r}", field="index")
            if index is not None and index < 0:
                raise IngredientIndexError(index)
            if ingredient is not None:
                validate_ingredient(ingredient)
        except DomainValidationError as e:
            handle_error(e, show_user_message=False)
            return ServiceResult.from_exception(e)
        return None

    def _edit(
        self,
        operation: str,
        formula_name: str,
        mutate: Mutation,
        expected_version: Optional[str],
    ) -> ServiceResult:
        def fetch_mutate_replace() -> None:
            formula = self.connector.fetch_one(formula_name)

            if expected_version is not None and formula.version is not None \
                    and formula.version != expected_version:
                raise VersionConflictError(
                    f"Formula {formula_name!r} changed since it was read",
                    expected=expected_version,
                    actual=formula.version,
                )

            mutate(formula.ingredients)
            # Keyed by the name we fetched with, not whatever the server echoed
            self.connector.replace(formula_name, formula, if_match=expected_version)

        return self.safe_execute(operation, fetch_mutate_replace)
