# =============================================================================
# rubber_core/services/color_service.py
# Stock (color) operations and the ordered, reconciled stock list
# =============================================================================

from __future__ import annotations
from typing import List, Optional, Sequence

from rubber_core.api import StockConnector
from rubber_core.errors import DomainValidationError, DuplicateNameError, handle_error
from rubber_core.models import Color

from .base_service import BaseService, ServiceResult
from .order_store import ColorOrderStore, reconcile_order


class ColorService(BaseService):
    """
    Public entry points for the stock screen.

    Keeps the last loaded list in `colors`; duplicate-name checks run
    against it, the same list the user is looking at.

    Usage:
        service = ColorService(connector, ColorOrderStore(db))
        result = service.load_colors()
        if result:
            for color in result.data:
                ...
    """

    def __init__(self, connector: StockConnector, order_store: Optional[ColorOrderStore] = None):
        super().__init__()
        self.connector = connector
        self.order_store = order_store or ColorOrderStore()
        self.colors: List[Color] = []

    # =========================================================================
    # READ
    # =========================================================================

    def list_colors(self) -> ServiceResult:
        """Server order, no reconciliation."""
        return self.safe_execute("Listing stock", self.connector.fetch_all)

    def get_color(self, name: str) -> ServiceResult:
        return self.safe_execute(f"Fetching color {name!r}", self.connector.fetch_one, name)

    def load_colors(self) -> ServiceResult:
        """
        Fetch the stock and lay the saved display order over it.

        With no saved order the server order is taken as-is and saved.
        """
        result = self.list_colors()
        if not result:
            return result

        live: List[Color] = result.data
        saved_order = self.order_store.load()

        if saved_order:
            ordered = reconcile_order(live, saved_order)
        else:
            ordered = list(live)
            self.order_store.save_colors(ordered)

        self.colors = ordered
        return ServiceResult.ok(ordered, metadata={"saved_order": bool(saved_order)})

    # =========================================================================
    # WRITE
    # =========================================================================

    def add_color(self, name: str, quantity: int = 0) -> ServiceResult:
        """
        Create a color. Rejected locally, with no request, when the name is
        empty, the quantity is not a non-negative integer, or a color with
        the same name (trimmed, case-insensitive) is already listed.
        """
        try:
            color = self._validate_new_color(name, quantity)
        except DomainValidationError as e:
            handle_error(e, show_user_message=False)
            return ServiceResult.from_exception(e)

        result = self.safe_execute(f"Adding color {color.name!r}", self.connector.create, color)
        if result:
            result.data = color
            self.colors.append(color)
        return result

    def _validate_new_color(self, name: str, quantity) -> Color:
        if not name or not name.strip():
            raise DomainValidationError("A color name is required", field="name")

        if isinstance(quantity, bool) or not isinstance(quantity, int):
            try:
                quantity = int(str(quantity).strip() or 0)
            except ValueError:
                raise DomainValidationError(
                    f"Quantity must be a whole number, got {quantity!r}", field="quantity"
                )
        if quantity < 0:
            raise DomainValidationError("Quantity cannot be negative", field="quantity")

        if any(existing.matches_name(name) for existing in self.colors):
            raise DuplicateNameError(f"Color {name.strip()!r} already exists", name=name)

        return Color.from_name(name.strip(), quantity)

    def update_color(self, color: Color) -> ServiceResult:
        """Whole-resource PUT keyed by the color's name."""
        return self.safe_execute(
            f"Updating color {color.name!r}", self.connector.replace, color.name, color
        )

    def adjust_quantity(self, color_id: str, delta: int) -> ServiceResult:
        """Add delta to a listed color's quantity, never going below zero."""
        index = next((i for i, c in enumerate(self.colors) if c.id == color_id), None)
        if index is None:
            return ServiceResult.fail(f"Color {color_id!r} is not loaded", error_code="NOT_FOUND")

        current = self.colors[index]
        updated = Color(id=current.id, name=current.name, quantity=max(0, current.quantity + delta))
        self.colors[index] = updated

        result = self.update_color(updated)
        if result:
            result.data = updated
        else:
            # Keep the list in step with what the server accepted
            self.colors[index] = current
        return result

    def delete_color(self, name: str) -> ServiceResult:
        result = self.safe_execute(f"Deleting color {name!r}", self.connector.delete, name)
        if result:
            self.colors = [c for c in self.colors if c.name != name]
        return result

    # =========================================================================
    # ORDER
    # =========================================================================

    def reorder_colors(self, colors: Sequence[Color], push_to_server: bool = False) -> ServiceResult:
        """
        Make `colors` the displayed and persisted order.

        The order is local only. A failed save is logged and does not undo
        the reorder. With push_to_server, each color is PUT in list order,
        one at a time, stopping at the first failure.
        """
        ordered = list(colors)
        saved = self.order_store.save_colors(ordered)
        self.colors = ordered

        if push_to_server:
            for color in ordered:
                result = self.update_color(color)
                if not result:
                    result.metadata = {**(result.metadata or {}), "order_saved": saved}
                    return result

        return ServiceResult.ok(ordered, metadata={"order_saved": saved})

    def move_color(self, color_id: str, offset: int) -> ServiceResult:
        """Move one listed color up (negative offset) or down, then reorder."""
        ids = [c.id for c in self.colors]
        if color_id not in ids:
            return ServiceResult.fail(f"Color {color_id!r} is not loaded", error_code="NOT_FOUND")

        old_index = ids.index(color_id)
        new_index = min(max(old_index + offset, 0), len(ids) - 1)
        reordered = list(self.colors)
        reordered.insert(new_index, reordered.pop(old_index))
        return self.reorder_colors(reordered)
