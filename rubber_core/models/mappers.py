# =============================================================================
# rubber_core/models/mappers.py
# Wire <-> local mapping for stock and formulas
# =============================================================================
"""
Bidirectional conversion between the remote JSON shapes and the local model.

Remote shapes:
    stock:    {"name": str, "quantity": number}
    formula:  {"name": str, "ingredients": [{"name": str, "quantity": number}]}

The remote ingredient has no unit field. The unit travels as a bracketed
suffix on the ingredient name: "Espumante [gr]", "Aceite [L]".
"""

from __future__ import annotations
import re
from numbers import Number
from typing import Any, Dict, Optional

from rubber_core.errors import MalformedResponseError
from .domain import Color, Formula, Ingredient, DEFAULT_UNIT, color_id, formula_id, normalize_unit

# Trailing " [gr]" / "[KG]" / "  [l]" etc.
UNIT_SUFFIX_PATTERN = re.compile(r"\s*\[(gr|kg|l)\]\Z", re.IGNORECASE)


def _require_name(payload: Any, kind: str) -> str:
    if not isinstance(payload, dict):
        raise MalformedResponseError(f"Expected a {kind} object", payload=payload)
    name = payload.get("name")
    if not isinstance(name, str):
        raise MalformedResponseError(f"{kind} without a string 'name'", payload=payload)
    return name


def _require_quantity(payload: Dict[str, Any], kind: str):
    quantity = payload.get("quantity", 0)
    if isinstance(quantity, bool) or not isinstance(quantity, Number):
        raise MalformedResponseError(f"{kind} 'quantity' is not a number", payload=payload)
    return quantity


# =============================================================================
# COLORS
# =============================================================================

def color_from_wire(payload: Dict[str, Any]) -> Color:
    name = _require_name(payload, "stock item")
    return Color(id=color_id(name), name=name, quantity=_require_quantity(payload, "stock item"))


def color_to_wire(color: Color) -> Dict[str, Any]:
    return {"name": color.name, "quantity": color.quantity}


# =============================================================================
# INGREDIENTS
# =============================================================================

def split_unit_suffix(wire_name: str):
    """
    Split a wire ingredient name into (bare name, unit).

    Names without a recognised suffix keep their original text and get the
    default unit.
    """
    match = UNIT_SUFFIX_PATTERN.search(wire_name)
    if not match:
        return wire_name, DEFAULT_UNIT.value
    return wire_name[:match.start()], normalize_unit(match.group(1))


def encode_unit_suffix(name: str, unit: Optional[str]) -> str:
    return f"{name} [{normalize_unit(unit)}]"


def ingredient_from_wire(payload: Dict[str, Any]) -> Ingredient:
    wire_name = _require_name(payload, "ingredient")
    name, unit = split_unit_suffix(wire_name)
    return Ingredient(name=name, quantity=_require_quantity(payload, "ingredient"), unit=unit)


def ingredient_to_wire(ingredient: Ingredient) -> Dict[str, Any]:
    return {
        "name": encode_unit_suffix(ingredient.name, ingredient.unit),
        "quantity": ingredient.quantity,
    }


# =============================================================================
# FORMULAS
# =============================================================================

def formula_from_wire(payload: Dict[str, Any], version: Optional[str] = None) -> Formula:
    name = _require_name(payload, "formula")
    ingredients = payload.get("ingredients", [])
    if not isinstance(ingredients, list):
        raise MalformedResponseError("formula 'ingredients' is not a list", payload=payload)

    return Formula(
        id=formula_id(name),
        name=name,
        ingredients=[ingredient_from_wire(item) for item in ingredients],
        version=version,
    )


def formula_to_wire(formula: Formula) -> Dict[str, Any]:
    return {
        "name": formula.name,
        "ingredients": [ingredient_to_wire(item) for item in formula.ingredients],
    }
