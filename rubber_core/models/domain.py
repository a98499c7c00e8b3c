# =============================================================================
# rubber_core/models/domain.py
# Local domain model: colors, ingredients and formulas
# =============================================================================
"""
Local (app-side) shapes of the two remote resources.

Identity rules:
    - Color id   = lower-cased name               ("Negro Pega" -> "negro pega")
    - Formula id = lower-cased, whitespace -> "-"  ("Negro Pega" -> "negro-pega")

Ids are only used for local identity. Anything that talks to the remote API
keys resources by their display name, which is always carried alongside.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Unit(str, Enum):
    """Units an ingredient quantity can be expressed in."""
    GR = "gr"
    KG = "kg"
    L = "L"


DEFAULT_UNIT = Unit.GR


def normalize_unit(value: Optional[str]) -> str:
    """
    Normalize a unit string.

    Liters are always the upper-case "L"; grams and kilograms are lower-case.
    Missing or unknown units fall back to grams.
    """
    if isinstance(value, Unit):
        return value.value
    if not value:
        return DEFAULT_UNIT.value

    cleaned = str(value).strip()
    if cleaned.lower() == "l":
        return Unit.L.value
    if cleaned.lower() in (Unit.GR.value, Unit.KG.value):
        return cleaned.lower()
    return DEFAULT_UNIT.value


def color_id(name: str) -> str:
    return name.lower()


def formula_id(name: str) -> str:
    return re.sub(r"\s+", "-", name.lower())


def _pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first key present in data (English or Spanish field names)."""
    for key in keys:
        if key in data:
            return data[key]
    return default


@dataclass
class Color:
    """A rubber color and how much of it is in stock."""
    id: str
    name: str
    quantity: int = 0

    @classmethod
    def from_name(cls, name: str, quantity: int = 0) -> Color:
        return cls(id=color_id(name), name=name, quantity=quantity)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Color:
        name = _pick(data, "name", "nombre")
        quantity = _pick(data, "quantity", "cantidad", default=0)
        return cls(id=data.get("id") or color_id(name), name=name, quantity=quantity)

    def matches_name(self, other: str) -> bool:
        """Case-insensitive, whitespace-trimmed name comparison."""
        return self.name.strip().lower() == other.strip().lower()


@dataclass
class Ingredient:
    """One line of a mixing formula."""
    name: str
    quantity: float
    unit: str = DEFAULT_UNIT.value

    def __post_init__(self):
        self.unit = normalize_unit(self.unit)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Ingredient:
        return cls(
            name=_pick(data, "name", "nombre"),
            quantity=_pick(data, "quantity", "cantidad", default=0),
            unit=_pick(data, "unit", "unidad"),
        )


@dataclass
class Formula:
    """
    A mixing formula for one color.

    Attributes:
        id: Local identity derived from the display name
        name: Display name; the remote API keys formulas by this value
        ingredients: Ordered ingredient list
        version: Opaque server version (ETag) if the API returned one
    """
    id: str
    name: str
    ingredients: List[Ingredient] = field(default_factory=list)
    version: Optional[str] = None

    @classmethod
    def from_name(cls, name: str, ingredients: Optional[List[Ingredient]] = None) -> Formula:
        return cls(id=formula_id(name), name=name, ingredients=list(ingredients or []))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Formula:
        name = _pick(data, "name", "nombreColor")
        raw_ingredients = _pick(data, "ingredients", "ingredientes", default=[])
        return cls(
            id=data.get("id") or formula_id(name),
            name=name,
            ingredients=[
                item if isinstance(item, Ingredient) else Ingredient.from_dict(item)
                for item in raw_ingredients
            ],
            version=data.get("version"),
        )

    def matches_name(self, other: str) -> bool:
        return self.name.strip().lower() == other.strip().lower()
