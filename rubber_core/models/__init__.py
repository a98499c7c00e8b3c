"""
Domain model and wire mapping for stock colors and mixing formulas.
"""

from .domain import (
    Unit,
    DEFAULT_UNIT,
    Color,
    Ingredient,
    Formula,
    normalize_unit,
    color_id,
    formula_id,
)

from .mappers import (
    color_from_wire,
    color_to_wire,
    ingredient_from_wire,
    ingredient_to_wire,
    formula_from_wire,
    formula_to_wire,
    split_unit_suffix,
    encode_unit_suffix,
)

__all__ = [
    "Unit",
    "DEFAULT_UNIT",
    "Color",
    "Ingredient",
    "Formula",
    "normalize_unit",
    "color_id",
    "formula_id",
    "color_from_wire",
    "color_to_wire",
    "ingredient_from_wire",
    "ingredient_to_wire",
    "formula_from_wire",
    "formula_to_wire",
    "split_unit_suffix",
    "encode_unit_suffix",
]
