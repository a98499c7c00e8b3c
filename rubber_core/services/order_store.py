# =============================================================================
# rubber_core/services/order_store.py
# User-defined display order for the stock list
# =============================================================================
"""
The stock API has no ordering field. The order the user drags colors into
is kept locally as a list of color ids and laid over whatever order the
server returns:

    saved order  ["marino", "negro"]
    server       [negro, marino, beige]
    displayed    [marino, negro, beige]

Ids the saved order does not know about (colors created elsewhere since the
last save) go after all known ones, keeping their server order.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Sequence

from rubber_core.errors import PersistenceError
from rubber_core.logging import get_logger
from rubber_core.models import Color
from rubber_core.storage import LocalDatabase, get_local_database

logger = get_logger(__name__)

COLOR_ORDER_KEY = "color_order"


def reconcile_order(colors: Sequence[Color], saved_order: Sequence[str]) -> List[Color]:
    """
    Sort colors by their position in saved_order.

    sorted() is stable, so colors missing from saved_order keep their
    relative server order behind every known color.
    """
    if not saved_order:
        return list(colors)

    positions = {}
    for index, item_id in enumerate(saved_order):
        positions.setdefault(item_id, index)

    def sort_key(color: Color):
        if color.id in positions:
            return (0, positions[color.id])
        return (1, 0)

    return sorted(colors, key=sort_key)


class ColorOrderStore:
    """
    Persisted list of color ids under a fixed settings key.

    Reads and writes never raise: a broken store behaves like an empty one.
    """

    def __init__(self, db: Optional[LocalDatabase] = None, key: str = COLOR_ORDER_KEY):
        self._db = db
        self.key = key

    @property
    def db(self) -> LocalDatabase:
        if self._db is None:
            self._db = get_local_database()
        return self._db

    def load(self) -> List[str]:
        try:
            value = self.db.get_setting(self.key, default=[])
        except PersistenceError as e:
            logger.error(f"Could not read saved color order, ignoring it: {e}")
            return []

        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            logger.warning(f"Saved color order has an unexpected shape, ignoring it: {value!r}")
            return []
        return value

    def save(self, color_ids: Iterable[str]) -> bool:
        ids = list(color_ids)
        try:
            self.db.set_setting(self.key, ids)
        except PersistenceError as e:
            logger.error(f"Could not save color order: {e}")
            return False
        logger.debug(f"Saved color order ({len(ids)} ids)")
        return True

    def save_colors(self, colors: Iterable[Color]) -> bool:
        return self.save(color.id for color in colors)

    def clear(self) -> bool:
        try:
            self.db.delete_setting(self.key)
        except PersistenceError as e:
            logger.error(f"Could not clear color order: {e}")
            return False
        return True
