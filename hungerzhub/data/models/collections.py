from __future__ import annotations

from enum import Enum


class Collection(str, Enum):
    """Entity collections mirrored by the sync layer."""
    TABLES = "tables"
    MENU_ITEMS = "menu_items"
    ORDERS = "orders"
