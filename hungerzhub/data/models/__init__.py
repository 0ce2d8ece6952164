from .collections import Collection

from .tables import Table
from .menu_items import HalfFullPrice, MenuCategory, MenuItem, Variant
from .orders import CartItem, Order, OrderStatus
from .coupons import Coupon, CouponResult
from .results import (
    Fresh,
    Cached,
    Default,
    FetchResult,
    SaveResult,
    RefreshResult,
)

__all__ = [
    "Collection",
    # Entities
    "Table",
    "HalfFullPrice",
    "MenuCategory",
    "MenuItem",
    "Variant",
    "CartItem",
    "Order",
    "OrderStatus",
    "Coupon",
    "CouponResult",
    # Sync results
    "Fresh",
    "Cached",
    "Default",
    "FetchResult",
    "SaveResult",
    "RefreshResult",
]
