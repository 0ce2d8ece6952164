from .cart import Cart
from .coupons import apply_discount, resolve_coupon
from .menu import group_by_category, popular_items
from .session import OrderSession, PlaceOrderResult
from .staff import StaffConsole

__all__ = [
    "Cart",
    "apply_discount",
    "resolve_coupon",
    "group_by_category",
    "popular_items",
    "OrderSession",
    "PlaceOrderResult",
    "StaffConsole",
]
