from __future__ import annotations

from typing import List, Mapping, Optional

from ..data.models import CartItem, Coupon, CouponResult, MenuItem, Variant
from .coupons import apply_discount, resolve_coupon


def _effective_variant(item: MenuItem, variant: Optional[Variant]) -> Optional[Variant]:
    # Single-price dishes have no portions; pair-priced ones default to full
    if not item.has_variants:
        return None
    return variant or "full"


class Cart:
    """
    A customer's pending selection.

    Holds at most one CartItem per (menu item id, variant); adding the same
    pair again only increases its quantity.
    """

    def __init__(self) -> None:
        self._items: List[CartItem] = []
        self.coupon: Optional[Coupon] = None

    @property
    def items(self) -> List[CartItem]:
        return [item.model_copy(deep=True) for item in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def _find(self, item_id: str, variant: Optional[Variant]) -> Optional[CartItem]:
        for entry in self._items:
            if entry.menu_item.id != item_id:
                continue
            if not entry.menu_item.has_variants or entry.variant == (variant or "full"):
                return entry
        return None

    def add_to_cart(
        self,
        item: MenuItem,
        quantity: int = 1,
        variant: Optional[Variant] = None,
        notes: Optional[str] = None,
    ) -> CartItem:
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
            raise ValueError(f"quantity must be a positive integer, got {quantity!r}")

        variant = _effective_variant(item, variant)
        existing = self._find(item.id, variant)
        if existing is not None:
            existing.quantity += quantity
            if notes:
                existing.notes = notes
            return existing.model_copy(deep=True)

        entry = CartItem(menu_item=item, quantity=quantity, variant=variant, notes=notes)
        self._items.append(entry)
        return entry.model_copy(deep=True)

    def remove_from_cart(self, item_id: str, variant: Optional[Variant] = None) -> bool:
        entry = self._find(item_id, variant)
        if entry is None:
            return False
        self._items.remove(entry)
        return True

    def update_quantity(self, item_id: str, quantity: int, variant: Optional[Variant] = None) -> bool:
        """Set an entry's quantity; zero or less removes it."""
        if not isinstance(quantity, int) or isinstance(quantity, bool):
            raise ValueError(f"quantity must be an integer, got {quantity!r}")
        if quantity <= 0:
            return self.remove_from_cart(item_id, variant)
        entry = self._find(item_id, variant)
        if entry is None:
            return False
        entry.quantity = quantity
        return True

    def clear(self) -> None:
        self._items = []
        self.coupon = None

    def cart_total(self) -> float:
        return sum(entry.line_total for entry in self._items)

    def apply_coupon(self, code: str, coupons: Optional[Mapping[str, float]] = None) -> CouponResult:
        result = resolve_coupon(code, coupons)
        if result.ok:
            self.coupon = result.coupon
        return result

    def remove_coupon(self) -> None:
        self.coupon = None

    def discounted_total(self) -> float:
        return apply_discount(self.cart_total(), self.coupon)
