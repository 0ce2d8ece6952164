from __future__ import annotations

from typing import Mapping, Optional

from ..config import get_config
from ..data.models import Coupon, CouponResult


def resolve_coupon(code: str, coupons: Optional[Mapping[str, float]] = None) -> CouponResult:
    """Look up a discount code, ignoring case and surrounding whitespace.

    Args:
        code: Code typed by the customer.
        coupons: Mapping of code to percentage off. Defaults to the configured table.
    Returns:
        CouponResult: ok with the matched coupon, or not ok with a message to show.
    """
    table = get_config().coupons if coupons is None else coupons
    wanted = (code or "").strip().upper()
    if not wanted:
        return CouponResult(ok=False, message="Please enter a coupon code")

    for known, percentage in table.items():
        if known.upper() == wanted:
            coupon = Coupon(code=known.upper(), discount=percentage)
            return CouponResult(
                ok=True,
                message=f"Coupon {coupon.code} applied: {percentage:g}% off",
                coupon=coupon,
            )
    return CouponResult(ok=False, message=f"Invalid coupon code: {code.strip()}")


def apply_discount(amount: float, coupon: Optional[Coupon]) -> float:
    """Amount after a percentage coupon, rounded to cents."""
    if coupon is None:
        return round(amount, 2)
    return round(amount * (1 - coupon.discount / 100.0), 2)
