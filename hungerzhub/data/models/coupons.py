from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field


class Coupon(BaseModel):
    """Static discount code."""
    code: str = Field(description="Code as printed, matched case-insensitively")
    discount: float = Field(ge=0, le=100, description="Percentage off the cart total")
    type: Literal["percentage"] = "percentage"


class CouponResult(BaseModel):
    """Outcome of a coupon lookup."""
    ok: bool
    message: str
    coupon: Optional[Coupon] = None
