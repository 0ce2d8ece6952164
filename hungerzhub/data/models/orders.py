from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, Field, NonNegativeFloat, PositiveInt

from .menu_items import MenuItem, Variant


class OrderStatus(str, Enum):
    """Kitchen progress of an order. Moves forward only."""
    PENDING = "PENDING"
    COOKING = "COOKING"
    DELIVERED = "DELIVERED"

    @property
    def rank(self) -> int:
        return _STATUS_ORDER.index(self)

    def can_advance_to(self, target: "OrderStatus") -> bool:
        return target.rank >= self.rank


_STATUS_ORDER = [OrderStatus.PENDING, OrderStatus.COOKING, OrderStatus.DELIVERED]


class CartItem(BaseModel):
    """A quantity of one menu item (and portion) in a cart or order."""
    menu_item: MenuItem = Field(validation_alias=AliasChoices("menu_item", "menuItem"))
    quantity: PositiveInt = Field(description="Number of portions")
    variant: Optional[Variant] = Field(default=None, description="Half or full portion")
    notes: Optional[str] = Field(default=None, description="Free-text kitchen note")

    @property
    def key(self) -> Tuple[str, Optional[Variant]]:
        return (self.menu_item.id, self.variant)

    @property
    def unit_price(self) -> float:
        return self.menu_item.unit_price(self.variant)

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


class Order(BaseModel):
    """Response model for a submitted order."""
    id: str = Field(description="Unique order identifier")
    table_id: int = Field(validation_alias=AliasChoices("table_id", "tableId"))
    items: List[CartItem] = Field(description="Cart snapshot taken at submission")
    status: OrderStatus = Field(default=OrderStatus.PENDING)
    created_at: datetime = Field(validation_alias=AliasChoices("created_at", "createdAt"))
    total_amount: NonNegativeFloat = Field(
        validation_alias=AliasChoices("total_amount", "totalAmount"),
        description="Amount charged, fixed at submission",
    )
    coupon_code: Optional[str] = Field(default=None, validation_alias=AliasChoices("coupon_code", "couponCode"))
    discount_pct: NonNegativeFloat = Field(default=0.0, validation_alias=AliasChoices("discount_pct", "discountPct"))
    payment_status: Optional[str] = Field(default=None, validation_alias=AliasChoices("payment_status", "paymentStatus"))
    payment_method: Optional[str] = Field(default=None, validation_alias=AliasChoices("payment_method", "paymentMethod"))
    payment_date: Optional[datetime] = Field(default=None, validation_alias=AliasChoices("payment_date", "paymentDate"))
