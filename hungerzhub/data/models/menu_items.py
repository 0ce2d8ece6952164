from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, Field, NonNegativeFloat, field_validator

Variant = Literal["half", "full"]


class HalfFullPrice(BaseModel):
    """Price pair for dishes sold as half and full portions."""
    half: NonNegativeFloat = Field(description="Half portion price")
    full: NonNegativeFloat = Field(description="Full portion price")


class MenuCategory(BaseModel):
    """Named menu section."""
    id: str = Field(description="Category tag referenced by menu items")
    name: str = Field(description="Machine name")
    display_name: str = Field(
        validation_alias=AliasChoices("display_name", "displayName"),
        description="Heading shown to customers",
    )


class MenuItem(BaseModel):
    """Response model for a dish on the menu."""
    id: str = Field(description="Unique menu item identifier")
    name: str = Field(description="Display name")
    price: Union[NonNegativeFloat, HalfFullPrice] = Field(description="Single price or half/full pair")
    category: str = Field(description="Category tag")
    description: Optional[str] = Field(default=None, description="Short description")
    image: Optional[str] = Field(default=None, description="Image URL")
    popular: bool = Field(default=False, description="Highlighted on the menu")
    created_at: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("created_at", "createdAt"),
    )

    @field_validator("popular", mode="before")
    @classmethod
    def _null_popular(cls, value):
        # nullable column in the database-backed source
        return False if value is None else value

    @property
    def has_variants(self) -> bool:
        return isinstance(self.price, HalfFullPrice)

    def unit_price(self, variant: Optional[Variant] = None) -> float:
        """Resolve the price for one portion; anything but "half" is charged as full."""
        if isinstance(self.price, HalfFullPrice):
            return self.price.half if variant == "half" else self.price.full
        return float(self.price)
