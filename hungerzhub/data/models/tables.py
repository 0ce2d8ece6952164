from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field


class Table(BaseModel):
    """A dining table customers can order from."""
    id: int = Field(gt=0, description="Table number shown on the QR code")
    created_at: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("created_at", "createdAt"),
        description="Row creation time, when the source tracks one",
    )
