"""Turn whatever shape the remote returns into typed collections.

Two payload styles have to be understood:
- raw arrays written by the file-backed source (camelCase keys, tables as bare ints)
- database rows (snake_case keys, tables as ``{"id": .., "created_at": ..}``)
"""
from __future__ import annotations

from typing import Any, Dict, List, Type

from pydantic import BaseModel, ValidationError

from ..errors import PayloadShapeError
from .models import Collection, MenuItem, Order, Table

MODEL_BY_COLLECTION: Dict[Collection, Type[BaseModel]] = {
    Collection.TABLES: Table,
    Collection.MENU_ITEMS: MenuItem,
    Collection.ORDERS: Order,
}


def _coerce_row(collection: Collection, row: Any) -> Any:
    if collection is Collection.TABLES and isinstance(row, int) and not isinstance(row, bool):
        return {"id": row}
    return row


def parse_collection(collection: Collection, payload: Any) -> List[BaseModel]:
    """Validate a payload into a list of entity models.

    Raises:
        PayloadShapeError: payload is not a list, a row does not validate,
            or two rows share an identifier.
    """
    if not isinstance(payload, list):
        raise PayloadShapeError(
            f"{collection.value}: expected a list payload, got {type(payload).__name__}"
        )

    model = MODEL_BY_COLLECTION[collection]
    items: List[BaseModel] = []
    seen = set()
    for index, row in enumerate(payload):
        if isinstance(row, model):
            item = row
        else:
            try:
                item = model.model_validate(_coerce_row(collection, row))
            except ValidationError as e:
                raise PayloadShapeError(f"{collection.value}[{index}] is invalid: {e}") from e
        if item.id in seen:
            raise PayloadShapeError(f"{collection.value}: duplicate id {item.id!r}")
        seen.add(item.id)
        items.append(item)
    return items


def dump_collection(items: List[BaseModel]) -> List[Dict[str, Any]]:
    """Serialize entity models to JSON-safe snake_case rows."""
    return [item.model_dump(mode="json") for item in items]
