from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from ..data.models import Collection, MenuCategory, MenuItem, Order, OrderStatus, SaveResult, Table
from ..logging import get_logger
from ..seed_data import MENU_CATEGORIES
from ..sync.service import SyncService

logger = get_logger(__name__)


class StaffConsole:
    """Admin dashboard operations: order progress, payments, tables and menu."""

    def __init__(self, sync: SyncService, categories: Optional[Iterable[MenuCategory]] = None) -> None:
        self.sync = sync
        self.categories = list(categories) if categories is not None else list(MENU_CATEGORIES)

    async def _orders(self) -> List[Order]:
        return list((await self.sync.fetch(Collection.ORDERS)).value)

    async def _find_order(self, order_id: str) -> Order:
        for order in await self._orders():
            if order.id == order_id:
                return order
        raise ValueError(f"Unknown order: {order_id}")

    # ---------- orders ----------

    async def orders_by_status(self) -> Dict[OrderStatus, List[Order]]:
        grouped: Dict[OrderStatus, List[Order]] = {status: [] for status in OrderStatus}
        for order in await self._orders():
            grouped[order.status].append(order)
        return grouped

    async def advance_order_status(self, order_id: str, status: OrderStatus) -> SaveResult:
        """Move an order forward (PENDING -> COOKING -> DELIVERED).

        Raises:
            ValueError: unknown order, or the move would go backwards.
        """
        status = OrderStatus(status)
        order = await self._find_order(order_id)
        if not order.status.can_advance_to(status):
            raise ValueError(f"Order {order_id} cannot go from {order.status.value} back to {status.value}")
        if order.status is status:
            return SaveResult(collection=Collection.ORDERS, ok=True, version=self.sync.cache.version(Collection.ORDERS))
        return await self.sync.save_item(Collection.ORDERS, order.model_copy(update={"status": status}))

    async def record_payment(
        self,
        order_id: str,
        method: str,
        status: str = "paid",
        when: Optional[datetime] = None,
    ) -> SaveResult:
        order = await self._find_order(order_id)
        updated = order.model_copy(update={
            "payment_status": status,
            "payment_method": method,
            "payment_date": when or datetime.now(timezone.utc),
        })
        return await self.sync.save_item(Collection.ORDERS, updated)

    # ---------- tables ----------

    async def add_table(self, table_id: int) -> SaveResult:
        if not isinstance(table_id, int) or isinstance(table_id, bool) or table_id <= 0:
            raise ValueError("Please enter a valid table number")
        tables = (await self.sync.fetch(Collection.TABLES)).value
        if any(table.id == table_id for table in tables):
            raise ValueError(f"Table {table_id} already exists")
        table = Table(id=table_id, created_at=datetime.now(timezone.utc))
        return await self.sync.save_item(Collection.TABLES, table)

    async def delete_table(self, table_id: int) -> SaveResult:
        return await self.sync.delete_item(Collection.TABLES, table_id)

    # ---------- menu ----------

    async def add_menu_item(self, item: Any) -> SaveResult:
        """Add a dish. A blank id gets a generated UUID."""
        if isinstance(item, MenuItem):
            item = item.model_dump()
        item = dict(item)
        if not item.get("id"):
            item["id"] = str(uuid.uuid4())
        menu_item = MenuItem.model_validate(item)
        if menu_item.category not in {category.id for category in self.categories}:
            logger.warning(f"Menu item {menu_item.name!r} uses unknown category {menu_item.category!r}")
        return await self.sync.save_item(Collection.MENU_ITEMS, menu_item)

    async def delete_menu_item(self, item_id: str) -> SaveResult:
        return await self.sync.delete_item(Collection.MENU_ITEMS, item_id)
