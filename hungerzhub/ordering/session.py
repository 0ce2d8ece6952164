from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import parse_qs, urlparse

from pydantic import BaseModel

from ..data.models import Collection, Order, OrderStatus, SaveResult
from ..logging import get_logger
from ..sync.service import SyncService
from .cart import Cart

logger = get_logger(__name__)

TABLE_QUERY_PARAM = "table"


class PlaceOrderResult(BaseModel):
    """Outcome of a checkout attempt."""
    ok: bool
    message: str
    order: Optional[Order] = None
    save: Optional[SaveResult] = None


class OrderSession:
    """
    Customer-side state for one device: the active table and the cart.

    The selected table is remembered in the sync service's fallback store,
    so a reload without the QR query string still knows where to deliver.
    """

    def __init__(self, sync: SyncService, cart: Optional[Cart] = None) -> None:
        self.sync = sync
        self.cart = cart if cart is not None else Cart()
        self.table_id: Optional[int] = None

    @property
    def _table_key(self) -> Optional[str]:
        if self.sync.store is None:
            return None
        return f"{self.sync.store.namespace}.tableId"

    async def known_table_ids(self) -> set:
        result = await self.sync.fetch(Collection.TABLES)
        return {table.id for table in result.value}

    async def select_table(self, table_id: int) -> bool:
        """Make `table_id` the active table if it exists."""
        if table_id not in await self.known_table_ids():
            logger.warning(f"Ignoring unknown table {table_id}")
            return False
        self.table_id = table_id
        if self._table_key is not None:
            self.sync.store.set_item(self._table_key, str(table_id))
        return True

    async def select_table_from_url(self, url: str) -> bool:
        """Pick the table from a scanned link such as ``https://host/menu?table=4``.

        A bare query string (``table=4``) is accepted too.
        """
        query = urlparse(url).query if "?" in url or "://" in url else url
        values = parse_qs(query).get(TABLE_QUERY_PARAM)
        if not values:
            return False
        try:
            table_id = int(values[0])
        except ValueError:
            logger.warning(f"Ignoring non-numeric table parameter {values[0]!r}")
            return False
        return await self.select_table(table_id)

    async def restore_table(self) -> bool:
        """Re-select the table remembered from an earlier visit."""
        if self._table_key is None:
            return False
        stored = self.sync.store.get_item(self._table_key)
        if stored is None:
            return False
        try:
            table_id = int(stored)
        except ValueError:
            return False
        return await self.select_table(table_id)

    async def place_order(self, now: Optional[datetime] = None) -> PlaceOrderResult:
        """Snapshot the cart into a PENDING order and submit it.

        The total is fixed here, coupon discount included, and never recomputed.
        """
        if self.table_id is None:
            return PlaceOrderResult(ok=False, message="Please select a table before placing an order")
        if self.cart.is_empty():
            return PlaceOrderResult(ok=False, message="Your cart is empty")

        now = now or datetime.now(timezone.utc)
        coupon = self.cart.coupon
        order = Order(
            id=f"order-{int(now.timestamp() * 1000)}-{uuid.uuid4().hex[:6]}",
            table_id=self.table_id,
            items=self.cart.items,
            status=OrderStatus.PENDING,
            created_at=now,
            total_amount=self.cart.discounted_total(),
            coupon_code=coupon.code if coupon else None,
            discount_pct=coupon.discount if coupon else 0.0,
        )

        save = await self.sync.save_item(Collection.ORDERS, order)
        self.cart.clear()
        if save.ok:
            message = "Order placed successfully"
        else:
            message = "Order saved on this device only; it was not sent to the kitchen. Please ask the staff for help"
        logger.info(f"Order {order.id} for table {order.table_id}: {order.total_amount:.2f} (synced={save.ok})")
        return PlaceOrderResult(ok=True, message=message, order=order, save=save)
