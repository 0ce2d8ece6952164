from __future__ import annotations

from typing import Iterable

import pandas as pd

from ..data.models import Order, OrderStatus

ORDER_COLUMNS = [
    "order_id", "table_id", "status", "created_at", "items", "units",
    "total_amount", "coupon_code", "payment_status",
]


def orders_frame(orders: Iterable[Order]) -> pd.DataFrame:
    """One row per order, newest first."""
    rows = [
        {
            "order_id": order.id,
            "table_id": order.table_id,
            "status": order.status.value,
            "created_at": order.created_at,
            "items": len(order.items),
            "units": sum(item.quantity for item in order.items),
            "total_amount": float(order.total_amount),
            "coupon_code": order.coupon_code,
            "payment_status": order.payment_status,
        }
        for order in orders
    ]
    df = pd.DataFrame(rows, columns=ORDER_COLUMNS)
    if df.empty:
        return df
    return df.sort_values("created_at", ascending=False).reset_index(drop=True)


def status_summary(orders: Iterable[Order]) -> pd.DataFrame:
    """Order count and revenue per status; every status is present, in kitchen order."""
    df = orders_frame(orders)
    statuses = [status.value for status in OrderStatus]
    summary = (
        df.groupby("status")
          .agg(orders=("order_id", "count"), revenue=("total_amount", "sum"))
          .reindex(statuses, fill_value=0)
          .rename_axis("status")
          .reset_index()
    )
    summary["orders"] = summary["orders"].astype(int)
    summary["revenue"] = summary["revenue"].astype(float)
    return summary
