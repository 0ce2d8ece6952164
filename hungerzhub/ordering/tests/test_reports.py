from datetime import datetime, timedelta, timezone

from hungerzhub.data.models import CartItem, MenuItem, Order, OrderStatus
from hungerzhub.ordering.menu import group_by_category, popular_items
from hungerzhub.ordering.reports import orders_frame, status_summary
from hungerzhub.seed_data import MENU_CATEGORIES, default_menu_items

START = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
ROLL = MenuItem(id="r1", name="Spring Roll", price=140, category="momos-rolls")


def make_order(n, status, total):
    return Order(
        id=f"o{n}",
        table_id=n,
        items=[CartItem(menu_item=ROLL, quantity=2)],
        status=status,
        created_at=START + timedelta(minutes=n),
        total_amount=total,
    )


def test_orders_frame_newest_first():
    df = orders_frame([make_order(1, OrderStatus.PENDING, 280), make_order(2, OrderStatus.COOKING, 252)])
    assert list(df["order_id"]) == ["o2", "o1"]
    assert list(df["units"]) == [2, 2]


def test_status_summary_lists_every_status():
    summary = status_summary([
        make_order(1, OrderStatus.PENDING, 280),
        make_order(2, OrderStatus.PENDING, 140),
        make_order(3, OrderStatus.DELIVERED, 252),
    ])
    assert list(summary["status"]) == ["PENDING", "COOKING", "DELIVERED"]
    assert list(summary["orders"]) == [2, 0, 1]
    assert list(summary["revenue"]) == [420.0, 0.0, 252.0]


def test_status_summary_of_nothing():
    summary = status_summary([])
    assert list(summary["orders"]) == [0, 0, 0]


def test_menu_grouping_and_popular():
    items = default_menu_items() + [MenuItem(id="z", name="Mystery", price=1, category="unknown")]
    sections, uncategorized = group_by_category(items, MENU_CATEGORIES)
    assert list(sections)[:2] == ["chaap-tikkas", "burgers"]
    assert "lassi" not in sections
    assert [i.id for i in uncategorized] == ["z"]
    assert all(i.popular for i in popular_items(items))
    assert "margherita-pizza" in {i.id for i in popular_items(items)}
