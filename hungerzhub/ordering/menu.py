from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from ..data.models import MenuCategory, MenuItem


def popular_items(items: Iterable[MenuItem]) -> List[MenuItem]:
    return [item for item in items if item.popular]


def group_by_category(
    items: Iterable[MenuItem],
    categories: Iterable[MenuCategory],
) -> Tuple[Dict[str, List[MenuItem]], List[MenuItem]]:
    """Bucket items under their category, in category order.

    Returns:
        (sections, uncategorized): sections keyed by category id, empty ones
        dropped; items whose tag matches no known category come back separately.
    """
    sections: Dict[str, List[MenuItem]] = {category.id: [] for category in categories}
    uncategorized: List[MenuItem] = []
    for item in items:
        if item.category in sections:
            sections[item.category].append(item)
        else:
            uncategorized.append(item)
    return {key: value for key, value in sections.items() if value}, uncategorized
