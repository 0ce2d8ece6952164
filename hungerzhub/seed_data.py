#!/usr/bin/env python3
"""
seed_data.py

Built-in default collections for HungerzHub, and a small CLI that writes them
as JSON files for the file-backed data source.

The defaults double as the last-resort fallback of the sync layer: when the
remote source and the local fallback store both come up empty, these are
what the customer menu shows.

Run:
  python -m hungerzhub.seed_data --out sample_data
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Dict, List

from pydantic import BaseModel

from hungerzhub.config import get_config
from hungerzhub.data.backends.json_backend import FILES
from hungerzhub.data.models import Collection, MenuCategory, MenuItem, Table
from hungerzhub.data.normalize import dump_collection

# -----------------------------
# Defaults
# -----------------------------

DEFAULT_TABLE_COUNT = 10

MENU_CATEGORIES: List[MenuCategory] = [
    MenuCategory(id="chaap-tikkas", name="chaap-tikkas", display_name="Chaap Tikkas"),
    MenuCategory(id="burgers", name="burgers", display_name="Burgers"),
    MenuCategory(id="garlic-bread", name="garlic-bread", display_name="Garlic Bread"),
    MenuCategory(id="pizza", name="pizza", display_name="Pizza"),
    MenuCategory(id="momos-rolls", name="momos-rolls", display_name="Momos & Rolls"),
    MenuCategory(id="lassi", name="lassi", display_name="Lassi"),
    MenuCategory(id="shakes-coffee", name="shakes-coffee", display_name="Shakes & Coffee"),
]

_MENU_ROWS = [
    {"id": "tandoori-chaap-tikka", "name": "Tandoori Chaap Tikka", "price": {"half": 130, "full": 200}, "category": "chaap-tikkas"},
    {"id": "masala-chaap-tikka", "name": "Masala Chaap Tikka", "price": {"half": 120, "full": 180}, "category": "chaap-tikkas"},
    {"id": "malai-chaap-tikka", "name": "Malai Chaap Tikka", "price": {"half": 140, "full": 210}, "category": "chaap-tikkas"},
    {"id": "malai-paneer-tikka", "name": "Malai Paneer Tikka", "price": {"half": 140, "full": 210}, "category": "chaap-tikkas"},
    {"id": "veg-hh-tandoori-plater", "name": "Veg. HH Tandoori Platter", "price": 300, "category": "chaap-tikkas",
     "description": "Paneer, mushroom, chaap and salad", "popular": True},
    {"id": "tadkta-bhadkta-cheesy-burger", "name": "Tadkta Bhadkta Cheesy Burger", "price": 100, "category": "burgers",
     "description": "Mix veg. patty, onion, tomato, cheese slice, paneer, sauces"},
    {"id": "double-decker-cheesy-burger", "name": "Double Decker Cheesy Burger", "price": 100, "category": "burgers",
     "description": "Aloo tikki, herb chili patty, onion, tomato, cheese slice, sauces", "popular": True},
    {"id": "kurkure-burger", "name": "Kurkure Burger", "price": 120, "category": "burgers",
     "description": "Mix veg. patty, onion capsicum, paneer, mozzarella cheese, sauces", "popular": True},
    {"id": "garlic-bread", "name": "Garlic Bread", "price": 100, "category": "garlic-bread"},
    {"id": "stuffed-garlic-bread", "name": "Stuffed Garlic Bread", "price": 120, "category": "garlic-bread"},
    {"id": "margherita-pizza", "name": "Margherita Pizza", "price": {"half": 80, "full": 120}, "category": "pizza",
     "description": "Only cheese", "popular": True},
    {"id": "single-topping-pizza", "name": "Single Topping Pizza", "price": {"half": 90, "full": 135}, "category": "pizza",
     "description": "Choose any 1 (onion/capsicum/tomato/sweet corn)"},
    {"id": "farm-house-pizza", "name": "Farm House Pizza", "price": {"half": 110, "full": 165}, "category": "pizza",
     "description": "Onion, capsicum, tomato"},
    {"id": "tandoori-spring-roll", "name": "Tandoori Spring Roll", "price": 140, "category": "momos-rolls"},
]


def default_tables() -> List[Table]:
    return [Table(id=n) for n in range(1, DEFAULT_TABLE_COUNT + 1)]


def default_menu_items() -> List[MenuItem]:
    return [MenuItem.model_validate(row) for row in _MENU_ROWS]


def default_collection(collection: Collection) -> List[BaseModel]:
    """Fresh copy of the built-in data for `collection`. Orders start empty."""
    if collection is Collection.TABLES:
        return default_tables()
    if collection is Collection.MENU_ITEMS:
        return default_menu_items()
    return []


# -----------------------------
# CLI
# -----------------------------

def write_seed_files(out_dir: Path, overwrite: bool = False) -> Dict[Collection, Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    written: Dict[Collection, Path] = {}
    for collection, filename in FILES.items():
        path = out_dir / filename
        if path.exists() and not overwrite:
            continue
        rows = dump_collection(default_collection(collection))
        path.write_text(json.dumps(rows, indent=2), encoding="utf-8")
        written[collection] = path
    return written


def main(argv: List[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Write HungerzHub seed data as JSON files.")
    ap.add_argument("--out", default=None, help="Output folder (default: DATA_DIR from config)")
    ap.add_argument("--overwrite", action="store_true", help="Replace files that already exist")
    args = ap.parse_args(argv)

    out_dir = Path(args.out or get_config().data_dir)
    written = write_seed_files(out_dir, overwrite=args.overwrite)

    if not written:
        print(f"Nothing to do: seed files already present in {out_dir} (use --overwrite)")
        return
    for collection, path in written.items():
        print(f"Wrote {collection.value} -> {path}")


if __name__ == "__main__":
    main()
