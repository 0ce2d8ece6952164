from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from ...config import get_config
from ..interface import RemoteDataSource, RowId
from ..models import Collection

FILES: Dict[Collection, str] = {
    Collection.TABLES: "tables.json",
    Collection.MENU_ITEMS: "menu.json",
    Collection.ORDERS: "orders.json",
}


def _row_id(row: Any) -> Any:
    # tables.json may hold bare table numbers
    if isinstance(row, dict):
        return row.get("id")
    return row


class JsonFileDataSource(RemoteDataSource):
    """
    JSON-file-backed implementation for local development.
    - One file per collection under `data_dir` (tables.json, menu.json, orders.json).
    - Every call re-reads or rewrites the file, so edits made outside the
      process are picked up on the next fetch.
    """

    def __init__(self, data_dir: str | Path = None) -> None:
        if data_dir is None:
            data_dir = get_config().data_dir

        self.data_dir = Path(data_dir)

        # If the path is relative, make it relative to the repository root
        if not self.data_dir.is_absolute():
            current = Path.cwd()
            repo_root = None

            for parent in [current] + list(current.parents):
                if (parent / "pyproject.toml").exists():
                    repo_root = parent
                    break

            self.data_dir = (repo_root or current) / self.data_dir

        if not self.data_dir.exists():
            raise FileNotFoundError(
                f"Data directory not found: {self.data_dir}\n"
                f"Please either:\n"
                f"  1. Generate sample data: python -m hungerzhub.seed_data --out {self.data_dir}\n"
                f"  2. Set DATA_DIR environment variable to point to your data directory\n"
                f"  3. Create a .env file with DATA_DIR=/path/to/your/data"
            )

    # ---------- file helpers ----------

    def _file(self, collection: Collection) -> Path:
        return self.data_dir / FILES[collection]

    def _read(self, collection: Collection) -> Any:
        path = self._file(collection)
        if not path.exists():
            return []
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise RuntimeError(f"Error reading {path}: {e}") from e

    def _write(self, collection: Collection, rows: Any) -> None:
        path = self._file(collection)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(json.dumps(rows, indent=2), encoding="utf-8")
        tmp.replace(path)

    def _rows(self, collection: Collection) -> List[Any]:
        rows = self._read(collection)
        if not isinstance(rows, list):
            raise RuntimeError(f"{self._file(collection)} does not contain a JSON array")
        return rows

    # ---------- interface implementation ----------

    async def list(self, collection: Collection) -> Any:
        return self._read(collection)

    async def replace(self, collection: Collection, rows: List[Dict[str, Any]]) -> None:
        self._write(collection, rows)

    async def create(self, collection: Collection, row: Dict[str, Any]) -> Any:
        rows = self._rows(collection)
        if any(_row_id(existing) == row.get("id") for existing in rows):
            raise ValueError(f"{collection.value}: id {row.get('id')!r} already exists")
        rows.append(row)
        self._write(collection, rows)
        return row

    async def update(self, collection: Collection, row_id: RowId, row: Dict[str, Any]) -> Any:
        rows = self._rows(collection)
        for index, existing in enumerate(rows):
            if _row_id(existing) == row_id:
                rows[index] = row
                break
        else:
            raise KeyError(f"{collection.value}: no row with id {row_id!r}")
        self._write(collection, rows)
        return row

    async def delete(self, collection: Collection, row_id: RowId) -> None:
        rows = self._rows(collection)
        remaining = [existing for existing in rows if _row_id(existing) != row_id]
        if len(remaining) == len(rows):
            raise KeyError(f"{collection.value}: no row with id {row_id!r}")
        self._write(collection, remaining)
