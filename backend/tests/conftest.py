import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from core.errors import StorePersistenceError
from db.inventory_store import get_inventory_store
from main import app


def _plain(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def make_item(
    physical_status: str = "depot",
    business_status: str = "available",
    part_number: str = "2314-1",
    inventory_id: Optional[str] = None,
    pn_id: Optional[str] = None,
) -> dict:
    return {
        "inventory_id": inventory_id or str(uuid.uuid4()),
        "pn_id": pn_id or str(uuid.uuid4()),
        "part_number": part_number,
        "description": None,
        "sn": None,
        "location": None,
        "po_price": None,
        "remarks": None,
        "notes": None,
        "status": None,
        "physical_status": physical_status,
        "business_status": business_status,
        "status_updated_at": None,
        "status_updated_by": None,
        "created_at": "2026-01-05T09:00:00+00:00",
        "updated_at": "2026-01-05T09:00:00+00:00",
    }


class FakeInventoryStore:
    """In-memory stand-in for db.inventory_store.InventoryStore.

    Writes are staged and only become visible in `rows` on commit.
    """

    def __init__(self, rows=(), part_numbers=()):
        self.rows = {r["inventory_id"]: dict(r) for r in rows}
        self.part_numbers = {p["pn_id"]: dict(p) for p in part_numbers}
        self.history: list[dict] = []
        self._staged: dict[str, dict] = {}
        self._deleted: set[str] = set()
        self._staged_history: list[dict] = []
        self.calls: list[str] = []
        self.update_patches: list[dict] = []
        self.commits = 0
        self.rollbacks = 0
        self.fail_on: set[str] = set()

    def add(self, row: dict) -> dict:
        self.rows[row["inventory_id"]] = dict(row)
        return row

    def _check(self, name: str):
        self.calls.append(name)
        if name in self.fail_on:
            raise StorePersistenceError(f"{name} failed", details="connection refused")

    def _view(self, inventory_id) -> Optional[dict]:
        key = str(inventory_id)
        if key in self._deleted or key not in self.rows:
            return None
        return {**self.rows[key], **self._staged.get(key, {})}

    async def fetch_status_by_id(self, inventory_id, lock=True):
        self._check("fetch_status_by_id")
        return self._view(inventory_id)

    async def fetch_status_by_ids(self, inventory_ids, lock=True):
        self._check("fetch_status_by_ids")
        out = []
        for i in inventory_ids:
            row = self._view(i)
            if row is not None:
                out.append(row)
        return out

    async def update_status_by_id(self, inventory_id, patch):
        rows = await self.update_status_by_ids([inventory_id], patch)
        return rows[0]

    async def update_status_by_ids(self, inventory_ids, patch):
        self._check("update_status_by_ids")
        self.update_patches.append(dict(patch))
        out = []
        for i in inventory_ids:
            key = str(i)
            if self._view(key) is None:
                continue
            staged = self._staged.setdefault(key, {})
            staged.update({k: _plain(v) for k, v in patch.items()})
            out.append(self._view(key))
        return out

    async def list_items(self, inventory_id=None, physical_status=None, business_status=None):
        self._check("list_items")
        out = []
        for key in self.rows:
            row = self._view(key)
            if row is None:
                continue
            if inventory_id and key != str(inventory_id):
                continue
            if physical_status and row["physical_status"] != physical_status:
                continue
            if business_status and row["business_status"] != business_status:
                continue
            out.append(row)
        return sorted(out, key=lambda r: r["updated_at"], reverse=True)

    async def fetch_item(self, inventory_id):
        self._check("fetch_item")
        return self._view(inventory_id)

    async def list_history(self, inventory_id, limit=50, offset=0):
        self._check("list_history")
        rows = [h for h in self.history if h["inventory_id"] == str(inventory_id)]
        return rows[offset:offset + limit]

    async def fetch_part_numbers(self, pn_ids):
        self._check("fetch_part_numbers")
        return [dict(self.part_numbers[str(i)]) for i in pn_ids if str(i) in self.part_numbers]

    async def create_history(self, record):
        self._check("create_history")
        row = {k: _plain(v) for k, v in record.items()}
        for key in ("inventory_id", "original_pn_id", "modified_pn_id"):
            row[key] = str(row[key])
        row["history_id"] = str(uuid.uuid4())
        self._staged_history.append(row)
        return dict(row)

    async def set_part_number(self, inventory_id, pn_id, updated_at):
        self._check("set_part_number")
        staged = self._staged.setdefault(str(inventory_id), {})
        staged.update({"pn_id": str(pn_id), "updated_at": _plain(updated_at)})

    async def delete_item(self, inventory_id):
        self._check("delete_item")
        self._deleted.add(str(inventory_id))

    async def commit(self):
        self._check("commit")
        for key, patch in self._staged.items():
            if key in self.rows:
                self.rows[key].update(patch)
        for key in self._deleted:
            self.rows.pop(key, None)
        self.history.extend(self._staged_history)
        self._reset_staging()
        self.commits += 1

    async def rollback(self):
        self._reset_staging()
        self.rollbacks += 1

    def _reset_staging(self):
        self._staged = {}
        self._deleted = set()
        self._staged_history = []


@pytest.fixture
def store():
    return FakeInventoryStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_inventory_store] = lambda: store
    # No context manager: the lifespan would try to reach the real database
    yield TestClient(app)
    app.dependency_overrides.clear()
