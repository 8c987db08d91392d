"""
Inventory persistence used by the status services and routes.

Rows cross this boundary as plain dicts (see InventoryItem.to_schema) so the
services can run against any object with the same coroutine methods.
Fetches used for status updates take row locks; the lock is held until the
caller commits or rolls back.
"""

import logging
import uuid
from typing import Iterable, Optional

from fastapi import Depends
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from core.errors import StorePersistenceError
from db.database import get_async_session
from db.inventory import InventoryItem as InventoryItemModel
from db.inventory import PartNumberHistory as PartNumberHistoryModel
from db.part_number import PartNumber as PartNumberModel

logger = logging.getLogger(__name__)


def _as_uuid(value) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


class InventoryStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    def _items(self):
        return select(InventoryItemModel).options(selectinload(InventoryItemModel.part))

    async def _fail(self, message: str, e: Exception):
        logger.exception("%s: %r", message, e)
        await self.rollback()
        raise StorePersistenceError(message, details=str(e)) from e

    # -- status reads / writes -------------------------------------------------

    async def fetch_status_by_id(self, inventory_id, lock: bool = True) -> Optional[dict]:
        stmt = self._items().where(InventoryItemModel.inventory_id == _as_uuid(inventory_id))
        if lock:
            stmt = stmt.with_for_update(of=InventoryItemModel)
        try:
            res = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            await self._fail("Failed to fetch inventory item", e)
        it = res.scalar_one_or_none()
        return it.to_schema if it else None

    async def fetch_status_by_ids(self, inventory_ids: Iterable, lock: bool = True) -> list[dict]:
        ids = [_as_uuid(i) for i in inventory_ids]
        stmt = self._items().where(InventoryItemModel.inventory_id.in_(ids))
        if lock:
            stmt = stmt.with_for_update(of=InventoryItemModel)
        try:
            res = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            await self._fail("Failed to fetch inventory items", e)
        return [it.to_schema for it in res.scalars().all()]

    async def update_status_by_id(self, inventory_id, patch: dict) -> dict:
        rows = await self.update_status_by_ids([inventory_id], patch)
        if not rows:
            raise StorePersistenceError(
                "Failed to update inventory status",
                details=f"inventory item {inventory_id} disappeared during update",
            )
        return rows[0]

    async def update_status_by_ids(self, inventory_ids: Iterable, patch: dict) -> list[dict]:
        ids = [_as_uuid(i) for i in inventory_ids]
        try:
            await self.db.execute(
                update(InventoryItemModel)
                .where(InventoryItemModel.inventory_id.in_(ids))
                .values(**patch)
                .execution_options(synchronize_session=False)
            )
            res = await self.db.execute(
                self._items()
                .where(InventoryItemModel.inventory_id.in_(ids))
                .execution_options(populate_existing=True)
            )
        except SQLAlchemyError as e:
            await self._fail("Failed to update inventory status", e)
        return [it.to_schema for it in res.scalars().all()]

    # -- listing ---------------------------------------------------------------

    async def list_items(
        self,
        inventory_id=None,
        physical_status: Optional[str] = None,
        business_status: Optional[str] = None,
    ) -> list[dict]:
        stmt = self._items().order_by(InventoryItemModel.updated_at.desc())
        if inventory_id:
            stmt = stmt.where(InventoryItemModel.inventory_id == _as_uuid(inventory_id))
        if physical_status:
            stmt = stmt.where(InventoryItemModel.physical_status == physical_status)
        if business_status:
            stmt = stmt.where(InventoryItemModel.business_status == business_status)
        try:
            res = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            await self._fail("Failed to fetch inventory data", e)
        return [it.to_schema for it in res.scalars().all()]

    async def fetch_item(self, inventory_id) -> Optional[dict]:
        return await self.fetch_status_by_id(inventory_id, lock=False)

    # -- part-number history ---------------------------------------------------

    def _history(self):
        return select(PartNumberHistoryModel).options(
            selectinload(PartNumberHistoryModel.original_pn),
            selectinload(PartNumberHistoryModel.modified_pn),
        )

    async def list_history(self, inventory_id, limit: int = 50, offset: int = 0) -> list[dict]:
        stmt = (
            self._history()
            .where(PartNumberHistoryModel.inventory_id == _as_uuid(inventory_id))
            .order_by(PartNumberHistoryModel.modification_date.desc())
            .offset(offset)
            .limit(limit)
        )
        try:
            res = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            await self._fail("Failed to fetch status history", e)
        return [h.to_schema for h in res.scalars().all()]

    async def fetch_part_numbers(self, pn_ids: Iterable) -> list[dict]:
        ids = [_as_uuid(i) for i in pn_ids]
        try:
            res = await self.db.execute(select(PartNumberModel).where(PartNumberModel.pn_id.in_(ids)))
        except SQLAlchemyError as e:
            await self._fail("Failed to fetch part numbers", e)
        return [p.to_schema for p in res.scalars().all()]

    async def create_history(self, record: dict) -> dict:
        values = dict(record)
        for key in ("inventory_id", "original_pn_id", "modified_pn_id"):
            values[key] = _as_uuid(values[key])
        history_id = uuid.uuid4()
        try:
            self.db.add(PartNumberHistoryModel(history_id=history_id, **values))
            await self.db.flush()
            res = await self.db.execute(
                self._history()
                .where(PartNumberHistoryModel.history_id == history_id)
                .execution_options(populate_existing=True)
            )
        except SQLAlchemyError as e:
            await self._fail("Failed to create status history record", e)
        return res.scalar_one().to_schema

    async def set_part_number(self, inventory_id, pn_id, updated_at) -> None:
        try:
            await self.db.execute(
                update(InventoryItemModel)
                .where(InventoryItemModel.inventory_id == _as_uuid(inventory_id))
                .values(pn_id=_as_uuid(pn_id), updated_at=updated_at)
                .execution_options(synchronize_session=False)
            )
        except SQLAlchemyError as e:
            await self._fail("Failed to update inventory part number", e)

    async def delete_item(self, inventory_id) -> None:
        try:
            await self.db.execute(
                delete(InventoryItemModel).where(InventoryItemModel.inventory_id == _as_uuid(inventory_id))
            )
        except SQLAlchemyError as e:
            await self._fail("Failed to delete inventory item", e)

    # -- transaction -----------------------------------------------------------

    async def commit(self) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self._fail("Failed to commit inventory changes", e)

    async def rollback(self) -> None:
        await self.db.rollback()


async def get_inventory_store(db: AsyncSession = Depends(get_async_session)) -> InventoryStore:
    return InventoryStore(db)
