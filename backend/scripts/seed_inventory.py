"""
Seed a small part-number catalog and inventory items in each common status combination.

Run locally:
  python backend/scripts/seed_inventory.py

It uses the same DATABASE_* env vars as the backend (dotenv supported by core.config).
Idempotent: part numbers are matched by pn, and items by (pn, sn).
"""

from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Allow running from repo root by ensuring `backend/` is on sys.path
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from sqlalchemy import select  # noqa: E402

from core.statuses import BusinessStatus, PhysicalStatus, get_status_display_info  # noqa: E402
from db.database import async_session_maker, create_db_and_tables  # noqa: E402
from db.inventory import InventoryItem  # noqa: E402
from db.part_number import PartNumber  # noqa: E402


@dataclass(frozen=True)
class SeedItem:
    pn: str
    description: str
    sn: str
    physical_status: PhysicalStatus
    business_status: BusinessStatus
    location: Optional[str] = None
    po_price: Optional[float] = None


SEED_ITEMS: list[SeedItem] = [
    SeedItem("2314-1", "Fuel pump assembly", "FP-10021", PhysicalStatus.DEPOT, BusinessStatus.AVAILABLE, "A-01", 4200.0),
    SeedItem("2314-1", "Fuel pump assembly", "FP-10022", PhysicalStatus.DEPOT, BusinessStatus.RESERVED, "A-01", 4200.0),
    SeedItem("3618-204", "Starter generator", "SG-55410", PhysicalStatus.IN_REPAIR, BusinessStatus.AVAILABLE, None, 12850.0),
    SeedItem("3618-204", "Starter generator", "SG-55411", PhysicalStatus.IN_TRANSIT, BusinessStatus.SOLD, None, 12850.0),
    SeedItem("822-1004", "VHF comm transceiver", "VC-7781", PhysicalStatus.IN_TRANSIT, BusinessStatus.AVAILABLE, None, 6100.0),
]


async def main() -> None:
    await create_db_and_tables()

    async with async_session_maker() as db:
        parts: dict[str, PartNumber] = {}
        for s in SEED_ITEMS:
            if s.pn in parts:
                continue
            res = await db.execute(select(PartNumber).where(PartNumber.pn == s.pn))
            part = res.scalar_one_or_none()
            if not part:
                part = PartNumber(pn=s.pn, description=s.description)
                db.add(part)
                await db.flush()
            parts[s.pn] = part

        created = 0
        for s in SEED_ITEMS:
            part = parts[s.pn]
            res = await db.execute(
                select(InventoryItem).where(InventoryItem.pn_id == part.pn_id, InventoryItem.sn == s.sn)
            )
            if res.scalar_one_or_none():
                continue
            display = get_status_display_info(s.physical_status, s.business_status)
            db.add(
                InventoryItem(
                    pn_id=part.pn_id,
                    sn=s.sn,
                    location=s.location,
                    po_price=s.po_price,
                    status=display.legacy_status,
                    physical_status=s.physical_status,
                    business_status=s.business_status,
                )
            )
            created += 1

        await db.commit()
        print(f"Done. Part numbers: {len(parts)}. Inventory items created: {created}.")


if __name__ == "__main__":
    asyncio.run(main())
