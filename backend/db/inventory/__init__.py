"""
Inventory (dual status: physical + business).

Models:
- InventoryItem (one serialised unit of a catalog part number)
- PartNumberHistory (part-number modifications applied to an item)
"""

from db.part_number import PartNumber  # noqa: F401
from .item import InventoryItem
from .history import PartNumberHistory

__all__ = ["InventoryItem", "PartNumberHistory"]
