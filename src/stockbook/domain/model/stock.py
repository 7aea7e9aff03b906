"""Derived stock views.  Nothing here is persisted."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum


class MovementDirection(Enum):
    IN = "IN"
    OUT = "OUT"


@dataclass(frozen=True)
class StockLevel:
    product_id: str
    product_name: str
    received: int
    allocated: int
    threshold_value: int | None
    is_low: bool

    @property
    def available(self) -> int:
        # May be negative: an oversold product is reported, not rejected.
        return self.received - self.allocated


@dataclass(frozen=True)
class StockMovement:
    """One row of the item-tracking history."""

    date: date
    product_id: str
    product_name: str
    details: str
    quantity: int
    unit_name: str
    direction: MovementDirection
