from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict

from common.money import format_money, to_decimal
from market.stock import Stock

class Side(str, Enum):
    BUY = "BUY"
    SELL = "SELL"

@dataclass(frozen=True)
class Transaction:
    """One executed buy or sell. Entries are never modified once logged."""

    stock: Stock
    quantity: int
    price: Decimal  # execution price per share
    side: Side
    timestamp: datetime

    def __post_init__(self) -> None:
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity <= 0:
            raise ValueError(f"Transaction quantity must be a positive integer, got {self.quantity!r}")
        price = to_decimal(self.price)
        if price < 0:
            raise ValueError(f"Transaction price must be >= 0, got {price}")
        object.__setattr__(self, "price", price)
        if not isinstance(self.timestamp, datetime):
            raise ValueError(f"Transaction timestamp must be a datetime, got {self.timestamp!r}")
        object.__setattr__(self, "side", Side(self.side))

    @property
    def symbol(self) -> str:
        return self.stock.symbol

    @property
    def total(self) -> Decimal:
        return self.price * self.quantity

    def to_record(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(sep=" ", timespec="seconds"),
            "side": self.side.value,
            "symbol": self.symbol,
            "name": self.stock.name,
            "quantity": self.quantity,
            "price": self.price,
            "total": self.total,
        }

    def __str__(self) -> str:
        return (
            f"{self.timestamp:%Y-%m-%d %H:%M:%S} {self.side.value:<4} {self.symbol:<5} "
            f"{self.stock.name:<15} Qty: {self.quantity:<5} @ ${self.price:.2f} "
            f"Total: {format_money(self.total)}"
        )
