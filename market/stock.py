from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal

from common.money import to_decimal

@dataclass(frozen=True)
class Stock:
    symbol: str  # canonical uppercase
    name: str
    price: Decimal

    def __post_init__(self) -> None:
        canonical = self.symbol.strip().upper()
        if not canonical:
            raise ValueError("Stock symbol must not be empty")
        price = to_decimal(self.price)
        if price < 0:
            raise ValueError(f"Price of {canonical} must be >= 0, got {price}")
        object.__setattr__(self, "symbol", canonical)
        object.__setattr__(self, "price", price)

    def __str__(self) -> str:
        return f"{self.symbol:<5} {self.name:<15} ${self.price:.2f}"
