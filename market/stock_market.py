"""Static market of listed stocks.

Prices are fixed for the lifetime of a session; the market is only read by
the trade engine and by portfolio valuation.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional

from market.stock import Stock

DEFAULT_LISTINGS = (
    Stock("AAPL", "Apple Inc.", "175.00"),
    Stock("MSFT", "Microsoft Corp.", "420.00"),
    Stock("GOOG", "Alphabet Inc.", "150.00"),
    Stock("AMZN", "Amazon.com Inc.", "180.00"),
    Stock("TSLA", "Tesla Inc.", "185.00"),
)


def normalize_symbol(symbol: str) -> str:
    return symbol.strip().upper()


@dataclass(frozen=True)
class StockMarket:
    """Symbol -> Stock lookup, in listing order."""

    stocks: Dict[str, Stock] = field(default_factory=dict)

    @classmethod
    def from_listings(cls, listings: Iterable[Stock]) -> "StockMarket":
        """Build a market, rejecting duplicate symbols.

        Args:
            listings: Stocks in the order they should be listed.

        Returns:
            A new StockMarket.
        """
        stocks: Dict[str, Stock] = {}
        for s in listings:
            if s.symbol in stocks:
                raise ValueError(f"Duplicate listing for {s.symbol}")
            stocks[s.symbol] = s
        return cls(stocks=stocks)

    @classmethod
    def default(cls) -> "StockMarket":
        return cls.from_listings(DEFAULT_LISTINGS)

    def lookup(self, symbol: str) -> Optional[Stock]:
        """Case-insensitive lookup; None when the symbol is not listed."""
        return self.stocks.get(normalize_symbol(symbol))

    def list_all(self) -> List[Stock]:
        return list(self.stocks.values())

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and normalize_symbol(symbol) in self.stocks

    def __len__(self) -> int:
        return len(self.stocks)

    def __iter__(self) -> Iterator[Stock]:
        return iter(self.stocks.values())
