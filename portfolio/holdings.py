from __future__ import annotations
from collections.abc import Mapping
from typing import Dict, Iterator

class Holdings(Mapping):
    """Symbol -> share count. Every stored quantity is positive."""

    def __init__(self) -> None:
        self._qty: Dict[str, int] = {}

    def __getitem__(self, symbol: str) -> int:
        if not isinstance(symbol, str):
            raise KeyError(symbol)
        return self._qty[symbol.strip().upper()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._qty)

    def __len__(self) -> int:
        return len(self._qty)

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and symbol.strip().upper() in self._qty

    def quantity(self, symbol: str) -> int:
        return self._qty.get(symbol.strip().upper(), 0)

    def adjust(self, symbol: str, delta: int) -> int:
        """Apply delta to a symbol's quantity and return the new quantity.

        The entry is dropped when it reaches zero. A delta that would take the
        quantity below zero raises ValueError and leaves the mapping untouched.
        """
        if delta == 0:
            raise ValueError("delta must be non-zero")
        key = symbol.strip().upper()
        new_qty = self._qty.get(key, 0) + delta
        if new_qty < 0:
            raise ValueError(f"Cannot adjust {key} by {delta}: only {self._qty.get(key, 0)} held")
        if new_qty == 0:
            del self._qty[key]
        else:
            self._qty[key] = new_qty
        return new_qty

    def snapshot(self) -> Dict[str, int]:
        return dict(self._qty)

    def __repr__(self) -> str:
        return f"Holdings({self._qty!r})"
