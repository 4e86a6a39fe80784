"""Error kinds and the result type returned by ledger operations.

Trading errors are recoverable: a failed operation leaves state untouched and
reports an ``Outcome`` instead of raising. Exceptions are reserved for
configuration problems and for callers that opt in via ``raise_for_error``.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Why an operation was rejected."""

    INVALID_AMOUNT = "invalid_amount"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INSUFFICIENT_HOLDINGS = "insufficient_holdings"
    STOCK_NOT_FOUND = "stock_not_found"
    INVALID_QUANTITY = "invalid_quantity"
    MALFORMED_INPUT = "malformed_input"


class TradingError(Exception):
    """Raised from a failed Outcome when the caller asks for an exception."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


class ConfigError(Exception):
    """Error raised when a configuration file cannot be turned into a session."""

    pass


@dataclass(frozen=True)
class Outcome:
    """Success or failure of a single operation."""

    ok: bool
    error: Optional[ErrorKind] = None
    message: str = ""

    @classmethod
    def success(cls, message: str = "") -> "Outcome":
        return cls(ok=True, message=message)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Outcome":
        return cls(ok=False, error=kind, message=message)

    def __bool__(self) -> bool:
        return self.ok

    def raise_for_error(self) -> None:
        """Raise TradingError if this outcome is a failure."""
        if not self.ok:
            raise TradingError(self.error, self.message)
