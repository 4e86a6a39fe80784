from __future__ import annotations
from dataclasses import dataclass

from common.money import Number
from portfolio.portfolio import Portfolio

@dataclass(frozen=True)
class User:
    username: str
    portfolio: Portfolio

    def __post_init__(self) -> None:
        if not self.username or not self.username.strip():
            raise ValueError("Username must not be empty")

    @classmethod
    def open(cls, username: str, initial_cash: Number) -> "User":
        return cls(username=username, portfolio=Portfolio(initial_cash))
