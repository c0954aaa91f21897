from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Equity:
    code: str
    description: str
    market_cap: int
    price: float
    pe_ratio: float
