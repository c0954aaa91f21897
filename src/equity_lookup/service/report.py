from __future__ import annotations

from typing import Iterable

from equity_lookup.domain.models import Equity

NOT_FOUND = "Not found"
INPUT_INVALID = "Input invalid"
MILLION = 1_000_000.0


def format_equity(equity: Equity) -> str:
    """Ex: code: IBMUS description: ... last price: 182.950 market cap: 198657.057 Million  P/E: 11.180"""
    cap = equity.market_cap / MILLION
    return (
        f"code: {equity.code}"
        f" description: {equity.description}"
        f" last price: {equity.price:.3f}"
        f" market cap: {cap:.3f} Million "
        f" P/E: {equity.pe_ratio:.3f}"
    )


def format_codes(codes: Iterable[str]) -> str:
    return "\n".join(codes)
