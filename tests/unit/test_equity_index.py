import pytest

from equity_lookup.domain.errors import IndexFrozenError
from equity_lookup.domain.index import EquityIndex
from equity_lookup.domain.models import Equity


def _equity(code: str, pe: float = 1.0, price: float = 1.0, description: str = "") -> Equity:
    return Equity(code=code, description=description, market_cap=1, price=price, pe_ratio=pe)


def test_insert_find_and_replace() -> None:
    index = EquityIndex()
    assert index.insert(_equity("IBMUS", description="old")) is False
    assert index.insert(_equity("IBMUS", description="new")) is True
    assert len(index) == 1
    assert "IBMUS" in index
    assert index.find("IBMUS").description == "new"
    assert index.find("MISSING") is None


def test_iteration_is_ascending_and_restartable() -> None:
    index = EquityIndex()
    for code in ("MSFTUS", "30HK", "AALLN", "5HK"):
        index.insert(_equity(code))

    first = [e.code for e in index.iter_ascending()]
    assert first == ["30HK", "5HK", "AALLN", "MSFTUS"]
    assert [e.code for e in index.iter_ascending()] == first

    index.insert(_equity("BPLN"))
    assert [e.code for e in index.iter_ascending()] == ["30HK", "5HK", "AALLN", "BPLN", "MSFTUS"]


def test_select_filters_in_code_order() -> None:
    index = EquityIndex()
    for code, pe in (("C", 5.0), ("A", 7.0), ("B", 1.0), ("D", 9.0)):
        index.insert(_equity(code, pe=pe))
    selected = index.select(lambda e: e.pe_ratio >= 5.0)
    assert [e.code for e in selected] == ["A", "C", "D"]


def test_select_extremal_empty_and_single() -> None:
    calls = []

    def prefer(a: Equity, b: Equity) -> bool:
        calls.append((a, b))
        return a.pe_ratio < b.pe_ratio

    index = EquityIndex()
    assert index.select_extremal(prefer) is None

    index.insert(_equity("ONLY"))
    assert index.select_extremal(prefer).code == "ONLY"
    assert calls == []


def test_select_extremal_keeps_first_seen_on_tie() -> None:
    index = EquityIndex()
    for code in ("ZZ", "MM", "AA"):
        index.insert(_equity(code, pe=3.0))
    best = index.select_extremal(lambda a, b: a.pe_ratio < b.pe_ratio)
    assert best.code == "AA"


def test_freeze_blocks_insert() -> None:
    index = EquityIndex()
    index.insert(_equity("IBMUS"))
    index.freeze()
    assert index.frozen
    with pytest.raises(IndexFrozenError):
        index.insert(_equity("AAPLUS"))
    assert [e.code for e in index.iter_ascending()] == ["IBMUS"]
