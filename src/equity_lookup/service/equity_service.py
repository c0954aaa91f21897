from __future__ import annotations

import enum
import logging
from typing import Iterable

from equity_lookup.domain.errors import (
    InitializationError,
    InputReadError,
    MissingHeaderError,
    ServiceStateError,
)
from equity_lookup.domain.index import EquityIndex
from equity_lookup.domain.models import Equity
from equity_lookup.service.loader import LoadSummary, RejectHandler, load_equities

logger = logging.getLogger(__name__)


class ServiceState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


class EquityService:
    """
    Owns the equity index and exposes the read-only queries over it.

    Until ``initialize`` succeeds every query answers as if the index were
    empty. After that the index is frozen and safe to share between readers.
    """

    def __init__(self) -> None:
        self._index = EquityIndex()
        self._state = ServiceState.UNINITIALIZED
        self._summary: LoadSummary | None = None

    @property
    def state(self) -> ServiceState:
        return self._state

    @property
    def summary(self) -> LoadSummary | None:
        return self._summary

    def initialize(
        self, lines: Iterable[str], on_reject: RejectHandler | None = None
    ) -> LoadSummary:
        if self._state is ServiceState.READY:
            raise ServiceStateError("EquityService is already initialized")

        index = EquityIndex()
        try:
            summary = load_equities(lines, index, on_reject=on_reject)
        except MissingHeaderError:
            logger.error("Falha ao inicializar | motivo=cabeçalho ausente")
            raise
        except (InputReadError, OSError, UnicodeDecodeError) as exc:
            logger.error("Falha ao inicializar | erro=%s", exc)
            raise InitializationError(f"Failed to read input: {exc}") from exc

        index.freeze()
        self._index = index
        self._summary = summary
        self._state = ServiceState.READY
        return summary

    def get_security_info(self, code: str) -> Equity | None:
        return self._index.find(code)

    def all_security_codes(self) -> list[str]:
        return [equity.code for equity in self._index.iter_ascending()]

    def lowest_pe(self) -> str | None:
        best = self._index.select_extremal(_lower_pe_then_price)
        return best.code if best is not None else None

    def get_pe_range(self, min_pe: float, max_pe: float) -> list[Equity]:
        if min_pe > max_pe:
            return []
        return list(self._index.select(lambda e: min_pe <= e.pe_ratio <= max_pe))


def _lower_pe_then_price(candidate: Equity, current: Equity) -> bool:
    return (candidate.pe_ratio, candidate.price) < (current.pe_ratio, current.price)
