from __future__ import annotations

import logging
from typing import Callable, Iterator

from equity_lookup.domain.errors import IndexFrozenError
from equity_lookup.domain.models import Equity

logger = logging.getLogger(__name__)

Predicate = Callable[[Equity], bool]
Preference = Callable[[Equity, Equity], bool]


class EquityIndex:
    """
    Coleção de Equity indexada por código, com iteração em ordem alfabética.

    Busca pontual via dict; a ordem crescente dos códigos é materializada uma
    única vez (no primeiro acesso ou em ``freeze()``) e reaproveitada enquanto
    não houver inserção de código novo.
    """

    def __init__(self) -> None:
        self._by_code: dict[str, Equity] = {}
        self._ordered: tuple[str, ...] | None = ()
        self._frozen = False

    def __len__(self) -> int:
        return len(self._by_code)

    def __contains__(self, code: object) -> bool:
        return code in self._by_code

    @property
    def frozen(self) -> bool:
        return self._frozen

    def insert(self, equity: Equity) -> bool:
        """Insere ou substitui pelo código. Retorna True se substituiu um registro."""
        if self._frozen:
            raise IndexFrozenError(f"Index is frozen; cannot insert {equity.code!r}")
        replaced = equity.code in self._by_code
        self._by_code[equity.code] = equity
        if not replaced:
            self._ordered = None
        return replaced

    def find(self, code: str) -> Equity | None:
        return self._by_code.get(code)

    def freeze(self) -> None:
        self._ordered_codes()
        self._frozen = True
        logger.debug("Índice publicado | registros=%s", len(self._by_code))

    def iter_ascending(self) -> Iterator[Equity]:
        by_code = self._by_code
        for code in self._ordered_codes():
            yield by_code[code]

    def select(self, predicate: Predicate) -> Iterator[Equity]:
        for equity in self.iter_ascending():
            if predicate(equity):
                yield equity

    def select_extremal(self, prefer: Preference) -> Equity | None:
        """
        Percorre os registros em ordem crescente de código e devolve o que
        ``prefer(candidato, atual)`` escolhe. Empates mantêm o primeiro visto.
        """
        best: Equity | None = None
        for equity in self.iter_ascending():
            if best is None or prefer(equity, best):
                best = equity
        return best

    def _ordered_codes(self) -> tuple[str, ...]:
        ordered = self._ordered
        if ordered is None:
            ordered = tuple(sorted(self._by_code))
            self._ordered = ordered
        return ordered
