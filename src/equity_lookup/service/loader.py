from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from equity_lookup.domain.errors import MissingHeaderError
from equity_lookup.domain.index import EquityIndex
from equity_lookup.infrastructure.text.parser import Rejection, parse_equity

logger = logging.getLogger(__name__)

RejectHandler = Callable[[Rejection], None]


@dataclass(frozen=True)
class LoadSummary:
    accepted: int
    rejected: int
    replaced: int


def load_equities(
    lines: Iterable[str],
    sink: EquityIndex,
    on_reject: RejectHandler | None = None,
) -> LoadSummary:
    """
    Descarta o cabeçalho, interpreta cada linha restante e insere no índice.

    Linhas inválidas são contadas e repassadas a ``on_reject``; nunca
    interrompem a carga. Só a ausência de cabeçalho (ou uma falha da própria
    fonte de linhas) é propagada.
    """
    iterator = iter(lines)
    try:
        header = next(iterator)
    except StopIteration:
        raise MissingHeaderError("No header line in input") from None
    logger.debug("Cabeçalho descartado | cabeçalho=%s", _strip_eol(header))

    accepted = 0
    rejected = 0
    replaced = 0
    for raw in iterator:
        line = _strip_eol(raw)
        result = parse_equity(line)
        if isinstance(result, Rejection):
            rejected += 1
            if on_reject is not None:
                on_reject(result)
            continue

        if sink.insert(result):
            replaced += 1
        accepted += 1
        logger.debug("Inserido | código=%s", result.code)

    summary = LoadSummary(accepted=accepted, rejected=rejected, replaced=replaced)
    logger.info(
        "Carga concluída | aceitos=%s | rejeitados=%s | substituídos=%s | residentes=%s",
        summary.accepted,
        summary.rejected,
        summary.replaced,
        len(sink),
    )
    return summary


def _strip_eol(line: str) -> str:
    return line.rstrip("\r\n")
