from __future__ import annotations

import enum
from dataclasses import dataclass

from equity_lookup.domain.models import Equity
from equity_lookup.utils.numbers import ltrim, parse_amount, parse_count

DELIMITER = "|"
FIELD_COUNT = 5
CODE_MAX_LEN = 6
CODE_CHARS = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789")

# Code|Description|Market Cap|Price|P/E Ratio
F_CODE, F_DESCRIPTION, F_MARKET_CAP, F_PRICE, F_PE_RATIO = range(FIELD_COUNT)


class RejectReason(enum.Enum):
    FIELD_COUNT = "field_count"
    CODE = "code"
    MARKET_CAP = "market_cap"
    PRICE = "price"
    PE_RATIO = "pe_ratio"


@dataclass(frozen=True, slots=True)
class Rejection:
    line: str
    reason: RejectReason
    detail: str = ""


def parse_equity(raw_line: str) -> Equity | Rejection:
    """
    Interpreta uma linha no formato
    ``IBMUS|International Business Machines|198657057012|182.95|11.18``.

    Não imprime nem registra nada: linhas inválidas viram uma Rejection.
    """
    fields = raw_line.split(DELIMITER)
    # "A|B|C|D|E|" ainda tem 5 campos: um único delimitador final é tolerado.
    if len(fields) > 1 and fields[-1] == "":
        fields.pop()
    if len(fields) != FIELD_COUNT:
        return Rejection(
            raw_line,
            RejectReason.FIELD_COUNT,
            f"expected {FIELD_COUNT} fields, got {len(fields)}",
        )

    try:
        code = parse_code(fields[F_CODE])
    except ValueError as exc:
        return Rejection(raw_line, RejectReason.CODE, str(exc))

    numeric = (
        (RejectReason.MARKET_CAP, parse_count, fields[F_MARKET_CAP]),
        (RejectReason.PRICE, parse_amount, fields[F_PRICE]),
        (RejectReason.PE_RATIO, parse_amount, fields[F_PE_RATIO]),
    )
    values: list[int | float] = []
    for reason, convert, field in numeric:
        try:
            values.append(convert(field))
        except ValueError as exc:
            return Rejection(raw_line, reason, str(exc))

    market_cap, price, pe_ratio = values
    return Equity(
        code=code,
        description=fields[F_DESCRIPTION],
        market_cap=market_cap,
        price=price,
        pe_ratio=pe_ratio,
    )


def parse_code(value: str) -> str:
    code = ltrim(value)
    if not code or len(code) > CODE_MAX_LEN:
        raise ValueError(f"Code length must be 1..{CODE_MAX_LEN}: {value!r}")
    if not CODE_CHARS.issuperset(code):
        raise ValueError(f"Code must match [A-Z0-9]: {value!r}")
    return code
