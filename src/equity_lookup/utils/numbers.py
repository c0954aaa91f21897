from __future__ import annotations

import math

LEADING_WHITESPACE = " \t\n\r\b"
DIGITS = frozenset("0123456789")
DECIMAL_CHARS = DIGITS | {"."}
INT64_MAX = 2**63 - 1


def ltrim(value: str) -> str:
    return value.lstrip(LEADING_WHITESPACE)


def parse_count(value: str) -> int:
    """
    Converte um campo só de dígitos (ex: " 198657057012") para int.
    Lança ValueError se houver caractere fora de 0-9 ou se exceder int64.
    """
    cleaned = ltrim(value)
    if not cleaned:
        raise ValueError(f"Empty integer field: {value!r}")
    if not DIGITS.issuperset(cleaned):
        raise ValueError(f"Non-digit in integer field: {value!r}")

    number = int(cleaned)
    if number > INT64_MAX:
        raise ValueError(f"Integer field overflows int64: {value!r}")
    return number


def parse_amount(value: str) -> float:
    """
    Converte um campo numérico como "182.95" para float.
    Aceita apenas dígitos e '.', portanto valores negativos são rejeitados.
    """
    cleaned = ltrim(value)
    if not cleaned:
        raise ValueError(f"Empty numeric field: {value!r}")
    if not DECIMAL_CHARS.issuperset(cleaned):
        raise ValueError(f"Invalid character in numeric field: {value!r}")

    try:
        number = float(cleaned)
    except ValueError as exc:
        raise ValueError(f"Invalid numeric format: {value!r}") from exc
    if not math.isfinite(number):
        raise ValueError(f"Numeric field overflows: {value!r}")
    return number
