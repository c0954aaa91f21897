from __future__ import annotations

import io
import logging
import random
import sys
import time
from pathlib import Path
from typing import Iterable, Iterator, TextIO

import requests

from equity_lookup.config import Settings
from equity_lookup.domain.errors import InputReadError

logger = logging.getLogger(__name__)

STDIN_SOURCE = "-"
REMOTE_SCHEMES = ("http://", "https://")
# Bytes fora de UTF-8 viram U+FFFD: a linha segue para o parser em vez de abortar a carga.
ENCODING = "utf-8"
DECODE_ERRORS = "replace"
LINE_BREAK = "\n"


def read_file_lines(path: str | Path) -> Iterator[str]:
    """Lê um arquivo texto linha a linha, sem carregá-lo inteiro em memória."""
    file_path = Path(path)
    try:
        with file_path.open(
            "r", encoding=ENCODING, errors=DECODE_ERRORS, newline=LINE_BREAK
        ) as handle:
            yield from handle
    except OSError as exc:
        raise InputReadError(f"Cannot read {file_path}: {exc}") from exc


def read_stream_lines(stream: TextIO) -> Iterator[str]:
    try:
        yield from stream
    except (OSError, UnicodeDecodeError) as exc:
        raise InputReadError(f"Cannot read input stream: {exc}") from exc


def stdin_text() -> TextIO:
    """Reabre o stdin binário com a mesma decodificação tolerante dos arquivos."""
    buffer = getattr(sys.stdin, "buffer", None)
    if buffer is None:
        return sys.stdin
    return io.TextIOWrapper(buffer, encoding=ENCODING, errors=DECODE_ERRORS, newline=LINE_BREAK)


def split_records(text: str) -> list[str]:
    lines = text.split(LINE_BREAK)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def backoff_delay(attempt: int, retry_after: str | None, base: float, jitter: float) -> float:
    """Retry-After numérico tem prioridade; senão base * 2^(tentativa-1) + jitter aleatório."""
    if retry_after and retry_after.isdigit():
        return float(retry_after)
    return base * 2 ** (attempt - 1) + random.uniform(0, jitter)


class RemoteLineSource:
    """Baixa o arquivo de cotações via HTTP, com retry e backoff."""

    def __init__(
        self,
        url: str,
        timeout: float = 20,
        max_attempts: int = 5,
        backoff_base: float = 1.0,
        backoff_jitter: float = 0.5,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._backoff_base = backoff_base
        self._backoff_jitter = backoff_jitter
        self._session = requests.Session()
        self._session.headers.update({"Accept": "text/plain,*/*"})

    @classmethod
    def from_settings(cls, url: str, settings: Settings) -> RemoteLineSource:
        return cls(
            url,
            timeout=settings.timeout,
            max_attempts=settings.max_attempts,
            backoff_base=settings.backoff_base,
            backoff_jitter=settings.backoff_jitter,
        )

    def read(self) -> Iterator[str]:
        response = self._request_with_retry()
        if response.status_code != 200:
            raise InputReadError(
                f"Unexpected HTTP status {response.status_code} for {self._url}"
            )
        logger.info(
            "Arquivo remoto baixado | url=%s | bytes=%s", self._url, len(response.content)
        )
        text = response.content.decode(response.encoding or ENCODING, errors=DECODE_ERRORS)
        return iter(split_records(text))

    def _request_with_retry(self) -> requests.Response:
        for attempt in range(1, self._max_attempts + 1):
            try:
                response = self._session.get(self._url, timeout=self._timeout)
            except requests.RequestException as exc:
                logger.warning("Requisição HTTP falhou | tentativa=%s | erro=%s", attempt, exc)
                if attempt == self._max_attempts:
                    raise InputReadError(f"Cannot fetch {self._url}: {exc}") from exc
                self._sleep_backoff(attempt, None)
                continue

            if response.status_code in (429, 503) and attempt < self._max_attempts:
                logger.warning(
                    "Servidor ocupado | tentativa=%s | status=%s", attempt, response.status_code
                )
                self._sleep_backoff(attempt, response.headers.get("Retry-After"))
                continue

            return response
        raise InputReadError(f"Cannot fetch {self._url}: no attempts made")

    def _sleep_backoff(self, attempt: int, retry_after: str | None) -> None:
        time.sleep(backoff_delay(attempt, retry_after, self._backoff_base, self._backoff_jitter))


def open_source_lines(source: str, settings: Settings | None = None) -> Iterable[str]:
    """Escolhe a fonte de linhas: '-' para stdin, URL http(s) ou caminho de arquivo."""
    if source == STDIN_SOURCE:
        return read_stream_lines(stdin_text())
    if source.startswith(REMOTE_SCHEMES):
        return RemoteLineSource.from_settings(source, settings or Settings(input=source)).read()
    return read_file_lines(source)
