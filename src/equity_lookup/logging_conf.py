import logging
from typing import Iterable

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
THIRD_PARTY_LOGGERS = ("urllib3", "requests")


def setup_logging(level: str, quiet: Iterable[str] = THIRD_PARTY_LOGGERS) -> None:
    """Configura o root logger em stderr; ``quiet`` fica limitado a WARNING."""
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT)
    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)
