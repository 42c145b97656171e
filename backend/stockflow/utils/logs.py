import logging
import sys

from stockflow.config import settings


def get_logger(name: str) -> logging.Logger:
    """
    Return the named stockflow logger, attaching a stdout handler the first
    time it is requested. Output lines look like ``[ALERTS] INFO message``.
    """
    log = logging.getLogger(f"stockflow.{name}")
    log.setLevel(settings.LOG_LEVEL.upper())
    if not log.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(
            logging.Formatter(f"[{name.upper()}] %(levelname)s %(message)s")
        )
        log.addHandler(h)
    return log
