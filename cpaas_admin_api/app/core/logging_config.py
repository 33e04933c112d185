"""
Logging setup for the admin API.

Services and routers log through ``logging.getLogger(__name__)``; this
module attaches the handlers once, when ``create_app`` runs.  Records
go to stdout and, when ``LOG_FILE`` is set, to that file as well.
"""

import logging
import sys
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _file_handler(logfile: str) -> logging.Handler:
    path = Path(logfile)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, encoding="utf-8")


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger for the API process.

    Parameters
    ----------
    level : str
        Level name from ``LOG_LEVEL``; unknown names fall back to
        ``INFO``.
    logfile : Optional[str]
        Extra file destination.  Missing parent directories are created.

    Calling it again, as every application built by ``create_app``
    does, only changes the level of the handlers already in place.
    """
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(numeric_level)
    if root.handlers:
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler(sys.stdout)]
    if logfile:
        handlers.append(_file_handler(logfile))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
