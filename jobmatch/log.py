"""Logging setup shared by the CLI, the Streamlit app and the sources (stdlib only).

Level comes from LOG_LEVEL; a daily file under logs/ is added unless
LOG_TO_FILE is false.
"""
from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from pathlib import Path

LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"
# requests/urllib3 log every connection at DEBUG
_NOISY_LOGGERS = ("urllib3", "watchdog")
_configured = False
_console: logging.Handler | None = None


def get_logger(name: str) -> logging.Logger:
    """Return a named logger; configures root handlers on first call."""
    if not _configured:
        configure()
    return logging.getLogger(name)


def configure(level: str | None = None) -> None:
    """Attach console (and file) handlers to the root logger.

    Calling again only changes the level, so ``--verbose`` can raise
    verbosity after modules have already grabbed their loggers.
    """
    global _configured, _console
    level_name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    numeric = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(numeric)
    for noisy in _NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(max(numeric, logging.WARNING))

    if _console is not None:
        _console.setLevel(numeric)
    if _configured or root.handlers:
        _configured = True
        return
    _configured = True

    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FMT)
    _console = logging.StreamHandler(sys.stdout)
    _console.setLevel(numeric)
    _console.setFormatter(formatter)
    root.addHandler(_console)

    if os.environ.get("LOG_TO_FILE", "true").lower() in ("0", "false", "no"):
        return
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(
            LOG_DIR / f"jobmatch_{datetime.now():%Y-%m-%d}.log", encoding="utf-8"
        )
    except OSError as exc:
        root.warning("File logging disabled (%s)", exc)
        return
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(formatter)
    root.addHandler(fh)
