from __future__ import annotations

import logging
import os
from pathlib import Path

_LOGGER_NAME = "dispatchr"
LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    if name is None:
        return logging.getLogger(_LOGGER_NAME)
    if name != _LOGGER_NAME and not name.startswith(_LOGGER_NAME + "."):
        name = f"{_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(level: int | str = logging.INFO, log_dir: Path | None = None) -> logging.Logger:
    """Attach stream (and optional file) handlers to the package logger. Safe to call twice."""
    root = logging.getLogger(_LOGGER_NAME)
    root.setLevel(level)
    root.propagate = False

    fmt = logging.Formatter(LOG_FORMAT)

    if not any(type(h) is logging.StreamHandler for h in root.handlers):
        sh = logging.StreamHandler()
        sh.setLevel(level)
        sh.setFormatter(fmt)
        root.addHandler(sh)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / "dispatchr.log"
        if not any(isinstance(h, logging.FileHandler) and getattr(h, "baseFilename", "") == os.path.abspath(log_path) for h in root.handlers):
            fh = logging.FileHandler(log_path, encoding="utf-8")
            fh.setLevel(level)
            fh.setFormatter(fmt)
            root.addHandler(fh)
            root.info("Logging initialized: %s", log_path)

    return root
