"""File logging setup.

The picker owns the terminal while it runs, so log records only ever go to a
file, and only when the user asks for them.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "lazypicker"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / f"{APP_NAME}.log"


def configure_logging(log_file: Path | None = None, debug: bool = False) -> Path | None:
    """Attach a file handler to the package logger.

    ``debug`` without ``log_file`` logs to the platform log directory.
    Returns the path being written, or ``None`` when logging stays disabled.
    """
    if log_file is None and not debug:
        return None
    path = log_file if log_file is not None else DEFAULT_LOG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger(APP_NAME)
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    return path
