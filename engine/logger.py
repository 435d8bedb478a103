"""Logging setup for the CLI driver.

Library modules only create loggers; the driver installs handlers once at
startup. Handlers write to stderr so log lines never interleave with the
board drawn on stdout.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Union

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(
    level: Union[str, int] = "WARNING",
    logfile: str | Path | None = None,
) -> None:
    """Install handlers on the root logger, replacing any already present.

    Args:
        level: Level name or number, e.g. "DEBUG" or logging.INFO.
        logfile: Optional file to append a copy of every record to.
    """
    formatter = logging.Formatter(LOG_FORMAT)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(level)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)

    if logfile is not None:
        path = Path(logfile)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
