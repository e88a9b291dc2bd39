from __future__ import annotations

import logging
import os
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from .settings import Settings

LOGGER_NAME = "fleetboard"


def _resolve_log_dir(settings: Settings) -> Path:
    """Resolve the log directory.

    - If FLEETBOARD_LOG_DIR is absolute, use it directly.
    - Otherwise, treat it as relative to the current working directory,
      next to the default `data.db`.
    """

    raw = settings.FLEETBOARD_LOG_DIR
    p = raw if isinstance(raw, Path) else Path(str(raw))
    if p.is_absolute():
        return p
    return Path.cwd() / p


def setup_logging(settings: Settings) -> Path:
    """Configure the `fleetboard` logger to write to a rotating log file.

    Returns the resolved log file path.

    Rotation:
      - Daily rotation at midnight.
      - Keep the last `FLEETBOARD_LOG_BACKUP_COUNT` rotated files.

    Notes:
      - No console handler: output on the terminal would corrupt the
        full-screen UI. Fatal errors are printed by the CLI instead.
      - This function is safe to call multiple times (it resets handlers).
    """

    log_dir = _resolve_log_dir(settings)
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / "fleetboard.log"

    level_name = str(settings.FLEETBOARD_LOG_LEVEL or "INFO").upper().strip()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

    file_handler = TimedRotatingFileHandler(
        filename=str(log_file),
        when="midnight",
        interval=1,
        backupCount=max(0, int(settings.FLEETBOARD_LOG_BACKUP_COUNT or 0)),
        encoding="utf-8",
        utc=False,
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(fmt))

    # Reset handlers so we don't duplicate logs on repeated starts.
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers:
        handler.close()
    logger.handlers = []
    logger.setLevel(level)
    logger.addHandler(file_handler)
    logger.propagate = False

    logger.info(
        "fleetboard logging enabled (file=%s, level=%s)",
        os.fspath(log_file),
        level_name,
    )

    return log_file
