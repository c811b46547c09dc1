"""Simple logging utilities for cmdpal.

Standard Logger Initialization Pattern
--------------------------------------
Modules use the standard Python pattern:

    import logging
    logger = logging.getLogger(__name__)

and the CLI calls `setup_logging()` once. Output goes to a rotating file,
never to the terminal, because the palette runs inside a Textual app.

Note: This module builds its own Path instead of importing CMDPAL_CONFIG_DIR
so it stays importable before config is loaded.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Max log file size: 5MB, keep 2 backups
_MAX_LOG_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 2

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_DATEFMT = '%Y-%m-%d %H:%M:%S'


def _log_dir() -> Path:
    return Path(os.environ.get("CMDPAL_CONFIG_DIR", str(Path.home() / ".config" / "cmdpal")))


def _file_handler(level: int) -> logging.Handler:
    log_dir = _log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / "cmdpal.log", maxBytes=_MAX_LOG_BYTES, backupCount=_BACKUP_COUNT
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
    return handler


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the package logger; `verbose` lowers the level to DEBUG."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger("cmdpal")
    if not logger.handlers:
        logger.addHandler(_file_handler(level))
    for handler in logger.handlers:
        handler.setLevel(level)
    logger.setLevel(level)
    return logger
