"""
Logging Setup
=============

Configures the root logger once per process: a console handler and a size
rotated log file under ``Settings.log_dir``. Modules log through
``logging.getLogger(__name__)``.
"""

import logging
import logging.handlers
import sys
from pathlib import Path

from .config import Settings, get_settings

_INITIALIZED = False


def setup_logging(settings: Settings | None = None) -> None:
    """
    Install console and file handlers on the root logger.

    Parameters
    ----------
    settings : Settings, optional
        Settings to read ``log_dir``, ``log_level`` and rotation limits from.
        Defaults to :func:`~medscan_ui.core.config.get_settings`.

    Notes
    -----
    Repeated calls are no-ops.
    """
    global _INITIALIZED
    if _INITIALIZED:
        return
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    root = logging.getLogger()
    root.setLevel(level)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.RotatingFileHandler(
        log_dir / "medscan.log",
        maxBytes=settings.log_max_bytes,
        backupCount=settings.log_backup_count,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    _INITIALIZED = True
