"""
Log handlers for console and rotating file output.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from .config import LoggingConfig
from .formatters import get_formatter


def build_handlers(config: LoggingConfig, filters: Optional[List[logging.Filter]] = None) -> List[logging.Handler]:
    """
    Handlers requested by ``config``, sharing one formatter and ``filters``.

    The log file's parent directory is created if missing.
    """
    handlers: List[logging.Handler] = []

    if config.enable_console:
        handlers.append(logging.StreamHandler(sys.stderr))

    if config.enable_file:
        Path(config.file_path).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(
            filename=config.file_path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding='utf-8',
        ))

    formatter = get_formatter(config.format.value)
    for handler in handlers:
        handler.setLevel(config.level.numeric)
        handler.setFormatter(formatter)
        for f in filters or ():
            handler.addFilter(f)

    return handlers
