from __future__ import annotations

"""
Logging Handlers and Low-Level Utilities.

Handler factories plus the tagging used to tell the handlers installed by
assettree apart from handlers attached by the host application.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

_HANDLER_TAG_ATTR: str = "_assettree_handler"


def _tag_handler(handler: logging.Handler) -> None:
    """Mark a handler as managed by assettree."""
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_rotating_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> RotatingFileHandler:
    """
    Initialize a tagged RotatingFileHandler, creating the parent directory.

    Args:
        log_file: Target path for the log file.
        level_int: Numeric logging level.
        formatter: Pre-configured logging formatter.
        max_bytes: Rollover threshold in bytes.
        backup_count: Number of archived files to keep.

    Returns:
        RotatingFileHandler: Configured handler.

    Raises:
        OSError: If the log file cannot be opened.
    """
    parent = os.path.dirname(os.path.abspath(log_file))
    os.makedirs(parent, exist_ok=True)

    fh = RotatingFileHandler(
        log_file,
        maxBytes=int(max_bytes),
        backupCount=int(backup_count),
        encoding="utf-8",
    )
    fh.setLevel(level_int)
    fh.setFormatter(formatter)
    _tag_handler(fh)
    return fh
