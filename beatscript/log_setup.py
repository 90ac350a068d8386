"""Logging configuration for BeatScript."""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional, TextIO, Union

from .exceptions import FileSystemError
from .utils import ensure_dir_exists

LOG_FORMAT = '%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
LOG_FILE_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3

def resolve_log_level(level: Union[int, str, None], default: int = logging.WARNING) -> int:
    """
    Turns "debug"/"INFO"/logging.ERROR into a logging level number.

    Unknown names fall back to `default`.
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName((level or "").upper())
    return resolved if isinstance(resolved, int) else default

def setup_logging(
    log_level: Union[int, str] = logging.INFO,
    config: Optional[dict] = None,
    log_file_key: str = 'log_file',
    stream: Optional[TextIO] = None
) -> str:
    """
    Points the root logger at the console and at a rotating log file.

    The console handler writes to stderr so parsed output on stdout stays
    clean. Handlers from an earlier call are dropped first, so the CLI can
    configure logging once with defaults and again after loading config.

    Args:
        log_level: Level number or name (e.g. "DEBUG").
        config: Loaded configuration; `log_dir` and `log_file_key` are read from it.
        log_file_key: Config key holding the file name ("log_file" or "batch_log_file").
        stream: Console stream, defaults to sys.stderr.

    Returns:
        The log file path, or "" if the file handler could not be created.
    """
    config = config or {}
    level = resolve_log_level(log_level, default=logging.INFO)
    log_dir = config.get('log_dir', 'logs')
    log_file = config.get(log_file_key) or 'beatscript.log'

    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    root.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(stream or sys.stderr)
    console.setFormatter(formatter)
    root.addHandler(console)

    log_path = os.path.join(log_dir, log_file)
    try:
        ensure_dir_exists(log_dir)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=LOG_FILE_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding='utf-8'
        )
    except (FileSystemError, OSError, ValueError) as e:
        root.error(f"Could not open log file {log_path}, logging to console only: {e}")
        return ""
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)
    root.debug(f"Logging to {log_path}")
    return log_path
