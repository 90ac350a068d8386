"""Utility functions for BeatScript."""

import os
import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Pattern, Tuple, Union

from .exceptions import FileSystemError, ScriptSourceError

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class RegexMatch:
    """A plain, detached record of one regex match."""
    start: int
    end: int
    groups: Tuple[Optional[str], ...]

def find_all_matches(pattern: Union[str, Pattern[str]], text: str, flags: int = 0) -> List[RegexMatch]:
    """
    Finds all non-overlapping matches of a pattern, in order, with positions.

    Args:
        pattern: A regex string or a compiled pattern.
        text: The text to scan.
        flags: Regex flags, only used when `pattern` is a string.

    Returns:
        A list of RegexMatch records. Empty if nothing matched.
    """
    compiled = re.compile(pattern, flags) if isinstance(pattern, str) else pattern
    return [
        RegexMatch(start=m.start(), end=m.end(), groups=m.groups())
        for m in compiled.finditer(text)
    ]

def ensure_dir_exists(dir_path: str) -> None:
    """
    Ensures that a directory exists. Creates it if it doesn't.

    Args:
        dir_path: The path to the directory.

    Raises:
        FileSystemError: If the directory cannot be created due to permissions
                         or if the path exists but is not a directory.
    """
    if not dir_path:
        raise ValueError("Directory path cannot be empty.")
    try:
        if not os.path.exists(dir_path):
            os.makedirs(dir_path)
            logger.info(f"Created directory: {dir_path}")
        elif not os.path.isdir(dir_path):
            raise FileSystemError(f"Path exists but is not a directory: {dir_path}")
    except OSError as e:
        logger.error(f"Error creating or accessing directory {dir_path}: {e}", exc_info=True)
        raise FileSystemError(f"Could not create or access directory {dir_path}: {e}") from e

def read_script_file(script_path: str) -> str:
    """
    Reads a call script from disk as UTF-8 text.

    Raises:
        FileNotFoundError: If the file does not exist.
        ScriptSourceError: If the path is not a file or cannot be read.
    """
    if not os.path.exists(script_path):
        raise FileNotFoundError(f"Script file not found: {script_path}")
    if not os.path.isfile(script_path):
        raise ScriptSourceError(f"Script path is not a file: {script_path}")
    try:
        with open(script_path, 'r', encoding='utf-8') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Could not read script file {script_path}: {e}", exc_info=True)
        raise ScriptSourceError(f"Could not read script file {script_path}: {e}") from e
