"""Filename helpers."""

import re

from core.utils.constants import FILENAME_REPLACEMENT, UNSAFE_FILENAME_PATTERN

_UNSAFE_FILENAME_RE = re.compile(UNSAFE_FILENAME_PATTERN, re.ASCII)


def sanitize_filename(file_name: str) -> str:
    """Replace characters that are unsafe in a remote key.

    Example:
        "my photo (1).jpg" -> "my-photo--1-.jpg"
    """
    return _UNSAFE_FILENAME_RE.sub(FILENAME_REPLACEMENT, file_name)
