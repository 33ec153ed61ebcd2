"""
File handling utilities for str-merge.
"""

import gzip
import os
import sys
from contextlib import contextmanager
from typing import Optional, TextIO


def open_text(filepath: str, mode: str = 'r') -> TextIO:
    """Open a text file, transparently handling .gz paths."""
    if str(filepath).endswith('.gz'):
        return gzip.open(filepath, mode + 't')
    return open(filepath, mode)


@contextmanager
def open_output(filepath: Optional[str] = None):
    """
    Yield a writable text handle: the given file, or stdout when None.

    stdout is flushed but never closed.
    """
    if filepath is None:
        try:
            yield sys.stdout
        finally:
            sys.stdout.flush()
    else:
        with open_text(filepath, 'w') as handle:
            yield handle


def get_file_size(filepath: str, human_readable: bool = True) -> str:
    """
    Get file size in human-readable format.

    Args:
        filepath: Path to file
        human_readable: If True, return human-readable string

    Returns:
        File size string
    """
    try:
        size_bytes = os.path.getsize(filepath)
    except OSError:
        return "Unknown"

    if not human_readable:
        return str(size_bytes)

    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0

    return f"{size_bytes:.1f} PB"


__all__ = [
    'open_text',
    'open_output',
    'get_file_size',
]
