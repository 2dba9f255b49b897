"""Loading selection patterns from view files.

A view file lists one glob pattern per line, in the order they are applied.
Everything after a ``#`` is a comment, and blank lines are skipped::

    # Flask backend without its migrations
    backend/**
    !backend/migrations/**
    docs/style_guide.md   # conventions
"""

import sys
from pathlib import Path
from typing import List, Optional, TextIO

from llmview.types import PathType

STDIN_MARKER = "-"


def parse_patterns(text: str) -> List[str]:
    """Extract the patterns from the text of a view file.

    Example:
        >>> parse_patterns("# header\\nsrc/**  # sources\\n\\n!src/**/*.test.ts\\n")
        ['src/**', '!src/**/*.test.ts']
    """
    patterns = []
    for line in text.splitlines():
        pattern = line.split("#", 1)[0].strip()
        if pattern:
            patterns.append(pattern)
    return patterns


def load_patterns(source: Optional[PathType] = STDIN_MARKER, stdin: Optional[TextIO] = None) -> List[str]:
    """Read patterns from a view file, or from standard input.

    Args:
        source: Path of the view file. ``"-"`` or None reads standard input.
        stdin: Stream to use in place of ``sys.stdin``.

    Returns:
        The patterns in file order. May be empty; rejecting an empty selection is
        left to the caller.

    Raises:
        FileNotFoundError: If the view file doesn't exist.
        IsADirectoryError: If the path names a directory.
    """
    if source is None or str(source) == STDIN_MARKER:
        return parse_patterns((stdin or sys.stdin).read())

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"View file not found: {path}")
    if path.is_dir():
        raise IsADirectoryError(f"View file is a directory: {path}")
    return parse_patterns(path.read_text(encoding="utf-8"))
