"""Selection of files from a scanned tree with ordered glob patterns."""

from .glob_pattern import GlobPattern, compile_glob, expand_braces
from .selector import get_tree_paths, select_files

__all__ = [
    "GlobPattern",
    "compile_glob",
    "expand_braces",
    "get_tree_paths",
    "select_files",
]
