"""Ordered include/exclude selection over a scanned tree."""

import logging
from typing import Iterable, List, Sequence, Set, Union

from llmview.file_system_tree.file_system_node import DirectoryNode, FileNode
from llmview.file_system_tree.file_system_tree import iter_file_nodes

from .glob_pattern import GlobPattern

logger = logging.getLogger(__name__)


def select_files(tree: DirectoryNode, patterns: Sequence[Union[str, GlobPattern]]) -> List[FileNode]:
    """Select the files of a tree with an ordered list of glob patterns.

    Every file is tested against every pattern in the order given. A matching plain
    pattern includes the file and a matching ``!`` pattern excludes it; the last
    pattern that matches decides. Files that no pattern matches are not selected.
    Order therefore matters: ``["!x/**", "x/**"]`` selects everything under ``x``
    while ``["x/**", "!x/**"]`` selects nothing there.

    Only files are tested. Directories are never matched on their own, although a
    ``**`` segment spans any number of them.

    Args:
        tree: Root of a scanned tree.
        patterns: Pattern strings or precompiled GlobPattern objects.

    Returns:
        The selected files, in the tree's pre-order (directories before files, then
        by name), which is stable across runs.
    """
    matchers = [pattern if isinstance(pattern, GlobPattern) else GlobPattern(pattern) for pattern in patterns]

    selected: List[FileNode] = []
    for file_node in iter_file_nodes(tree):
        included = False
        for matcher in reversed(matchers):
            if matcher.matches(file_node.relative_path):
                included = not matcher.negated
                break
        if included:
            selected.append(file_node)

    logger.debug("Selected %d files with %d patterns", len(selected), len(matchers))
    return selected


def get_tree_paths(selected_files: Iterable[FileNode]) -> Set[str]:
    """Compute the paths needed to render a tree that shows exactly the selected files.

    The result holds every selected file's path plus all of its ancestor
    directories (the root itself is implicit). It does not depend on the order of
    the input and applying it twice gives the same set.

    Example:
        >>> from llmview.file_system_tree.file_system_node import FileNode
        >>> files = [FileNode("a.ts", "src/lib/a.ts"), FileNode("b.ts", "src/lib/b.ts")]
        >>> sorted(get_tree_paths(files))
        ['src', 'src/lib', 'src/lib/a.ts', 'src/lib/b.ts']
    """
    tree_paths: Set[str] = set()
    for file_node in selected_files:
        parts = file_node.relative_path.split("/")
        for i in range(1, len(parts) + 1):
            tree_paths.add("/".join(parts[:i]))
    return tree_paths
