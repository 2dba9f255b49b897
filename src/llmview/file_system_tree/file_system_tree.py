"""File system tree scanning with scoped .gitignore rules.

This module provides the FileSystemTree class, which walks a project directory
depth-first and keeps only the entries that survive the built-in ignore rules
plus every .gitignore file found on the way down.
"""

import logging
import os
import stat
from concurrent.futures import Executor, ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence

from anytree import PreOrderIter

from llmview.constants import IGNORE_FILE_NAME, MAX_OPEN_FILES
from llmview.exclusion_rules.git_rules import read_ignore_file
from llmview.exclusion_rules.scoped_rules import ScopedIgnoreRule, base_scope_stack, is_path_ignored
from llmview.file_system_tree.file_system_node import DirectoryNode, FileNode, FileSystemNode
from llmview.file_system_tree.tree_renderer import stream_tree_lines
from llmview.types import PathType

logger = logging.getLogger(__name__)


class FileSystemTree:
    """A filtered tree representation of a project directory.

    The tree is built lazily on first access and cached.

    Ignore Rules:
        Traversal starts with the built-in rules (version-control metadata, OS
        metadata files, bytecode caches, dependency directories). Whenever a visited
        directory contains a .gitignore file, its rules are pushed for that
        directory's subtree only; sibling subtrees never see each other's rules.
        Excluded directories are not descended into.

    Symbolic Links:
        Symbolic links are always omitted, whatever they point to.

    Errors:
        A missing root or a root that is not a directory raises. Anything that goes
        wrong with a single entry below the root (permission denied, the entry
        vanishing mid-scan) omits that entry and the scan carries on.

    Concurrency:
        Metadata reads for the entries of a directory are issued through a thread
        pool of at most ``max_open_files`` workers. Each directory's children are
        collected, sorted and attached by the one call that owns the directory, so
        the result is identical to a sequential scan.

    Attributes:
        root_path (Path): The root directory to scan.
        max_open_files (int): Upper bound on concurrent filesystem operations.
            1 disables the thread pool.

    Example:
        >>> tree = FileSystemTree(".")  # doctest: +SKIP
        >>> print(tree.get_tree_representation())  # doctest: +SKIP
        project/
        ├── src/
        │   └── main.py
        └── README.md
    """

    def __init__(self, root_path: PathType, max_open_files: int = MAX_OPEN_FILES) -> None:
        if max_open_files < 1:
            raise ValueError(f"max_open_files must be at least 1, got {max_open_files}")
        self.root_path = Path(root_path)
        self.max_open_files = max_open_files
        self._tree: Optional[DirectoryNode] = None

    def get_tree(self) -> DirectoryNode:
        """Get the root node of the filesystem tree, building it if necessary.

        Returns:
            The root DirectoryNode, whose relative path is ``""``.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
            PermissionError: If the root directory itself cannot be listed.
        """
        if self._tree is None:
            self._build_tree()
        assert self._tree is not None
        return self._tree

    def _build_tree(self) -> None:
        if not self.root_path.exists():
            raise FileNotFoundError(f"Root path does not exist: {self.root_path}")
        if not self.root_path.is_dir():
            raise NotADirectoryError(f"Root path is not a directory: {self.root_path}")

        root = DirectoryNode(self.root_path.resolve().name, "")

        if self.max_open_files == 1:
            children = self._scan_children(self.root_path, "", base_scope_stack(), None)
        else:
            with ThreadPoolExecutor(max_workers=self.max_open_files) as executor:
                children = self._scan_children(self.root_path, "", base_scope_stack(), executor)

        root.children = children
        self._tree = root

    def _scan_children(
        self,
        directory: Path,
        relative_path: str,
        inherited_rules: Sequence[ScopedIgnoreRule],
        executor: Optional[Executor],
    ) -> List[FileSystemNode]:
        """List, filter and sort the entries of one directory, recursing into subdirectories.

        Raises:
            OSError: If the directory itself cannot be listed.
        """
        names = os.listdir(directory)

        rules = tuple(inherited_rules)
        if IGNORE_FILE_NAME in names:
            nested = read_ignore_file(directory / IGNORE_FILE_NAME)
            if nested is not None:
                rules = rules + (ScopedIgnoreRule(nested, relative_path),)

        paths = [directory / name for name in names]
        if executor is None:
            stats = [_lstat(path) for path in paths]
        else:
            stats = list(executor.map(_lstat, paths))

        nodes: List[FileSystemNode] = []
        for name, path, stat_result in zip(names, paths, stats):
            child_relative_path = f"{relative_path}/{name}" if relative_path else name
            node = self._create_node(path, name, child_relative_path, stat_result, rules, executor)
            if node is not None:
                nodes.append(node)

        nodes.sort(key=FileSystemNode.sort_key)
        return nodes

    def _create_node(
        self,
        path: Path,
        name: str,
        relative_path: str,
        stat_result: Optional[os.stat_result],
        rules: Sequence[ScopedIgnoreRule],
        executor: Optional[Executor],
    ) -> Optional[FileSystemNode]:
        """Create the node for one directory entry, or None if the entry is omitted."""
        if stat_result is None:
            return None

        if stat.S_ISLNK(stat_result.st_mode):
            logger.debug("Skipping symbolic link: %s", relative_path)
            return None

        is_dir = stat.S_ISDIR(stat_result.st_mode)
        if is_path_ignored(relative_path, is_dir, rules):
            return None

        if not is_dir:
            return FileNode(name, relative_path, file_size=stat_result.st_size)

        try:
            children = self._scan_children(path, relative_path, rules, executor)
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", relative_path, e)
            return None

        node = DirectoryNode(name, relative_path)
        node.children = children
        return node

    def stream_tree_representation(self, visible_paths: Optional[Iterable[str]] = None) -> Iterator[str]:
        """Generate a tree representation of the filesystem one line at a time.

        Args:
            visible_paths: Optional set of relative paths to restrict the rendering
                to, as produced by ``llmview.selection.get_tree_paths``.

        Yields:
            Lines of the tree representation.
        """
        paths = None if visible_paths is None else frozenset(visible_paths)
        yield from stream_tree_lines(self.get_tree(), paths)

    def get_tree_representation(self, visible_paths: Optional[Iterable[str]] = None) -> str:
        """Get a complete string representation of the (optionally pruned) tree."""
        return "\n".join(self.stream_tree_representation(visible_paths))


def _lstat(path: Path) -> Optional[os.stat_result]:
    try:
        return os.lstat(path)
    except OSError as e:
        logger.debug("Skipping unreadable entry %s: %s", path, e)
        return None


def iter_file_nodes(root: DirectoryNode) -> Iterator[FileNode]:
    """Flatten a directory tree to its files, in pre-order."""
    for node in PreOrderIter(root):
        if not node.is_dir:
            yield node


def scan_directory(root_path: PathType, max_open_files: int = MAX_OPEN_FILES) -> DirectoryNode:
    """Scan a directory and return the root of its filtered tree.

    Args:
        root_path: Directory to scan.
        max_open_files: Upper bound on concurrent filesystem operations.

    Returns:
        The root DirectoryNode.

    Raises:
        FileNotFoundError: If the root path doesn't exist.
        NotADirectoryError: If the root path isn't a directory.
    """
    return FileSystemTree(root_path, max_open_files=max_open_files).get_tree()
