"""Node representation for file system elements in the tree."""

from functools import lru_cache
from typing import Any, Optional, Tuple

from anytree import Node
from pyuca import Collator


@lru_cache(maxsize=None)
def get_collator() -> Collator:
    """Return the shared Unicode collator, loading its weight table on first use."""
    return Collator()


def collation_key(name: str) -> Tuple[int, ...]:
    """Return a locale-aware sort key for a file name.

    Uses the Unicode Collation Algorithm with the default (root locale) weights:
    punctuation sorts before digits and letters, accented letters sort with their
    base letter, and lowercase sorts before uppercase when names otherwise tie.

    Example:
        >>> sorted(["b.ts", "A.ts", "a.ts", "éclair.ts", "Zeta.ts", "a_b.ts"], key=collation_key)
        ['a_b.ts', 'a.ts', 'A.ts', 'b.ts', 'éclair.ts', 'Zeta.ts']
    """
    return tuple(get_collator().sort_key(name))


class FileSystemNode(Node):  # type: ignore
    """Node class representing a file or directory in the filesystem tree.

    Extends anytree.Node with the node's path relative to the scan root, which is
    what every consumer of the tree (selection, pruning, rendering) works with.
    Inherits tree traversal capabilities from anytree.Node.

    Attributes:
        name (str): The basename of the file or directory.
        relative_path (str): Slash-separated path from the scan root, with no leading
            slash. ``""`` for the root directory.
        is_dir (bool): True for directories.
        children (tuple[FileSystemNode]): The child nodes (inherited from anytree.Node).
    """

    is_dir = False

    def __init__(self, name: str, relative_path: str, parent: Optional["FileSystemNode"] = None, **kwargs: Any) -> None:
        super().__init__(name, parent, **kwargs)
        self.relative_path = relative_path

    def sort_key(self) -> Tuple[bool, Tuple[int, ...], str]:
        """Ordering used among siblings: directories first, then by collated name.

        Names that collate equally fall back to code point order, so the order is
        total and identical across runs.
        """
        return (not self.is_dir, collation_key(self.name), self.name)


class DirectoryNode(FileSystemNode):
    """A directory in the tree.

    Children are attached exactly once, already sorted, by whoever builds the node.

    Example:
        >>> root = DirectoryNode("project", "")
        >>> src = DirectoryNode("src", "src", parent=root)
        >>> main = FileNode("main.py", "src/main.py", file_size=12, parent=src)
        >>> [node.relative_path for node in root.descendants]
        ['src', 'src/main.py']
        >>> main.is_dir, src.is_dir
        (False, True)
    """

    is_dir = True


class FileNode(FileSystemNode):
    """A regular file in the tree.

    Attributes:
        file_size (int): Size of the file in bytes, as reported by lstat at scan time.
            (anytree reserves ``size`` for the number of nodes in a subtree.)
    """

    def __init__(
        self, name: str, relative_path: str, file_size: int = 0, parent: Optional[FileSystemNode] = None, **kwargs: Any
    ) -> None:
        super().__init__(name, relative_path, parent, **kwargs)
        self.file_size = file_size
