"""Directory tree scanning with scoped ignore rules.

This package builds an in-memory tree of the files and directories that survive
the layered .gitignore rules of a project, sorted deterministically, and renders
(optionally pruned) tree views of it.
"""

from .file_system_node import DirectoryNode, FileNode, FileSystemNode
from .file_system_tree import FileSystemTree, iter_file_nodes, scan_directory
from .tree_renderer import stream_tree_lines

__all__ = [
    "DirectoryNode",
    "FileNode",
    "FileSystemNode",
    "FileSystemTree",
    "iter_file_nodes",
    "scan_directory",
    "stream_tree_lines",
]
