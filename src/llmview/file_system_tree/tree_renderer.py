"""Text rendering of a scanned directory tree."""

from typing import AbstractSet, Iterator, Optional

from .file_system_node import FileSystemNode


def stream_tree_lines(
    root: FileSystemNode, visible_paths: Optional[AbstractSet[str]] = None, root_name: Optional[str] = None
) -> Iterator[str]:
    """Generate a tree representation one line at a time.

    Output is similar to the Unix 'tree' command. Children are emitted in the order
    they are stored in, which for scanned trees is directories first, then by name.

    Args:
        root: Root node of the tree to render.
        visible_paths: If given, only nodes whose relative path is in this set are
            rendered, pruning every branch that does not lead to a selected file.
        root_name: Label for the root line. Defaults to the root node's name.

    Yields:
        Lines of the tree representation, without trailing newlines.

    Example:
        >>> from llmview.file_system_tree.file_system_node import DirectoryNode, FileNode
        >>> root = DirectoryNode("proj", "")
        >>> src = DirectoryNode("src", "src", parent=root)
        >>> _ = FileNode("a.ts", "src/a.ts", parent=src)
        >>> _ = FileNode("b.ts", "src/b.ts", parent=src)
        >>> _ = FileNode("README.md", "README.md", parent=root)
        >>> print("\\n".join(stream_tree_lines(root, {"src", "src/b.ts", "README.md"})))
        proj/
        ├── src/
        │   └── b.ts
        └── README.md
    """

    def visible(node: FileSystemNode) -> bool:
        return visible_paths is None or node.relative_path in visible_paths

    def write_node(node: FileSystemNode, prefix: str, is_last: bool) -> Iterator[str]:
        connector = "└── " if is_last else "├── "
        suffix = "/" if node.is_dir else ""
        yield f"{prefix}{connector}{node.name}{suffix}"

        if node.is_dir:
            children = [child for child in node.children if visible(child)]
            child_prefix = prefix + ("    " if is_last else "│   ")
            for i, child in enumerate(children):
                yield from write_node(child, child_prefix, i == len(children) - 1)

    yield f"{root_name if root_name is not None else root.name}/"
    top_level = [child for child in root.children if visible(child)]
    for i, child in enumerate(top_level):
        yield from write_node(child, "", i == len(top_level) - 1)
