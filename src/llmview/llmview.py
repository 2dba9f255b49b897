"""Assembling a filtered snapshot of a codebase.

This module ties the stages together: scan the project with its layered ignore
rules, select files with ordered glob patterns, compute the visible paths of the
pruned tree, render file contents and serialize everything in one output format.
"""

import logging
from typing import List, Optional, Sequence, Set, Union

from humanfriendly import format_size

from llmview.constants import MAX_FILE_SIZE, MAX_OPEN_FILES
from llmview.exceptions import NoPatternsError
from llmview.file_content_renderer import FileContentRenderer, RenderedFile
from llmview.file_system_tree.file_system_node import DirectoryNode, FileNode
from llmview.file_system_tree.file_system_tree import FileSystemTree
from llmview.output_strategies import OutputStrategy, get_output_strategy
from llmview.selection import GlobPattern, get_tree_paths, select_files
from llmview.token_counter import TokenCounter
from llmview.types import OutputFormat, PathType

logger = logging.getLogger(__name__)


class CodebaseView:
    """A selection of files from a project directory and its rendered output.

    Scanning and selection happen on first access and are cached; rendering
    happens on each call to render().

    Attributes:
        root_path (Path): Project root being viewed.
        patterns (List[GlobPattern]): Selection patterns, in application order.
        include_tree (bool): Prefix the output with the pruned directory tree.
        list_only (bool): Render only the selected paths, one per line.

    Example:
        >>> view = CodebaseView(".", ["backend/**", "!backend/migrations/**"])  # doctest: +SKIP
        >>> [f.relative_path for f in view.selected_files]  # doctest: +SKIP
        ['backend/main.py']
        >>> print(view.render())  # doctest: +SKIP
        <file path="backend/main.py">
        from flask import Flask
        ...
        </file>

    Raises:
        NoPatternsError: If no patterns are given.
        ValueError: If the output format or the maximum file size is invalid.
        TokenizerNotAvailableError: If a tokenizer model is given but tiktoken is not installed.
    """

    def __init__(
        self,
        root_path: PathType,
        patterns: Sequence[Union[str, GlobPattern]],
        *,
        output_format: Union[str, OutputFormat] = OutputFormat.XML,
        include_tree: bool = False,
        line_numbers: bool = False,
        list_only: bool = False,
        max_file_size: Union[str, int] = MAX_FILE_SIZE,
        tokenizer_model: Optional[str] = None,
        max_open_files: int = MAX_OPEN_FILES,
    ) -> None:
        if not patterns:
            raise NoPatternsError()

        self.patterns = [pattern if isinstance(pattern, GlobPattern) else GlobPattern(pattern) for pattern in patterns]
        self.include_tree = include_tree
        self.list_only = list_only

        self._fs_tree = FileSystemTree(root_path, max_open_files=max_open_files)
        self.root_path = self._fs_tree.root_path
        self._strategy: OutputStrategy = get_output_strategy(output_format)
        self._renderer = FileContentRenderer(
            self.root_path,
            line_numbers=line_numbers,
            max_file_size=max_file_size,
            max_open_files=max_open_files,
        )
        self._counter = TokenCounter(model=tokenizer_model)

        self._selected_files: Optional[List[FileNode]] = None
        self._token_count: Optional[int] = None

    @property
    def tree(self) -> DirectoryNode:
        """Root of the scanned, ignore-filtered tree.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
        """
        return self._fs_tree.get_tree()

    @property
    def selected_files(self) -> List[FileNode]:
        """The selected files, in tree order."""
        if self._selected_files is None:
            self._selected_files = select_files(self.tree, self.patterns)
        return self._selected_files

    @property
    def visible_paths(self) -> Set[str]:
        """Paths of the selected files and all their ancestor directories."""
        return get_tree_paths(self.selected_files)

    @property
    def file_count(self) -> int:
        """Number of selected files."""
        return len(self.selected_files)

    @property
    def total_size(self) -> int:
        """Combined size in bytes of the selected files."""
        return sum(file.file_size for file in self.selected_files)

    @property
    def token_count(self) -> Optional[int]:
        """Token count of the most recent render() output, or None before the first render."""
        return self._token_count

    @property
    def token_count_is_exact(self) -> bool:
        """Whether token_count comes from a tokenizer rather than an estimate."""
        return self._counter.is_exact

    def render_tree(self) -> str:
        """Render the directory tree pruned to the selected files."""
        return self._fs_tree.get_tree_representation(self.visible_paths)

    def render_files(self) -> List[RenderedFile]:
        """Render the contents of the selected files, in selection order."""
        return self._renderer.render_files(self.selected_files)

    def render(self) -> str:
        """Render the complete output.

        In list mode the output is the selected relative paths, one per line.
        Otherwise it is the selected files (and the pruned tree, if enabled)
        serialized in the configured output format.

        Raises:
            TokenizationError: If exact token counting fails on the output.
        """
        if self.list_only:
            output = "\n".join(file.relative_path for file in self.selected_files)
        else:
            directory = self.render_tree() if self.include_tree else None
            output = self._strategy.format_output(self.render_files(), directory)

        self._counter.reset_counts()
        self._token_count = self._counter.count(output).tokens

        logger.info("Selected files: %d", self.file_count)
        logger.info("Total size: %s", format_size(self.total_size, binary=True))
        logger.info("%s tokens: %d", "Exact" if self.token_count_is_exact else "Estimated", self._token_count)
        return output
