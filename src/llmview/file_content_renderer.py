"""Rendering of selected files' contents.

How a file is rendered is decided by an ordered table of render rules, each a
predicate paired with a handler. The first rule whose predicate accepts the file
renders it; files no rule accepts are read as text. Rules only look at what is
cheap to know (extension, size from the scan) except the binary rule, which reads
the first few kilobytes.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from itertools import islice
from pathlib import Path
from typing import Callable, List, NamedTuple, Optional, Sequence, Union

from humanfriendly import InvalidSize, parse_size

from llmview.constants import CSV_PREVIEW_LINES, LINE_NUMBER_WIDTH, MAX_FILE_SIZE, MAX_OPEN_FILES
from llmview.file_system_tree.binary_detector import is_binary_file
from llmview.file_system_tree.file_system_node import FileNode
from llmview.types import PathType

logger = logging.getLogger(__name__)

EXCLUDED_EXTENSIONS = frozenset(
    {
        # Spreadsheets
        ".xls",
        ".xlsx",
        # Media
        ".ico",
        ".png",
        ".jpg",
        ".jpeg",
        ".gif",
        ".webp",
        ".mp4",
        # Documents and archives
        ".pdf",
        ".zip",
    }
)


def parse_file_size(size: Union[str, int]) -> int:
    """Parse a human-readable size limit to bytes.

    Unit prefixes are binary, so ``250KB`` and ``250KiB`` both mean 256000 bytes.

    Raises:
        ValueError: If size is not a valid size.

    Example:
        >>> parse_file_size("250KB")
        256000
        >>> parse_file_size("1M")
        1048576
        >>> parse_file_size(1024)
        1024
    """
    if isinstance(size, int):
        if size < 0:
            raise ValueError(f"Invalid size '{size}': must not be negative")
        return size
    try:
        return int(parse_size(size, binary=True))
    except InvalidSize as e:
        raise ValueError(f"Invalid size format '{size}': {e}")


@dataclass(frozen=True)
class RenderOptions:
    """Options shared by all render rules.

    Attributes:
        line_numbers: Prefix every line with its 1-based number.
        max_file_size: Size in bytes above which contents are left out.
    """

    line_numbers: bool = False
    max_file_size: int = parse_file_size(MAX_FILE_SIZE)


@dataclass(frozen=True)
class RenderedFile:
    """A selected file together with its rendered contents."""

    file: FileNode
    content: str


RenderPredicate = Callable[[Path, FileNode, RenderOptions], bool]
RenderHandler = Callable[[Path, FileNode, RenderOptions], str]


class RenderRule(NamedTuple):
    """One entry of the render rule table."""

    name: str
    predicate: RenderPredicate
    handler: RenderHandler


def number_lines(lines: Sequence[str]) -> str:
    """Join lines, each prefixed with its right-aligned 1-based number and a tab.

    Example:
        >>> number_lines(["a", "b"])
        '     1\\ta\\n     2\\tb'
    """
    return "\n".join(f"{index:>{LINE_NUMBER_WIDTH}}\t{line}" for index, line in enumerate(lines, start=1))


def has_extension(*extensions: str) -> RenderPredicate:
    """Build a predicate accepting files whose name ends with one of the extensions."""
    lowered = tuple(extension.lower() for extension in extensions)

    def predicate(path: Path, file: FileNode, options: RenderOptions) -> bool:
        return file.name.lower().endswith(lowered)

    return predicate


def is_oversized(path: Path, file: FileNode, options: RenderOptions) -> bool:
    return file.file_size > options.max_file_size


def is_binary(path: Path, file: FileNode, options: RenderOptions) -> bool:
    return is_binary_file(path)


def render_csv_preview(path: Path, file: FileNode, options: RenderOptions) -> str:
    with open(path, "r", encoding="utf-8", errors="replace") as handle:
        lines = [line.rstrip("\r\n") for line in islice(handle, CSV_PREVIEW_LINES + 1)]

    has_more = len(lines) > CSV_PREVIEW_LINES
    lines = lines[:CSV_PREVIEW_LINES]
    preview = number_lines(lines) if options.line_numbers else "\n".join(lines)
    return f"{preview}\n... (more rows)" if has_more else preview


def render_excluded(path: Path, file: FileNode, options: RenderOptions) -> str:
    return "(Contents excluded)"


def render_size_notice(path: Path, file: FileNode, options: RenderOptions) -> str:
    return (
        f"(File contents excluded: size {file.file_size / 1024:.2f}KB "
        f"exceeds {options.max_file_size / 1024:g}KB limit)"
    )


def render_binary_notice(path: Path, file: FileNode, options: RenderOptions) -> str:
    return "(Contents excluded: binary file)"


def render_text(path: Path, file: FileNode, options: RenderOptions) -> str:
    """Default rendering: the file's text, optionally with line numbers."""
    content = path.read_text(encoding="utf-8", errors="replace")
    if options.line_numbers:
        return number_lines(content.split("\n"))
    return content


RENDER_RULES = (
    RenderRule("csv", has_extension(".csv"), render_csv_preview),
    RenderRule("excluded", has_extension(*EXCLUDED_EXTENSIONS), render_excluded),
    RenderRule("oversized", is_oversized, render_size_notice),
    RenderRule("binary", is_binary, render_binary_notice),
)


class FileContentRenderer:
    """Renders the contents of selected files relative to a project root.

    Files are rendered concurrently through a bounded thread pool; results keep the
    order of the input.

    Attributes:
        root_path (Path): Project root the files' relative paths are resolved against.
        options (RenderOptions): Line numbering and size limit.
        rules (Sequence[RenderRule]): Render rules, tried in order.
        max_open_files (int): Upper bound on files read concurrently.

    Example:
        >>> renderer = FileContentRenderer("project", line_numbers=True)  # doctest: +SKIP
        >>> for rendered in renderer.render_files(selected):  # doctest: +SKIP
        ...     print(rendered.file.relative_path, len(rendered.content))
    """

    def __init__(
        self,
        root_path: PathType,
        *,
        line_numbers: bool = False,
        max_file_size: Union[str, int] = MAX_FILE_SIZE,
        rules: Sequence[RenderRule] = RENDER_RULES,
        default: RenderHandler = render_text,
        max_open_files: int = MAX_OPEN_FILES,
    ) -> None:
        self.root_path = Path(root_path)
        self.options = RenderOptions(line_numbers=line_numbers, max_file_size=parse_file_size(max_file_size))
        self.rules = tuple(rules)
        self.default = default
        self.max_open_files = max_open_files

    def _select_handler(self, path: Path, file: FileNode) -> RenderHandler:
        for rule in self.rules:
            if rule.predicate(path, file, self.options):
                return rule.handler
        return self.default

    def render_file(self, file: FileNode) -> str:
        """Render one file.

        A file that can no longer be read (removed or made unreadable since the
        scan) renders as a short notice instead of failing the whole output.
        """
        path = self.root_path / file.relative_path
        try:
            return self._select_handler(path, file)(path, file, self.options)
        except OSError as e:
            logger.warning("Failed to read '%s': %s", file.relative_path, e.strerror or e)
            return f"(Contents unavailable: {e.strerror or e})"

    def render_files(self, files: Sequence[FileNode]) -> List[RenderedFile]:
        """Render files concurrently, preserving their order."""
        if self.max_open_files <= 1 or len(files) <= 1:
            contents = [self.render_file(file) for file in files]
        else:
            with ThreadPoolExecutor(max_workers=min(self.max_open_files, len(files))) as executor:
                contents = list(executor.map(self.render_file, files))
        return [RenderedFile(file, content) for file, content in zip(files, contents)]


def render_files(
    root_path: PathType, files: Sequence[FileNode], *, line_numbers: bool = False, max_file_size: Optional[int] = None
) -> List[RenderedFile]:
    """Render files with the default rule table."""
    renderer = FileContentRenderer(
        root_path,
        line_numbers=line_numbers,
        max_file_size=MAX_FILE_SIZE if max_file_size is None else max_file_size,
    )
    return renderer.render_files(files)
