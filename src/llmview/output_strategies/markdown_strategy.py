"""Markdown output strategy."""

import os
from typing import Optional, Sequence

from llmview.constants import LANG_MAP
from llmview.file_content_renderer import RenderedFile

from .base_strategy import OutputStrategy

FENCE = "```"


def get_language(filename: str) -> str:
    """Get the code fence language tag for a file name.

    Known extensions are mapped through LANG_MAP; anything else uses the bare
    extension, and a file without one gets an untagged fence.

    Example:
        >>> get_language("deploy.sh")
        'bash'
        >>> get_language("schema.sql")
        'sql'
        >>> get_language("Makefile")
        ''
    """
    extension = os.path.splitext(filename)[1].lower()
    return LANG_MAP.get(extension, extension[1:])


class MarkdownOutputStrategy(OutputStrategy):
    """Output strategy that renders each file as a fenced code block.

    Each file is introduced by its path in backticks, followed by a code fence
    tagged with the file's language. The tree, when included, comes first in an
    untagged fence. Blocks are separated by blank lines.

    Example:
        >>> from llmview.file_system_tree import FileNode
        >>> rendered = [RenderedFile(FileNode("index.ts", "src/index.ts"), "const x = 1;")]
        >>> print(MarkdownOutputStrategy().format_output(rendered))
        `src/index.ts`
        ```ts
        const x = 1;
        ```
    """

    def format_output(self, rendered_files: Sequence[RenderedFile], directory: Optional[str] = None) -> str:
        parts = []
        if directory:
            parts.append(f"{FENCE}\n{directory}\n{FENCE}")
        for rendered in rendered_files:
            language = get_language(rendered.file.name)
            parts.append(f"`{rendered.file.relative_path}`\n{FENCE}{language}\n{rendered.content}\n{FENCE}")
        return "\n\n".join(parts)
