"""JSON output strategy."""

import json
from typing import Any, Dict, Optional, Sequence

from llmview.file_content_renderer import RenderedFile

from .base_strategy import OutputStrategy


class JSONOutputStrategy(OutputStrategy):
    """Output strategy that serializes the selection as one JSON document.

    The document has the following structure::

        {
          "directory": "project/\\n└── main.py",
          "files": [
            {"path": "main.py", "size": 42, "content": "file content..."}
          ]
        }

    ``directory`` is omitted when no tree is included. ``size`` is the file's size
    in bytes at scan time, not the length of the rendered content.

    Attributes:
        indent: Indentation passed to json.dumps.

    Example:
        >>> from llmview.file_system_tree import FileNode
        >>> rendered = [RenderedFile(FileNode("a.ts", "a.ts", file_size=3), "aaa")]
        >>> print(JSONOutputStrategy().format_output(rendered))
        {
          "files": [
            {
              "path": "a.ts",
              "size": 3,
              "content": "aaa"
            }
          ]
        }
    """

    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def format_output(self, rendered_files: Sequence[RenderedFile], directory: Optional[str] = None) -> str:
        document: Dict[str, Any] = {}
        if directory is not None:
            document["directory"] = directory
        document["files"] = [
            {"path": rendered.file.relative_path, "size": rendered.file.file_size, "content": rendered.content}
            for rendered in rendered_files
        ]
        return json.dumps(document, indent=self.indent, ensure_ascii=False)
