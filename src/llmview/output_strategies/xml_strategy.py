"""XML-style output strategy."""

from typing import Optional, Sequence
from xml.sax.saxutils import escape as xml_escape

from llmview.file_content_renderer import RenderedFile

from .base_strategy import OutputStrategy

ATTRIBUTE_ENTITIES = {'"': "&quot;"}


class XMLOutputStrategy(OutputStrategy):
    """Output strategy that wraps the tree and each file in XML-style tags.

    The output has the following structure::

        <directory>
        project/
        └── main.py
        </directory>
        <file path="main.py">
        file content...
        </file>

    The path attribute is always double-quoted and escaped with xml.sax.saxutils,
    double quotes included. File contents are emitted verbatim so that source code
    stays readable; the result is meant for language models rather than XML parsers.

    Example:
        >>> from llmview.file_system_tree import FileNode
        >>> rendered = [RenderedFile(FileNode("index.ts", "src/index.ts"), 'console.log("hi")')]
        >>> print(XMLOutputStrategy().format_output(rendered))
        <file path="src/index.ts">
        console.log("hi")
        </file>
    """

    def format_output(self, rendered_files: Sequence[RenderedFile], directory: Optional[str] = None) -> str:
        sections = []
        if directory:
            sections.append(f"<directory>\n{directory}\n</directory>")
        for rendered in rendered_files:
            path = xml_escape(rendered.file.relative_path, ATTRIBUTE_ENTITIES)
            sections.append(f'<file path="{path}">\n{rendered.content}\n</file>')
        return "\n".join(sections)
