"""Output strategy base class defining the interface for output formatting.

Every output format receives the same input: the rendered selected files, in
selection order, and optionally the rendered directory tree. Strategies only
serialize; they never read files or decide what is included.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from llmview.file_content_renderer import RenderedFile


class OutputStrategy(ABC):
    """Abstract base class for output formats.

    Example:
        >>> class PlainStrategy(OutputStrategy):
        ...     def format_output(self, rendered_files, directory=None):
        ...         return "\\n".join(rendered.content for rendered in rendered_files)
        ...
        >>> PlainStrategy().format_output([])
        ''
    """

    @abstractmethod
    def format_output(self, rendered_files: Sequence[RenderedFile], directory: Optional[str] = None) -> str:
        """Serialize rendered files and an optional directory tree.

        Args:
            rendered_files: Selected files with their rendered contents, in order.
            directory: Rendered tree, or None if the tree is not included.

        Returns:
            The complete output document.
        """
        pass
