"""Output formats for rendered selections."""

from typing import Dict, Type, Union

from llmview.types import OutputFormat

from .base_strategy import OutputStrategy
from .json_strategy import JSONOutputStrategy
from .markdown_strategy import MarkdownOutputStrategy, get_language
from .xml_strategy import XMLOutputStrategy

STRATEGIES: Dict[OutputFormat, Type[OutputStrategy]] = {
    OutputFormat.XML: XMLOutputStrategy,
    OutputFormat.JSON: JSONOutputStrategy,
    OutputFormat.MARKDOWN: MarkdownOutputStrategy,
}


def get_output_strategy(output_format: Union[str, OutputFormat]) -> OutputStrategy:
    """Create the strategy for an output format name.

    Raises:
        ValueError: If the format is not supported.

    Example:
        >>> type(get_output_strategy("markdown")).__name__
        'MarkdownOutputStrategy'
    """
    try:
        return STRATEGIES[OutputFormat(output_format)]()
    except ValueError:
        supported = ", ".join(fmt.value for fmt in OutputFormat)
        raise ValueError(f"Unsupported output format: {output_format!r} (expected one of: {supported})")


__all__ = [
    "JSONOutputStrategy",
    "MarkdownOutputStrategy",
    "OutputStrategy",
    "XMLOutputStrategy",
    "get_language",
    "get_output_strategy",
]
