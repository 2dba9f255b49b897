from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class OutputFormat(str, Enum):
    """Serialization formats for a rendered selection.

    Attributes:
        XML: ``<directory>`` and ``<file path="...">`` elements.
        JSON: A single JSON document with ``directory`` and ``files`` keys.
        MARKDOWN: Fenced code blocks tagged with the file's language.
    """

    XML = "xml"
    JSON = "json"
    MARKDOWN = "markdown"
