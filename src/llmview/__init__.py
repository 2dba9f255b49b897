"""Filtered codebase snapshots for Large Language Models.

This package walks a project directory, applies layered .gitignore rules,
selects files with ordered include/exclude glob patterns and renders the
selection (optionally with a pruned directory tree) as XML, JSON or Markdown.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("llmview")
except PackageNotFoundError:
    __version__ = "unknown"
