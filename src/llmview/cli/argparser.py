"""Command-line argument parsing for llmview.

This module defines the command-line interface for llmview,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path

from llmview import __version__
from llmview.constants import MAX_FILE_SIZE
from llmview.file_content_renderer import parse_file_size
from llmview.types import OutputFormat
from llmview.view_file import STDIN_MARKER


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with llmview's options.
    """
    description = """
    llmview: Generate LLM context from a codebase using view files of glob patterns.

    A view file lists glob patterns, one per line, applied in order against paths
    relative to the project root. Plain patterns include the files they match and
    patterns starting with "!" exclude them; the last matching pattern wins.
    Text after "#" is a comment.

    Files excluded by .gitignore files (at the root or in any subdirectory), version
    control metadata, bytecode caches and node_modules directories are never
    selected. Symbolic links are skipped.
    """

    epilog = """
    Examples:
      # Render the files selected by a view file as XML
      llmview .llmview

      # Read patterns from standard input
      printf 'src/**\\n!src/**/*.test.ts\\n' | llmview

      # Include the pruned directory tree and line numbers
      llmview -t -n .llmview

      # Just list the selected files
      llmview -l .llmview

      # Markdown output written to a file, for a project elsewhere
      llmview -f markdown -o context.md -r ../backend views/api.llmview

      # Raise the per-file size limit
      llmview -s 1MiB .llmview

      # Print statistics with exact token counts for a model
      llmview -v -k gpt-4o .llmview
    """

    parser = argparse.ArgumentParser(
        prog="llmview",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"llmview {__version__}", help="Show the version and exit"
    )

    parser.add_argument(
        "view_file",
        nargs="?",
        default=STDIN_MARKER,
        metavar="VIEW_FILE",
        help='Path to a view file of glob patterns. "-" or no argument reads patterns from standard input.',
    )
    parser.add_argument(
        "-r",
        "--root",
        type=Path,
        default=Path("."),
        metavar="DIR",
        help="Project root the patterns are matched against (default: current directory).",
    )
    parser.add_argument(
        "-t",
        "--tree",
        action="store_true",
        help="Include a directory tree pruned to the selected files.",
    )
    parser.add_argument(
        "-n",
        "--number",
        action="store_true",
        help="Prefix every line of file contents with its line number.",
    )
    parser.add_argument(
        "-l",
        "--list",
        action="store_true",
        help="Only list the selected file paths, one per line.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=[fmt.value for fmt in OutputFormat],
        default=OutputFormat.XML.value,
        help="Output format (default: xml).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "-s",
        "--max-file-size",
        metavar="SIZE",
        default=MAX_FILE_SIZE,
        help=(
            f"Leave out the contents of files larger than SIZE, e.g. 100KB, 1MiB (default: {MAX_FILE_SIZE}). "
            "Unit prefixes are binary."
        ),
    )
    parser.add_argument(
        "-k",
        "--tokenizer",
        metavar="MODEL",
        help="Count tokens exactly with the tokenizer of MODEL (e.g., gpt-4o) instead of estimating. Requires tiktoken.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Print statistics to stderr. Repeat for debug logging.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    parse_file_size(args.max_file_size)

    if args.list and args.number:
        raise ValueError("-n/--number has no effect with -l/--list")
