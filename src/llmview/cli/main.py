"""Command-line interface for llmview.

This module provides the command-line interface for llmview, which reads a view
file of glob patterns and prints the selected files of a project in a format
suited to Large Language Models.

Exit Codes:
    0: Successful completion
    1: Runtime error during execution (missing view file or root, no patterns, ...)
    2: Command-line syntax error
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (e.g. output piped to ``head``)

Example:
    # Render the selection described by a view file
    $ llmview .llmview

    # Pruned tree plus numbered contents, as Markdown
    $ llmview -t -n -f markdown .llmview

    # Display version information
    $ llmview --version
"""

import logging
import os
import sys
from typing import List, Optional

from llmview.cli.argparser import create_parser, validate_args
from llmview.cli.safe_writer import SafeWriter
from llmview.exceptions import NoPatternsError
from llmview.llmview import CodebaseView
from llmview.view_file import STDIN_MARKER, load_patterns

logger = logging.getLogger(__name__)


def configure_logging(verbosity: int) -> None:
    """Send llmview's log records to stderr at a level chosen by the -v count."""
    if verbosity <= 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger = logging.getLogger("llmview")
    package_logger.handlers[:] = [handler]
    package_logger.setLevel(level)
    package_logger.propagate = False


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the llmview command-line interface.

    Args:
        argv: Arguments to parse instead of ``sys.argv[1:]``.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        validate_args(args)
        configure_logging(args.verbose)

        patterns = load_patterns(args.view_file)
        if not patterns:
            source = "standard input" if args.view_file == STDIN_MARKER else args.view_file
            raise NoPatternsError(source)
        logger.debug("Loaded %d patterns", len(patterns))

        view = CodebaseView(
            args.root,
            patterns,
            output_format=args.format,
            include_tree=args.tree,
            line_numbers=args.number,
            list_only=args.list,
            max_file_size=args.max_file_size,
            tokenizer_model=args.tokenizer,
        )
        output = view.render()

        output_file = args.output if args.output else sys.stdout.fileno()
        with SafeWriter(output_file) as safe_writer:
            safe_writer.write(output + "\n")

    except BrokenPipeError:
        # Python flushes stdout at exit; point it at devnull so that flush cannot fail again.
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        sys.exit(141)
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
