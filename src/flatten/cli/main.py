"""Command-line interface for flatten.

This module wires the argument parser, the visibility filter, the tree builder and the
renderer together, and handles output redirection and interruption.

Signal Handling Notes:
    - SIGPIPE: Handled when the output pipe is closed (e.g., when piping to `head`)
    - SIGINT: Handled for clean exit on Ctrl+C

Exit Codes:
    0: Successful completion
    1: Runtime error during execution
    2: Command-line syntax error
    126: Permission denied
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # Flatten the current directory
    $ flatten

    # Flatten a project with all metadata into a file
    $ flatten -a -w flat.txt /path/to/project
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from flatten.cli.argparser import create_parser, filter_options_from_args, render_options_from_args, validate_args
from flatten.cli.safe_writer import SafeWriter
from flatten.cli.signal_handler import setup_signal_handling, signal_handler
from flatten.exceptions import FlattenError
from flatten.file_system_tree.tree_builder import build
from flatten.ignore_file import append_ignore_entry
from flatten.renderer import render
from flatten.visibility_filter import VisibilityFilter

logger = logging.getLogger(__name__)


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr at a level chosen by the number of -v flags."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def output_ignore_entry(output: Path, directory: Path) -> Optional[str]:
    """Return the ignore-file entry for an output file, or None if it lies outside directory.

    Example:
        >>> output_ignore_entry(Path("/srv/project/out/flat.txt"), Path("/srv/project"))
        'out/flat.txt'
        >>> output_ignore_entry(Path("/tmp/flat.txt"), Path("/srv/project")) is None
        True
    """
    try:
        return output.resolve().relative_to(directory.resolve()).as_posix()
    except ValueError:
        return None


def main() -> None:
    """Main entry point for the flatten command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
        126: Permission denied
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE) on Unix-like systems
    """
    setup_signal_handling()

    try:
        parser = create_parser()
        args = parser.parse_args()
        validate_args(args)
        configure_logging(args.verbose)

        directory = Path(args.directory)

        if args.ignore_output:
            entry = output_ignore_entry(args.output, directory)
            if entry is None:
                logger.warning("Output file %s is outside %s; not adding it to .gitignore", args.output, directory)
            else:
                append_ignore_entry(directory, entry)

        visibility_filter = VisibilityFilter(args.directory, filter_options_from_args(args))
        root = build(args.directory, visibility_filter)
        text = render(root, render_options_from_args(args))

        output_file = args.output if args.output else sys.stdout.fileno()
        with SafeWriter(output_file) as safe_writer:
            try:
                safe_writer.write(text)
            except BrokenPipeError:
                pass  # SafeWriter will automatically close in the context manager

    except FlattenError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        if isinstance(e.__cause__, PermissionError):
            sys.exit(126)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    exit_code = signal_handler.exit_code()
    if exit_code is not None:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
