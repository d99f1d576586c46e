"""Command-line argument parsing for flatten.

This module defines the command-line interface for flatten and converts the parsed
arguments into the immutable option values used by the library.
"""

import argparse
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from flatten import __version__
from flatten.renderer import RenderOptions
from flatten.visibility_filter import FilterOptions


class PatternListAction(argparse.Action):
    """Collect comma-separated pattern lists from repeated options.

    "-I '*.go,*.js' -I '*.md'" yields ["*.go", "*.js", "*.md"]. Empty items are dropped.
    """

    def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
        super().__init__(option_strings, dest, **kwargs)

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        patterns = list(getattr(namespace, self.dest, None) or [])
        if values is not None:
            patterns.extend(item.strip() for item in str(values).split(",") if item.strip())
        setattr(namespace, self.dest, patterns)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with flatten's options.
    """
    description = """
    flatten: output a directory as a single flat text document.

    The output starts with the number of files, their total size and a tree diagram,
    followed by one record per file holding its path, optional metadata and its
    content. Files whose content is identical to a file shown earlier refer to that
    file instead of repeating the content.

    By default the .git directory, binary files and anything matched by the
    directory's .gitignore are left out.
    """

    epilog = """
    Examples:
      # Flatten the current directory to stdout
      flatten

      # Flatten a project including files ignored by its .gitignore
      flatten -i /path/to/project

      # Only Go and JavaScript sources, but no tests
      flatten -I '*.go,*.js' -E '*_test.go' /path/to/project

      # Show every piece of metadata and checksums
      flatten -a /path/to/project

      # Write to a file and keep that file out of later runs
      flatten -w flat.txt --ignore-output /path/to/project
    """

    parser = argparse.ArgumentParser(
        prog="flatten",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"flatten {__version__}", help="Show the version and exit"
    )
    parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="The directory to flatten (default: current directory).",
    )

    filtering = parser.add_argument_group("filtering")
    filtering.add_argument(
        "-i",
        "--include-gitignore",
        action="store_true",
        help="Include files that would normally be ignored by .gitignore.",
    )
    filtering.add_argument(
        "-g", "--include-git", action="store_true", help="Include the .git directory and its contents."
    )
    filtering.add_argument("--include-bin", action="store_true", help="Include binary files in the output.")
    filtering.add_argument(
        "-I",
        "--include",
        metavar="PATTERNS",
        action=PatternListAction,
        default=[],
        help="Include only files matching these comma-separated patterns (e.g. '*.go,*.js').",
    )
    filtering.add_argument(
        "-E",
        "--exclude",
        metavar="PATTERNS",
        action=PatternListAction,
        default=[],
        help="Exclude files matching these comma-separated patterns (e.g. '*.test.js').",
    )
    filtering.add_argument(
        "--max-size",
        metavar="SIZE",
        help="Exclude files larger than SIZE (e.g. 500KB, 2MiB, 4096).",
    )

    metadata = parser.add_argument_group("metadata")
    metadata.add_argument("-l", "--last-updated", action="store_true", help="Show last updated time for each file.")
    metadata.add_argument("-m", "--show-mode", action="store_true", help="Show file permissions.")
    metadata.add_argument("-z", "--show-size", action="store_true", help="Show individual file sizes.")
    metadata.add_argument("-t", "--show-mime", action="store_true", help="Show file MIME types.")
    metadata.add_argument("-y", "--show-symlinks", action="store_true", help="Show symlink targets.")
    metadata.add_argument("-o", "--show-owner", action="store_true", help="Show file owner and group.")
    metadata.add_argument("-c", "--show-checksum", action="store_true", help="Show SHA256 checksum of files.")
    metadata.add_argument("-a", "--all-metadata", action="store_true", help="Show all available metadata.")

    output = parser.add_argument_group("output")
    output.add_argument("--no-dedup", action="store_true", help="Disable file deduplication.")
    output.add_argument(
        "-w",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    output.add_argument(
        "--ignore-output",
        action="store_true",
        help="Add the output file to the directory's .gitignore (requires -w/--output).",
    )
    output.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-v for info, -vv for debug).",
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
    if args.ignore_output and not args.output:
        raise ValueError("--ignore-output requires -w/--output to be specified")
    if not Path(args.directory).exists():
        raise ValueError(f"'{args.directory}' does not exist")


def filter_options_from_args(args: argparse.Namespace) -> FilterOptions:
    """Build the visibility filter configuration from parsed arguments."""
    return FilterOptions(
        include_ignored=args.include_gitignore,
        include_vcs=args.include_git,
        include_binary=args.include_bin,
        include_patterns=tuple(args.include),
        exclude_patterns=tuple(args.exclude),
        max_size=args.max_size,
    )


def render_options_from_args(args: argparse.Namespace) -> RenderOptions:
    """Build the renderer configuration from parsed arguments."""
    return RenderOptions(
        show_last_updated=args.last_updated,
        show_permissions=args.show_mode,
        show_size=args.show_size,
        show_mime_type=args.show_mime,
        show_symlink_targets=args.show_symlinks,
        show_ownership=args.show_owner,
        show_checksum=args.show_checksum,
        show_all_metadata=args.all_metadata,
        disable_deduplication=args.no_dedup,
    )
