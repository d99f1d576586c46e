"""Loading and maintenance of the ignore file at the root of a flattened directory."""

import logging
from pathlib import Path
from typing import Optional

from flatten.exceptions import ReadError
from flatten.exclusion_rules.git_rules import GitIgnoreExclusionRules
from flatten.types import PathType

logger = logging.getLogger(__name__)

DEFAULT_IGNORE_FILE = ".gitignore"


def load_ignore_rules(
    directory: PathType, ignore_file_name: str = DEFAULT_IGNORE_FILE
) -> Optional[GitIgnoreExclusionRules]:
    """Compile the ignore file found directly in directory.

    Only the root ignore file is consulted; ignore files in subdirectories are regular
    entries like any other.

    Args:
        directory: The directory being flattened.
        ignore_file_name: Name of the ignore file. Defaults to ".gitignore".

    Returns:
        The compiled rules, or None when no ignore file is present.

    Raises:
        ReadError: If the ignore file exists but cannot be read.
        PatternCompileError: If the ignore file contains a malformed pattern.
    """
    ignore_path = Path(directory) / ignore_file_name
    if not ignore_path.is_file():
        logger.debug("No %s found in %s", ignore_file_name, directory)
        return None
    return GitIgnoreExclusionRules(ignore_path)


def has_ignore_entry(directory: PathType, entry: str, ignore_file_name: str = DEFAULT_IGNORE_FILE) -> bool:
    """Check whether the ignore file already lists entry on a line of its own.

    Args:
        directory: Directory holding the ignore file.
        entry: The pattern to look for.
        ignore_file_name: Name of the ignore file.

    Returns:
        True if a line equal to entry (ignoring surrounding whitespace) exists.

    Raises:
        ReadError: If the ignore file exists but cannot be read.
    """
    ignore_path = Path(directory) / ignore_file_name
    if not ignore_path.exists():
        return False
    try:
        with open(ignore_path, "r", encoding="utf-8", errors="surrogateescape") as f:
            return any(line.strip() == entry for line in f)
    except OSError as e:
        raise ReadError(str(ignore_path), e.strerror or str(e)) from e


def append_ignore_entry(directory: PathType, entry: str, ignore_file_name: str = DEFAULT_IGNORE_FILE) -> bool:
    """Add entry to the ignore file, creating the file when needed.

    Used by the CLI to keep its own output file out of later runs.

    Args:
        directory: Directory holding the ignore file.
        entry: The pattern to add.
        ignore_file_name: Name of the ignore file.

    Returns:
        True if the file was created or extended, False if the entry was already there.

    Raises:
        ReadError: If the existing ignore file cannot be read.
        OSError: If the ignore file cannot be written.

    Example:
        >>> import tempfile
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     first = append_ignore_entry(tmpdir, "flat.txt")
        ...     second = append_ignore_entry(tmpdir, "flat.txt")
        >>> first, second
        (True, False)
    """
    ignore_path = Path(directory) / ignore_file_name

    if not ignore_path.exists():
        ignore_path.write_text(
            f"# Output files from flatten tool\n{entry}\n", encoding="utf-8", errors="surrogateescape"
        )
        logger.info("Created %s with entry %s", ignore_path, entry)
        return True

    if has_ignore_entry(directory, entry, ignore_file_name):
        return False

    with open(ignore_path, "a", encoding="utf-8", errors="surrogateescape") as f:
        f.write(f"\n# Output file from flatten tool\n{entry}\n")
    logger.info("Appended %s to %s", entry, ignore_path)
    return True
