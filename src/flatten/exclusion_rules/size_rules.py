"""Size-based exclusion rules for filtering files by size."""

import os
from typing import Union

from humanfriendly import InvalidSize, parse_size


def parse_file_size(size_str: str) -> int:
    """Parse human-readable file size to bytes.

    Args:
        size_str: Size string like '1GB', '500MB', '2.5K', '1MiB' or just '1024'

    Returns:
        Size in bytes

    Raises:
        ValueError: If size_str is not a valid size format

    Example:
        >>> parse_file_size("1KB")
        1000
        >>> parse_file_size("1KiB")
        1024
    """
    try:
        return int(parse_size(size_str))
    except InvalidSize as e:
        raise ValueError(f"Invalid size format '{size_str}': {e}") from e


class SizeExclusionRules:
    """Exclusion of files larger than a configured limit.

    Unlike the pattern rules this one works on real filesystem paths, because it has
    to stat the file. Directories are never excluded, and a file whose size cannot be
    determined is kept.

    Attributes:
        max_size_bytes (int): Maximum allowed file size in bytes.

    Example:
        >>> SizeExclusionRules("1MB").max_size_bytes
        1000000
        >>> SizeExclusionRules(2048).max_size_bytes
        2048
    """

    def __init__(self, max_size: Union[str, int]):
        """Initialize size exclusion rules.

        Args:
            max_size: Maximum file size, either human-readable ('1GB', '500KB') or bytes.

        Raises:
            ValueError: If max_size is negative or not a valid size.
        """
        if isinstance(max_size, bool) or not isinstance(max_size, (str, int)):
            raise ValueError(f"max_size must be string or int, got {type(max_size)}")
        if isinstance(max_size, str):
            max_size = parse_file_size(max_size)
        if max_size < 0:
            raise ValueError("Size cannot be negative")
        self.max_size_bytes = max_size

    def exclude(self, fs_path: str) -> bool:
        """Check if the file at fs_path is larger than the limit.

        Args:
            fs_path: Filesystem path of the file (followed if it is a symlink).

        Returns:
            True if the path is a file exceeding the limit, False otherwise.
        """
        try:
            if not os.path.isfile(fs_path):
                return False
            return os.path.getsize(fs_path) > self.max_size_bytes
        except OSError:
            return False
