"""Exact-duplicate detection by content digest."""

import hashlib
from typing import Dict, Optional


def content_digest(data: bytes) -> str:
    """Return the SHA-256 hex digest of data.

    Example:
        >>> content_digest(b"hello")
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).hexdigest()


class ContentIndex:
    """Maps content digests to the path of the first file seen with that content.

    First seen wins: the first file with a digest is the canonical copy, every later
    file with the same digest is reported as identical to it. Digest collisions are
    treated as identity.

    An index lives for a single rendering pass.

    Example:
        >>> index = ContentIndex()
        >>> digest = content_digest(b"hello")
        >>> index.first_seen(digest, "a.txt") is None
        True
        >>> index.first_seen(digest, "sub/b.txt")
        'a.txt'
        >>> len(index)
        1
    """

    def __init__(self) -> None:
        self._paths: Dict[str, str] = {}

    def first_seen(self, digest: str, path: str) -> Optional[str]:
        """Look up digest, recording path as canonical if it is new.

        Args:
            digest: Content digest of the file being rendered.
            path: Path of the file being rendered.

        Returns:
            The canonical path for digest if one was recorded earlier, otherwise None
            (and path becomes the canonical copy).
        """
        existing = self._paths.get(digest)
        if existing is None:
            self._paths[digest] = path
        return existing

    def record(self, digest: str, path: str) -> None:
        """Record path as the canonical copy of digest unless one already exists."""
        self._paths.setdefault(digest, path)

    def lookup(self, digest: str) -> Optional[str]:
        """Return the canonical path recorded for digest, if any."""
        return self._paths.get(digest)

    def clear(self) -> None:
        self._paths.clear()

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, digest: object) -> bool:
        return digest in self._paths
