"""Per-file metadata lookups used by the renderer.

These are thin wrappers over the standard library. Lookups that can legitimately be
unavailable (owner names without a passwd entry, platforms without ownership) return
None so the renderer can omit the line.
"""

import mimetypes
import stat
from datetime import datetime, timedelta
from pathlib import Path
from typing import Optional

from flatten.file_system_tree.binary_detector import SNIFF_SIZE, looks_binary


def format_rfc3339(moment: datetime) -> str:
    """Format an aware datetime as RFC 3339 to the second, writing UTC as "Z".

    Example:
        >>> from datetime import timezone
        >>> format_rfc3339(datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc))
        '2023-11-14T22:13:20Z'
        >>> format_rfc3339(datetime(2023, 11, 14, 23, 13, 20, tzinfo=timezone(timedelta(hours=1))))
        '2023-11-14T23:13:20+01:00'
    """
    formatted = moment.isoformat(timespec="seconds")
    if moment.utcoffset() == timedelta(0):
        return formatted[: -len("+00:00")] + "Z"
    return formatted


def format_timestamp(modified_at: float) -> str:
    """Format an epoch timestamp as RFC 3339 in local time, to the second."""
    return format_rfc3339(datetime.fromtimestamp(int(modified_at)).astimezone())


def format_mode(mode: int) -> str:
    """Format st_mode bits like ls -l does.

    Example:
        >>> format_mode(0o100644)
        '-rw-r--r--'
        >>> format_mode(0o040755)
        'drwxr-xr-x'
    """
    return stat.filemode(mode)


def guess_mime_type(path: str, content: bytes) -> str:
    """Guess a MIME type from the file name, falling back to sniffing the content.

    Example:
        >>> guess_mime_type("index.html", b"")
        'text/html'
        >>> guess_mime_type("NOTES", b"plain words")
        'text/plain; charset=utf-8'
        >>> guess_mime_type("blob", b"\\x00\\x01\\x02")
        'application/octet-stream'
    """
    mime_type, _ = mimetypes.guess_type(path)
    if mime_type:
        return mime_type
    head = content[:SNIFF_SIZE]
    if looks_binary(head):
        return "application/octet-stream"
    try:
        head.decode("utf-8")
    except UnicodeDecodeError as e:
        # A multi-byte character cut at the sniff boundary is still UTF-8
        if len(content) <= SNIFF_SIZE or e.start < len(head) - 3:
            return "text/plain"
    return "text/plain; charset=utf-8"


def lookup_owner(path: str) -> Optional[str]:
    """Return the name of the user owning path, or None if it cannot be resolved."""
    try:
        return Path(path).owner()
    except (KeyError, NotImplementedError, OSError):
        return None


def lookup_group(path: str) -> Optional[str]:
    """Return the name of the group owning path, or None if it cannot be resolved."""
    try:
        return Path(path).group()
    except (KeyError, NotImplementedError, OSError):
        return None
