"""Rendering of a built tree as a single flat text document.

The document starts with aggregate counters and an ASCII tree diagram, followed by a
record block per file with optional metadata and either the file's content or a
reference to an earlier file with identical content.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional

from anytree import ContStyle, PreOrderIter, RenderTree

from flatten.content_index import ContentIndex, content_digest
from flatten.file_system_tree.entry import Entry
from flatten.metadata import format_mode, format_timestamp, guess_mime_type, lookup_group, lookup_owner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderOptions:
    """Immutable rendering configuration.

    Each show_* toggle adds one metadata line to every file record. show_all_metadata
    turns all of them on. disable_deduplication emits every file's full content even
    when an identical file was rendered before.

    Example:
        >>> RenderOptions(show_all_metadata=True).wants_checksum
        True
        >>> RenderOptions(show_size=True).wants_checksum
        False
    """

    show_last_updated: bool = False
    show_permissions: bool = False
    show_size: bool = False
    show_mime_type: bool = False
    show_symlink_targets: bool = False
    show_ownership: bool = False
    show_checksum: bool = False
    show_all_metadata: bool = False
    disable_deduplication: bool = False

    @property
    def wants_last_updated(self) -> bool:
        return self.show_all_metadata or self.show_last_updated

    @property
    def wants_permissions(self) -> bool:
        return self.show_all_metadata or self.show_permissions

    @property
    def wants_size(self) -> bool:
        return self.show_all_metadata or self.show_size

    @property
    def wants_mime_type(self) -> bool:
        return self.show_all_metadata or self.show_mime_type

    @property
    def wants_symlink_targets(self) -> bool:
        return self.show_all_metadata or self.show_symlink_targets

    @property
    def wants_ownership(self) -> bool:
        return self.show_all_metadata or self.show_ownership

    @property
    def wants_checksum(self) -> bool:
        return self.show_all_metadata or self.show_checksum


def iterate_files(root: Entry) -> Iterator[Entry]:
    """Yield every file entry in depth-first, listing order."""
    return PreOrderIter(root, filter_=lambda node: not node.is_dir)


def count_files(root: Entry) -> int:
    """Count file entries below (and including) root. Directories are not counted."""
    return sum(1 for _ in iterate_files(root))


def total_size(root: Entry) -> int:
    """Sum the sizes of all file entries below (and including) root."""
    return sum(entry.file_size for entry in iterate_files(root))


def render_tree_diagram(root: Entry) -> str:
    """Draw the tree with box-drawing connectors, one line per entry below the root.

    Example:
        >>> root = Entry(".", is_dir=True)
        >>> sub = Entry("sub", parent=root, is_dir=True)
        >>> _ = Entry("sub/b.txt", parent=sub)
        >>> _ = Entry("a.txt", parent=root)
        >>> print(render_tree_diagram(root), end="")
        ├── sub
        │   └── b.txt
        └── a.txt
    """
    lines = []
    for prefix, _, node in RenderTree(root, style=ContStyle()):
        if node is root:
            continue
        lines.append(f"{prefix}{node.name}\n")
    return "".join(lines)


class Renderer:
    """Renders Entry trees according to a RenderOptions value.

    A Renderer holds no state between calls: every render() starts with a fresh
    ContentIndex, so rendering the same tree twice gives identical text.

    Attributes:
        options (RenderOptions): The configuration used for every render.

    Example:
        >>> root = Entry(".", is_dir=True)
        >>> _ = Entry("a.txt", parent=root, content=b"hello", file_size=5)
        >>> _ = Entry("b.txt", parent=root, content=b"hello", file_size=5)
        >>> print(Renderer().render(root), end="")
        - Total files: 2
        - Total size: 10 bytes
        - Dir tree:
        ├── a.txt
        └── b.txt
        <BLANKLINE>
        <BLANKLINE>
        - path: a.txt
        - content:
        ```
        hello
        ```
        <BLANKLINE>
        - path: b.txt
        - content: Contents are identical to a.txt
    """

    def __init__(self, options: Optional[RenderOptions] = None) -> None:
        self.options = options if options is not None else RenderOptions()

    def render(self, root: Entry) -> str:
        """Render root and everything below it.

        Args:
            root: Root entry as returned by the tree builder. It is never printed in
                the diagram itself.

        Returns:
            The complete flattened document. Bytes of file names and contents that are
            not valid UTF-8 are carried as surrogate escapes, so encoding the text with
            errors="surrogateescape" restores them exactly.
        """
        file_count = count_files(root)
        parts = [
            f"- Total files: {file_count}\n",
            f"- Total size: {total_size(root)} bytes\n",
            f"- Dir tree:\n{render_tree_diagram(root)}\n",
        ]

        index = ContentIndex()
        for entry in iterate_files(root):
            parts.append(self.render_record(entry, index))
        logger.debug("Rendered %d files, %d unique contents", file_count, len(index))
        return "".join(parts)

    def render_record(self, entry: Entry, index: ContentIndex) -> str:
        """Render the record block of a single file entry, updating index."""
        options = self.options
        content = entry.content or b""
        digest = content_digest(content)
        lines: List[str] = ["", f"- path: {entry.fs_path}"]

        if options.wants_last_updated:
            lines.append(f"- last updated: {format_timestamp(entry.modified_at)}")
        if options.wants_permissions:
            lines.append(f"- mode: {format_mode(entry.mode)}")
        if options.wants_size:
            lines.append(f"- size: {entry.file_size} bytes")
        if options.wants_mime_type:
            lines.append(f"- mime-type: {guess_mime_type(entry.fs_path, content)}")
        if options.wants_symlink_targets and entry.is_symlink and entry.symlink_target is not None:
            lines.append(f"- symlink-target: {entry.symlink_target}")
        if options.wants_ownership:
            owner = lookup_owner(entry.fs_path)
            if owner is not None:
                lines.append(f"- owner: {owner}")
            group = lookup_group(entry.fs_path)
            if group is not None:
                lines.append(f"- group: {group}")
        if options.wants_checksum:
            lines.append(f"- sha256: {digest}")

        canonical = None if options.disable_deduplication else index.first_seen(digest, entry.fs_path)
        if canonical is not None:
            lines.append(f"- content: Contents are identical to {canonical}")
        else:
            # Undecodable bytes become lone surrogates that encode back to the same bytes
            text = content.decode("utf-8", errors="surrogateescape")
            lines.append(f"- content:\n```\n{text}\n```")

        return "\n".join(lines) + "\n"


def render(entry: Entry, options: Optional[RenderOptions] = None) -> str:
    """Render entry with the given options. See Renderer.render()."""
    return Renderer(options).render(entry)
