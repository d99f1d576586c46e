"""Node representation for file system entries in the tree."""

import os
from typing import Any, Optional

from anytree import Node


class Entry(Node):  # type: ignore
    """Node class representing a visible file or directory.

    Extends anytree.Node so the tree can be traversed and rendered with anytree's
    iterators. Directories own their children, files own their content bytes.

    anytree reserves the ``path`` and ``size`` attribute names, so the walked path is
    stored as ``fs_path`` and the byte size as ``file_size``.

    Attributes:
        name (str): Base name of the entry.
        fs_path (str): Filesystem path exactly as walked (e.g. "src/main.go").
        is_dir (bool): True for directories.
        file_size (int): Size in bytes, 0 for directories.
        mode (int): st_mode bits of the entry (symlinks followed).
        modified_at (float): Modification time as seconds since the epoch.
        content (Optional[bytes]): File content. Always None for directories.
        is_symlink (bool): True if the walked path is a symbolic link.
        symlink_target (Optional[str]): Link target as stored in the symlink.

    Example:
        >>> root = Entry(".", is_dir=True)
        >>> child = Entry("a.txt", parent=root, content=b"hello", file_size=5)
        >>> child.name
        'a.txt'
        >>> [c.fs_path for c in root.children]
        ['a.txt']
    """

    def __init__(
        self,
        fs_path: str,
        parent: Optional["Entry"] = None,
        is_dir: bool = False,
        file_size: int = 0,
        mode: int = 0,
        modified_at: float = 0.0,
        content: Optional[bytes] = None,
        is_symlink: bool = False,
        symlink_target: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        if is_dir and content is not None:
            raise ValueError(f"Directory entry {fs_path} cannot carry content")

        # Attributes are set before anytree attaches the parent, whose hooks read them
        self.fs_path = fs_path
        self.is_dir = is_dir
        self.file_size = 0 if is_dir else file_size
        self.mode = mode
        self.modified_at = modified_at
        self.content = None if is_dir else (content if content is not None else b"")
        self.is_symlink = is_symlink
        self.symlink_target = symlink_target

        name = os.path.basename(os.path.normpath(fs_path)) or fs_path
        super().__init__(name, parent, **kwargs)

    def _pre_attach_children(self, children: Any) -> None:
        if not self.is_dir and children:
            raise ValueError(f"File entry {self.fs_path} cannot have children")

    def _pre_attach(self, parent: "Entry") -> None:
        if not parent.is_dir:
            raise ValueError(f"Cannot attach {self.fs_path} under file entry {parent.fs_path}")
