"""Recursive construction of the in-memory tree of visible entries.

The TreeBuilder walks a directory depth-first, consults a VisibilityFilter for every
entry and reads the full content of every visible file. Excluded subtrees are never
descended into. Any stat or read failure aborts the whole build: a partial tree would
misrepresent the directory.
"""

import logging
import os
import stat
from typing import List, Optional, Set, Tuple

from flatten.exceptions import ReadError, StatError
from flatten.file_system_tree.entry import Entry
from flatten.types import PathType
from flatten.visibility_filter import VisibilityFilter

logger = logging.getLogger(__name__)

# (st_dev, st_ino) of a directory
DirectoryIdentity = Tuple[int, int]


def _reason(error: OSError) -> str:
    return error.strerror or str(error)


def join_path(parent: str, name: str) -> str:
    """Join a child name onto its parent path and normalize the result.

    Example:
        >>> join_path(".", "a.txt")
        'a.txt'
        >>> join_path("root/sub", "b.txt") == os.path.join("root", "sub", "b.txt")
        True
    """
    return os.path.normpath(os.path.join(parent, name))


class TreeBuilder:
    """Builds the Entry tree for a directory.

    Symbolic Link Behavior:
        Links are followed: a link to a file is read like a regular file and a link to
        a directory is walked like a directory. The entry records that it is a link and
        its target so the renderer can report it. A link that leads back to a directory
        already being walked is kept as an empty directory entry instead of being
        followed again.

    Child Order:
        Children are listed sorted by name, which makes the output deterministic.

    Attributes:
        visibility_filter (Optional[VisibilityFilter]): Filter consulted for every entry
            below the root. None includes everything.

    Example:
        >>> import tempfile, pathlib
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     _ = (pathlib.Path(tmpdir) / "a.txt").write_text("hello")
        ...     root = TreeBuilder().build(tmpdir)
        ...     names = [child.name for child in root.children]
        >>> names
        ['a.txt']
    """

    def __init__(self, visibility_filter: Optional[VisibilityFilter] = None) -> None:
        self.visibility_filter = visibility_filter

    def build(self, path: PathType) -> Entry:
        """Build the tree rooted at path.

        The root entry always represents path itself, even if a filter would reject
        its name.

        Args:
            path: Directory (or single file) to build the tree for.

        Returns:
            The root Entry.

        Raises:
            StatError: If any visited path cannot be stat'ed.
            ReadError: If any visible file or directory cannot be read.
        """
        root_path = os.fspath(path)
        st, link_st = self._stat(root_path)
        return self._build(root_path, st, link_st, active=set())

    @staticmethod
    def _stat(path: str) -> Tuple[os.stat_result, os.stat_result]:
        """Return the followed and the unfollowed stat of path."""
        try:
            return os.stat(path), os.lstat(path)
        except OSError as e:
            raise StatError(path, _reason(e)) from e

    def _visible(self, path: str, is_dir: bool) -> bool:
        return self.visibility_filter is None or self.visibility_filter.include(path, is_dir=is_dir)

    def _build(
        self,
        path: str,
        st: os.stat_result,
        link_st: os.stat_result,
        active: Set[DirectoryIdentity],
    ) -> Entry:
        """Create the entry for an already visible path and its visible descendants."""
        is_dir = stat.S_ISDIR(st.st_mode)
        is_symlink = stat.S_ISLNK(link_st.st_mode)
        symlink_target = None
        if is_symlink:
            try:
                symlink_target = os.readlink(path)
            except OSError as e:
                raise StatError(path, _reason(e)) from e

        entry = Entry(
            path,
            is_dir=is_dir,
            file_size=st.st_size,
            mode=st.st_mode,
            modified_at=st.st_mtime,
            is_symlink=is_symlink,
            symlink_target=symlink_target,
        )

        if not is_dir:
            entry.content = self._read_file(path)
        else:
            identity = (st.st_dev, st.st_ino)
            if identity in active:
                logger.warning("Symlink loop detected at %s; not descending", path)
            else:
                active.add(identity)
                try:
                    for name in self._list_directory(path):
                        child_path = join_path(path, name)
                        child_st, child_link_st = self._stat(child_path)
                        if not self._visible(child_path, stat.S_ISDIR(child_st.st_mode)):
                            continue
                        # Attached only once complete, so a failure never leaves a half-built child behind
                        child = self._build(child_path, child_st, child_link_st, active)
                        child.parent = entry
                finally:
                    active.discard(identity)

        return entry

    @staticmethod
    def _read_file(path: str) -> bytes:
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as e:
            raise ReadError(path, _reason(e)) from e

    @staticmethod
    def _list_directory(path: str) -> List[str]:
        try:
            return sorted(os.listdir(path))
        except OSError as e:
            raise ReadError(path, _reason(e)) from e


def build(root_path: PathType, visibility_filter: Optional[VisibilityFilter] = None) -> Entry:
    """Build the tree of visible entries below root_path.

    Args:
        root_path: The directory to walk.
        visibility_filter: Filter deciding which entries are visible. None includes
            everything.

    Returns:
        The root Entry.

    Raises:
        StatError: If any visited path cannot be stat'ed.
        ReadError: If any visible file or directory cannot be read.
    """
    return TreeBuilder(visibility_filter).build(root_path)
