"""Visibility decisions for entries found while walking a directory.

The VisibilityFilter combines VCS-directory exclusion, binary and size exclusion,
include/exclude glob lists and the root ignore file into a single include() decision.
It is constructed once per walk and is immutable afterwards.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from flatten.exceptions import RelativePathError
from flatten.exclusion_rules.git_rules import GitIgnoreExclusionRules
from flatten.exclusion_rules.glob_rules import GlobExclusionRules
from flatten.exclusion_rules.size_rules import SizeExclusionRules
from flatten.file_system_tree.binary_detector import is_binary_file
from flatten.ignore_file import DEFAULT_IGNORE_FILE, load_ignore_rules
from flatten.types import PathType

logger = logging.getLogger(__name__)

DEFAULT_VCS_DIR = ".git"


@dataclass(frozen=True)
class FilterOptions:
    """Immutable configuration of a VisibilityFilter.

    Attributes:
        include_ignored: Keep entries the ignore file would exclude.
        include_vcs: Keep the VCS metadata directory and its contents.
        include_binary: Keep files detected as binary.
        include_patterns: Globs a file must match to be kept (empty keeps all files).
        exclude_patterns: Globs excluding any matching file or directory.
        max_size: Exclude files larger than this, e.g. "500KB" or 4096. None disables.
        vcs_dir_name: Name of the VCS metadata directory.
        ignore_file_name: Name of the ignore file looked up at the root.
    """

    include_ignored: bool = False
    include_vcs: bool = False
    include_binary: bool = False
    include_patterns: Tuple[str, ...] = ()
    exclude_patterns: Tuple[str, ...] = ()
    max_size: Optional[Union[str, int]] = None
    vcs_dir_name: str = DEFAULT_VCS_DIR
    ignore_file_name: str = DEFAULT_IGNORE_FILE


def to_slash(path: str) -> str:
    """Normalize directory separators to forward slashes."""
    return path.replace("\\", "/")


def is_vcs_path(path: str, vcs_dir_name: str = DEFAULT_VCS_DIR) -> bool:
    """Check whether any segment of path is the VCS metadata directory.

    The check works on whole segments, so ".github" or ".gitignore" never match.

    Example:
        >>> is_vcs_path(".git")
        True
        >>> is_vcs_path("vendor/lib/.git/config")
        True
        >>> is_vcs_path(".github/workflows/ci.yml")
        False
    """
    return vcs_dir_name in to_slash(path).split("/")


class VisibilityFilter:
    """Decides, for every entry of a walk, whether it is visible.

    Decision order (first matching rule wins):
    1. The root entry is always visible.
    2. Paths with a VCS metadata directory segment are hidden unless include_vcs.
    3. Binary files are hidden unless include_binary.
    4. Files over max_size are hidden.
    5. Paths matching an exclude glob, or files matching none of the include globs,
       are hidden.
    6. With include_ignored, or when the root has no ignore file, the entry is visible.
    7. Otherwise the root ignore file itself is hidden, and any other entry is hidden
       if the ignore file's patterns match it.

    A path that cannot be expressed relative to the root is visible unless rules 2-4
    hide it; pattern rules cannot be evaluated for it and are skipped.

    Attributes:
        root (str): The filtered directory.
        options (FilterOptions): The configuration this filter was built with.
        ignore_rules (Optional[GitIgnoreExclusionRules]): Compiled root ignore file, or
            None when it is absent or include_ignored is set.

    Example:
        >>> import tempfile, pathlib
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     _ = (pathlib.Path(tmpdir) / ".gitignore").write_text("*.log\\n")
        ...     vf = VisibilityFilter(tmpdir)
        ...     results = (
        ...         vf.include(os.path.join(tmpdir, "nested", "debug.log"), is_dir=False),
        ...         vf.include(os.path.join(tmpdir, "main.py"), is_dir=False),
        ...     )
        >>> results
        (False, True)
    """

    def __init__(self, root: PathType, options: Optional[FilterOptions] = None) -> None:
        """Build the filter for root, compiling all pattern sets once.

        Args:
            root: The directory being flattened.
            options: Filter configuration. Defaults to FilterOptions().

        Raises:
            ReadError: If the root ignore file cannot be read.
            PatternCompileError: If the ignore file or a glob list is malformed.
            ValueError: If options.max_size is invalid.
        """
        self.root = os.fspath(root)
        self.options = options if options is not None else FilterOptions()

        self.ignore_rules: Optional[GitIgnoreExclusionRules] = None
        if not self.options.include_ignored:
            self.ignore_rules = load_ignore_rules(self.root, self.options.ignore_file_name)

        self.glob_rules = GlobExclusionRules(self.options.include_patterns, self.options.exclude_patterns)
        self.size_rules = SizeExclusionRules(self.options.max_size) if self.options.max_size is not None else None

    def relative_path(self, path: PathType) -> str:
        """Express path relative to the root with forward slashes.

        Raises:
            RelativePathError: If path lies outside the root or no relative form exists.
        """
        path_str = os.fspath(path)
        try:
            rel = to_slash(os.path.relpath(path_str, self.root))
        except ValueError as e:
            raise RelativePathError(path_str, self.root) from e
        if rel == ".." or rel.startswith("../"):
            raise RelativePathError(path_str, self.root)
        return rel

    def include(self, path: PathType, is_root: bool = False, is_dir: Optional[bool] = None) -> bool:
        """Decide whether the entry at path is visible.

        Args:
            path: Path of the entry, absolute or relative to the working directory.
            is_root: True for the walk's root, which is always visible.
            is_dir: Whether the entry is a directory. Looked up when None.

        Returns:
            True if the entry should appear in the tree.
        """
        if is_root:
            return True

        path_str = os.fspath(path)
        if is_dir is None:
            is_dir = os.path.isdir(path_str)

        rel: Optional[str]
        try:
            rel = self.relative_path(path_str)
        except RelativePathError as e:
            logger.debug("%s; skipping pattern rules", e)
            rel = None

        vcs_target = rel if rel is not None else path_str
        if not self.options.include_vcs and is_vcs_path(vcs_target, self.options.vcs_dir_name):
            return self._excluded(path_str, "VCS metadata")

        if not is_dir:
            if not self.options.include_binary and self._is_binary(path_str):
                return self._excluded(path_str, "binary file")
            if self.size_rules is not None and self.size_rules.exclude(path_str):
                return self._excluded(path_str, "over size limit")

        if rel is None:
            return True

        match_path = rel + "/" if is_dir else rel

        if self.glob_rules.has_rules() and self.glob_rules.exclude(match_path):
            return self._excluded(path_str, "glob patterns")

        if self.ignore_rules is None:
            return True

        if rel == self.options.ignore_file_name:
            return self._excluded(path_str, "ignore file in use")
        if self.ignore_rules.matches(match_path):
            return self._excluded(path_str, self.options.ignore_file_name)
        return True

    def _is_binary(self, path: str) -> bool:
        try:
            return is_binary_file(path)
        except OSError as e:
            # Unreadable files are kept so the tree builder reports the read failure
            logger.debug("Binary detection failed for %s: %s", path, e)
            return False

    @staticmethod
    def _excluded(path: str, reason: str) -> bool:
        logger.debug("Excluding %s (%s)", path, reason)
        return False
