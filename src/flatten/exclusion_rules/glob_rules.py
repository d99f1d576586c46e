"""Include/exclude glob lists supplied on the command line."""

from typing import Sequence

from pathspec import PathSpec

from .base_rules import BaseExclusionRules
from .git_rules import compile_patterns


class GlobExclusionRules(BaseExclusionRules):
    """Exclusion rules built from explicit include and exclude glob lists.

    Globs use the same wildmatch syntax as ignore files, so "*.go" matches Go files at
    any depth and "docs/**" matches everything under a top-level docs directory.

    A path is excluded when it matches any exclude glob. When include globs are given,
    a file must additionally match at least one of them. Directories are never excluded
    by the include list; otherwise "*.go" would prune every directory before its Go
    files could be reached.

    Attributes:
        include_patterns (tuple[str, ...]): Globs a file must match to be kept.
        exclude_patterns (tuple[str, ...]): Globs that exclude any matching path.

    Example:
        >>> rules = GlobExclusionRules(include_patterns=["*.go"], exclude_patterns=["*_test.go"])
        >>> rules.exclude("cmd/main.go")
        False
        >>> rules.exclude("cmd/main_test.go")
        True
        >>> rules.exclude("README.md")
        True
        >>> rules.exclude("cmd/")
        False
    """

    def __init__(self, include_patterns: Sequence[str] = (), exclude_patterns: Sequence[str] = ()):
        """Compile the glob lists.

        Args:
            include_patterns: Globs selecting the files to keep. Empty keeps everything.
            exclude_patterns: Globs selecting paths to drop.

        Raises:
            PatternCompileError: If any glob is malformed.
        """
        self.include_patterns = tuple(p for p in include_patterns if p)
        self.exclude_patterns = tuple(p for p in exclude_patterns if p)
        self._include_spec = PathSpec(compile_patterns(self.include_patterns, "include patterns"))
        self._exclude_spec = PathSpec(compile_patterns(self.exclude_patterns, "exclude patterns"))

    def exclude(self, path: str) -> bool:
        if self.exclude_patterns and self._exclude_spec.match_file(path):
            return True
        if self.include_patterns and not path.endswith("/"):
            return not self._include_spec.match_file(path)
        return False

    def has_rules(self) -> bool:
        return bool(self.include_patterns or self.exclude_patterns)
