"""Implementation of exclusion rules using .gitignore pattern syntax."""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore

from flatten.exceptions import PatternCompileError, ReadError
from flatten.types import PathType

from .base_rules import BaseExclusionRules

logger = logging.getLogger(__name__)


def compile_patterns(lines: Iterable[str], source: str) -> List[GitWildMatchPattern]:
    """Compile gitignore-style lines into pathspec patterns, one line at a time.

    Compiling line by line lets a failure name the exact offending pattern.

    Args:
        lines: Pattern lines as they appear in an ignore file. Blank lines and comments
            compile to no-op patterns.
        source: Where the lines came from, used in error messages.

    Returns:
        The compiled patterns, in input order.

    Raises:
        PatternCompileError: If any line is not a valid gitignore pattern.

    Example:
        >>> [p.include for p in compile_patterns(["*.log", "!keep.log", "# note"], "test")]
        [True, False, None]
    """
    patterns = []
    for line in lines:
        try:
            patterns.append(GitWildMatchPattern(line))
        except ValueError as e:
            raise PatternCompileError(source, str(e), pattern=line) from e
    return patterns


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Exclusion rules read from a single .gitignore-style file.

    This is the pattern matcher behind the visibility filter. It uses the pathspec
    library to match paths the way Git does:
    - Basic globs (*, ?, [abc], [0-9], etc.)
    - Directory-only patterns (ending in /)
    - Negation patterns (starting with !), later patterns overriding earlier ones
    - Double-asterisk matching (**)
    - Comment lines (starting with #)

    Patterns without a slash match at any depth, so "*.log" excludes both
    "debug.log" and "nested/dir/debug.log". Patterns are interpreted relative to the
    directory containing the ignore file.

    The rule set is compiled once during construction and never changes afterwards.

    Attributes:
        rules_file (Optional[Path]): The ignore file the patterns were loaded from.
        spec (PathSpec): Compiled pattern matcher from the pathspec library.

    Example:
        >>> rules = GitIgnoreExclusionRules(patterns=["*.log", "!keep.log", "build/"])
        >>> rules.matches("nested/dir/debug.log")
        True
        >>> rules.matches("keep.log")
        False
        >>> rules.matches("build/")
        True
        >>> rules.matches("build")
        False
    """

    def __init__(self, rules_file: Optional[PathType] = None, *, patterns: Optional[Iterable[str]] = None):
        """Compile patterns from an ignore file and/or an explicit list of lines.

        Args:
            rules_file: Path to a .gitignore-style file. Optional.
            patterns: Additional pattern lines, appended after the file's lines.

        Raises:
            FileNotFoundError: If rules_file is given but does not exist.
            ReadError: If rules_file exists but cannot be read.
            PatternCompileError: If any pattern is malformed.
        """
        self.rules_file = Path(rules_file) if rules_file is not None else None
        lines: List[str] = []

        if self.rules_file is not None:
            if not self.rules_file.exists():
                raise FileNotFoundError(f"Rules file not found: {self.rules_file}")
            try:
                with open(self.rules_file, "r", encoding="utf-8", errors="surrogateescape") as f:
                    lines.extend(f.read().splitlines())
            except OSError as e:
                raise ReadError(str(self.rules_file), e.strerror or str(e)) from e

        if patterns is not None:
            lines.extend(patterns)

        source = str(self.rules_file) if self.rules_file is not None else "<patterns>"
        self.spec = PathSpec(compile_patterns(lines, source))
        logger.debug("Compiled %d ignore patterns from %s", len(self.spec.patterns), source)

    def matches(self, path: str) -> bool:
        """Check a relative path against the compiled patterns.

        The path is matched exactly as provided; callers normalize separators to "/"
        and append "/" for directories.

        Args:
            path: Path relative to the ignore file's directory.

        Returns:
            bool: True if the last pattern matching the path is a non-negated one.
        """
        return bool(self.spec.match_file(path))

    def exclude(self, path: str) -> bool:
        return self.matches(path)

    def has_rules(self) -> bool:
        return any(pattern.include is not None for pattern in self.spec.patterns)
