from typing import Optional


class FlattenError(Exception):
    """
    Base class for errors raised while building or rendering a flattened tree.

    Every subclass carries the path that caused the failure so callers can report it
    meaningfully. Fatal errors abort the whole operation; no partial output is produced.

    Attributes:
        path (str): The offending filesystem path.

    Example:
        >>> error = FlattenError("/tmp/x", "Something went wrong")
        >>> error.path
        '/tmp/x'
        >>> str(error)
        'Something went wrong'
    """

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(message)


class StatError(FlattenError):
    """
    Exception raised when a path does not exist or its metadata cannot be read.

    Example:
        >>> error = StatError("missing.txt", "No such file or directory")
        >>> str(error)
        'Failed to stat path missing.txt: No such file or directory'
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(path, f"Failed to stat path {path}: {reason}")


class ReadError(FlattenError):
    """
    Exception raised when a file or directory exists but its content cannot be read.

    Example:
        >>> error = ReadError("locked.txt", "Permission denied")
        >>> str(error)
        'Failed to read locked.txt: Permission denied'
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(path, f"Failed to read {path}: {reason}")


class PatternCompileError(FlattenError):
    """
    Exception raised when an ignore file or glob list contains a malformed pattern.

    Attributes:
        pattern (Optional[str]): The pattern that failed to compile, when known.

    Example:
        >>> error = PatternCompileError(".gitignore", "invalid pattern", pattern="a/**b")
        >>> str(error)
        'Failed to compile patterns from .gitignore: invalid pattern'
        >>> error.pattern
        'a/**b'
    """

    def __init__(self, path: str, reason: str, pattern: Optional[str] = None) -> None:
        self.pattern = pattern
        super().__init__(path, f"Failed to compile patterns from {path}: {reason}")


class RelativePathError(FlattenError):
    """
    Exception raised when a path cannot be expressed relative to the filtered root.

    The visibility filter recovers from this error locally by including the path; it
    never reaches callers of the public API.
    """

    def __init__(self, path: str, root: str) -> None:
        self.root = root
        super().__init__(path, f"Cannot express {path} relative to {root}")
