"""Signal-aware output of the flattened document."""

import errno
import os
import types
from pathlib import Path
from typing import BinaryIO, Optional, Type, Union

from flatten.cli.signal_handler import signal_handler
from flatten.types import PathType

OUTPUT_ENCODING = "utf-8"
# File names and contents that are not UTF-8 reach the writer as surrogate escapes
OUTPUT_ERRORS = "surrogateescape"


class SafeWriter:
    """Writes text to a file descriptor or a newly created file as raw bytes.

    Text is encoded with UTF-8 and the surrogateescape error handler, so bytes that
    were decoded the same way (non-UTF-8 file names from os.listdir, file contents
    decoded by the renderer) are written back unchanged.

    Once SIGPIPE or SIGINT has been recorded, or the operating system reports EPIPE,
    write() raises BrokenPipeError and the CLI stops quietly.

    Attributes:
        file: The file descriptor or path given at construction.
        fd: The file descriptor written to.

    Example:
        >>> import tempfile, pathlib
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     target = pathlib.Path(tmpdir) / "flat.txt"
        ...     with SafeWriter(target) as writer:
        ...         writer.write("caf\\udce9")
        ...     target.read_bytes()
        b'caf\\xe9'
    """

    def __init__(self, file: Union[int, PathType]):
        """Open the destination.

        Args:
            file: A file descriptor (e.g. sys.stdout.fileno()) or a path to create.

        Raises:
            TypeError: If file is neither an int nor path-like.
            OSError: If the path cannot be opened for writing.
        """
        self.file = file
        self._closed = False
        self._file_obj: Optional[BinaryIO] = None

        if isinstance(file, int):
            self.fd = file
        elif isinstance(file, (str, os.PathLike)):
            self._file_obj = Path(file).open("wb")
            self.fd = self._file_obj.fileno()
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(file).__name__}")

    def write(self, text: str) -> None:
        """Encode text and write all of it.

        Raises:
            BrokenPipeError: If SIGPIPE/SIGINT was received or the pipe is closed.
            OSError: For any other I/O error.
            ValueError: If the writer is closed.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")
        self._write_bytes(text.encode(OUTPUT_ENCODING, errors=OUTPUT_ERRORS))

    def _write_bytes(self, payload: bytes) -> None:
        view = memoryview(payload)
        while view:
            if signal_handler.interrupted:
                raise BrokenPipeError()
            try:
                written = os.write(self.fd, view)
            except OSError as e:
                if e.errno == errno.EPIPE:
                    raise BrokenPipeError() from e
                raise
            view = view[written:]

    def close(self) -> None:
        """Close the file if this writer opened it. EPIPE on close is ignored."""
        if self._closed:
            return
        if self._file_obj is not None:
            try:
                self._file_obj.close()
            except OSError as e:
                if e.errno != errno.EPIPE:
                    raise
        self._closed = True

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        try:
            self.close()
        except OSError:
            # An exception from the with block takes precedence over a close failure
            if exc_type is None:
                raise
