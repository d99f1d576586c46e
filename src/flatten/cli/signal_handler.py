"""Signal handling for the flatten CLI.

SIGPIPE and SIGINT are recorded instead of killing the process. Output stops at the
next write and main() turns the recorded signal into the conventional exit status.
"""

import atexit
import os
import signal
import sys
from threading import Event
from types import FrameType
from typing import Optional

# SIGPIPE does not exist on Windows
SIGPIPE = getattr(signal, "SIGPIPE", None)

EXIT_SIGINT = 130
EXIT_SIGPIPE = 141


class SignalHandler:
    """Remembers which interrupting signals arrived during a run.

    Each handler fires once: after recording its signal it puts the original handler
    back, so a second Ctrl+C behaves as it would without flatten's handling.

    Attributes:
        sigpipe_received: Set once SIGPIPE has been received.
        sigint_received: Set once SIGINT has been received.

    Example:
        >>> handler = SignalHandler()
        >>> handler.interrupted, handler.exit_code()
        (False, None)
        >>> handler.sigint_received.set()
        >>> handler.interrupted, handler.exit_code()
        (True, 130)
    """

    def __init__(self) -> None:
        self.sigpipe_received = Event()
        self.sigint_received = Event()
        self.original_sigpipe_handler = signal.getsignal(SIGPIPE) if SIGPIPE is not None else None
        self.original_sigint_handler = signal.getsignal(signal.SIGINT)

    @property
    def interrupted(self) -> bool:
        """True once either signal has been received."""
        return self.sigpipe_received.is_set() or self.sigint_received.is_set()

    def exit_code(self) -> Optional[int]:
        """Return the exit status owed to a received signal, or None.

        A broken pipe takes precedence: once the reader is gone nothing else matters.
        """
        if self.sigpipe_received.is_set():
            return EXIT_SIGPIPE
        if self.sigint_received.is_set():
            return EXIT_SIGINT
        return None

    def install(self) -> None:
        """Route SIGPIPE (where it exists) and SIGINT to this handler."""
        if SIGPIPE is not None:
            signal.signal(SIGPIPE, self.handle_sigpipe)
        signal.signal(signal.SIGINT, self.handle_sigint)

    def reset(self) -> None:
        """Forget any received signals."""
        self.sigpipe_received.clear()
        self.sigint_received.clear()

    def handle_sigpipe(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigpipe_received.set()
        if SIGPIPE is not None:
            signal.signal(SIGPIPE, self.original_sigpipe_handler)

    def handle_sigint(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigint_received.set()
        signal.signal(signal.SIGINT, self.original_sigint_handler)


signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    """Install the module-level SignalHandler."""
    signal_handler.install()


def cleanup() -> None:
    """Point stdout at the null device after an interruption.

    The interpreter flushes stdout at shutdown; with the reader gone that flush would
    print a second broken pipe error.
    """
    if signal_handler.interrupted:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


atexit.register(cleanup)
