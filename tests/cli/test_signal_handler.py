"""Unit tests for the signal handler module in the flatten CLI."""

import os
import signal
import sys
from unittest.mock import MagicMock, patch

import pytest

from flatten.cli import signal_handler as signal_module
from flatten.cli.signal_handler import SignalHandler, cleanup, setup_signal_handling, signal_handler

requires_sigpipe = pytest.mark.skipif(not hasattr(signal, "SIGPIPE"), reason="SIGPIPE is not available")


@pytest.fixture
def mock_signal():
    with patch("signal.signal", autospec=True) as mock:
        yield mock


@pytest.fixture
def mock_os():
    with patch("flatten.cli.signal_handler.os", autospec=True) as mock:
        mock.open.return_value = 123
        mock.devnull = os.devnull
        mock.O_WRONLY = os.O_WRONLY
        yield mock


@pytest.fixture
def clean_signal_state():
    """Clear the module-level handler's events before and after a test."""
    signal_handler.reset()
    yield signal_handler
    signal_handler.reset()


@requires_sigpipe
def test_initialization_records_original_handlers():
    with patch("signal.getsignal", return_value=signal.SIG_DFL) as mock_getsignal:
        handler = SignalHandler()

    mock_getsignal.assert_any_call(signal.SIGPIPE)
    mock_getsignal.assert_any_call(signal.SIGINT)
    assert not handler.sigpipe_received.is_set()
    assert not handler.sigint_received.is_set()
    assert handler.original_sigpipe_handler is signal.SIG_DFL
    assert handler.original_sigint_handler is signal.SIG_DFL


@requires_sigpipe
def test_handle_sigpipe(mock_signal):
    handler = SignalHandler()
    handler.handle_sigpipe(signal.SIGPIPE, MagicMock())

    assert handler.sigpipe_received.is_set()
    assert not handler.sigint_received.is_set()
    mock_signal.assert_called_once_with(signal.SIGPIPE, handler.original_sigpipe_handler)


def test_handle_sigint(mock_signal):
    handler = SignalHandler()
    handler.handle_sigint(signal.SIGINT, None)

    assert handler.sigint_received.is_set()
    mock_signal.assert_called_once_with(signal.SIGINT, handler.original_sigint_handler)


@requires_sigpipe
def test_setup_signal_handling(mock_signal):
    setup_signal_handling()

    assert mock_signal.call_count == 2
    mock_signal.assert_any_call(signal.SIGPIPE, signal_handler.handle_sigpipe)
    mock_signal.assert_any_call(signal.SIGINT, signal_handler.handle_sigint)


def test_setup_without_sigpipe(mock_signal):
    with patch.object(signal_module, "SIGPIPE", None):
        setup_signal_handling()

    mock_signal.assert_called_once_with(signal.SIGINT, signal_handler.handle_sigint)


def test_cleanup_with_no_signals(mock_os, clean_signal_state):
    cleanup()

    mock_os.open.assert_not_called()
    mock_os.dup2.assert_not_called()


@pytest.mark.parametrize("received", ["sigpipe_received", "sigint_received"])
def test_cleanup_after_signal_silences_stdout(mock_os, clean_signal_state, received):
    getattr(clean_signal_state, received).set()

    with patch.object(sys, "stdout") as mock_stdout:
        mock_stdout.fileno.return_value = 1
        cleanup()

    mock_os.open.assert_called_once_with(os.devnull, os.O_WRONLY)
    mock_os.dup2.assert_called_once_with(123, 1)


def test_module_instance():
    assert isinstance(signal_handler, SignalHandler)
    assert hasattr(signal_handler, "original_sigpipe_handler")
    assert hasattr(signal_handler, "original_sigint_handler")


class TestExitCode:
    def test_no_signal(self):
        handler = SignalHandler()

        assert not handler.interrupted
        assert handler.exit_code() is None

    def test_sigint(self):
        handler = SignalHandler()
        handler.sigint_received.set()

        assert handler.interrupted
        assert handler.exit_code() == 130

    def test_sigpipe(self):
        handler = SignalHandler()
        handler.sigpipe_received.set()

        assert handler.interrupted
        assert handler.exit_code() == 141

    def test_sigpipe_takes_precedence_over_sigint(self):
        handler = SignalHandler()
        handler.sigint_received.set()
        handler.sigpipe_received.set()

        assert handler.exit_code() == 141


def test_reset_forgets_received_signals():
    handler = SignalHandler()
    handler.sigpipe_received.set()
    handler.sigint_received.set()

    handler.reset()

    assert not handler.interrupted
    assert handler.exit_code() is None


@requires_sigpipe
def test_install_routes_signals_to_the_instance(mock_signal):
    handler = SignalHandler()
    handler.install()

    mock_signal.assert_any_call(signal.SIGPIPE, handler.handle_sigpipe)
    mock_signal.assert_any_call(signal.SIGINT, handler.handle_sigint)
