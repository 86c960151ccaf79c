"""
Unit tests for the generate_orders CLI script

Author: TM3
Date: 2026-10-18
"""
import asyncio
import importlib.util
import signal
from pathlib import Path
from unittest.mock import Mock

import pytest

SCRIPT_PATH = Path(__file__).resolve().parents[2] / 'scripts' / 'generate_orders.py'


@pytest.fixture(scope="module")
def script():
    spec = importlib.util.spec_from_file_location("generate_orders", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestCancelHandler:
    """Test Ctrl+C handling of the CLI"""

    def test_first_sigint_cancels_and_uninstalls(self, script):
        """Test the first Ctrl+C sets the event and restores default handling"""
        loop = Mock()
        cancel_event = asyncio.Event()

        script.install_cancel_handler(loop, cancel_event)

        sig, handler = loop.add_signal_handler.call_args.args
        assert sig == signal.SIGINT
        assert not cancel_event.is_set()

        handler()

        assert cancel_event.is_set()
        loop.remove_signal_handler.assert_called_once_with(signal.SIGINT)

    def test_unsupported_loop_is_tolerated(self, script):
        """Test loops without signal support leave the event untouched"""
        loop = Mock()
        loop.add_signal_handler.side_effect = NotImplementedError
        cancel_event = asyncio.Event()

        script.install_cancel_handler(loop, cancel_event)

        assert not cancel_event.is_set()

    def test_parse_args(self, script):
        """Test CLI arguments map onto generation options"""
        args = script.parse_args(["12", "--batch-size", "5", "--delay", "10", "--seed", "42"])

        assert (args.count, args.batch_size, args.delay, args.seed, args.json) == (12, 5, 10.0, 42, False)
