from __future__ import annotations

import logging
import os
import sys
from typing import Dict, List, Sequence, Tuple

import pytest

# Ensure local package import wins over an installed distribution
_HERE = os.path.dirname(__file__)
_ROOT = os.path.abspath(os.path.join(_HERE, ".."))
if _ROOT not in sys.path:
    sys.path.insert(0, _ROOT)

from physcores import LOGGER_NAME  # noqa: E402
from physcores.commands import CommandResult  # noqa: E402


class FakeRunner:
    """CommandRunner double returning canned output keyed by the command's first argument."""

    def __init__(self, outputs: Dict[str, CommandResult] | None = None, error: Exception | None = None) -> None:
        self.outputs = outputs or {}
        self.error = error
        self.calls: List[Tuple[Tuple[str, ...], str]] = []

    def run(self, args: Sequence[str], encoding: str) -> CommandResult:
        self.calls.append((tuple(args), encoding))
        if self.error is not None:
            raise self.error
        return self.outputs[args[0]]


@pytest.fixture()
def fake_runner():
    def make(output: str = "", returncode: int = 0, command: str = "sysctl", error: Exception | None = None) -> FakeRunner:
        return FakeRunner({command: CommandResult(output=output, returncode=returncode)}, error=error)

    return make


@pytest.fixture()
def physcores_caplog(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    return caplog


class _CurrentStderrHandler(logging.StreamHandler):
    """StreamHandler that always writes to the current sys.stderr (so capsys sees it)."""

    @property
    def stream(self):  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, value) -> None:
        pass


@pytest.fixture()
def physcores_stderr_logging() -> None:
    """Configure physcores logger to emit to stderr at DEBUG with a simple formatter.

    Use this fixture in tests that assert on physcores' log output via capsys.
    """
    lg = logging.getLogger(LOGGER_NAME)
    prev_handlers = list(lg.handlers)
    prev_level = lg.level
    prev_propagate = lg.propagate
    handler = _CurrentStderrHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    lg.handlers = [handler]
    lg.setLevel(logging.DEBUG)
    lg.propagate = False
    try:
        yield
    finally:
        lg.handlers = prev_handlers
        lg.setLevel(prev_level)
        lg.propagate = prev_propagate
