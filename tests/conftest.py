"""Test configuration ensuring the src package is importable."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path
from typing import Sequence

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture(autouse=True)
def clean_defaults(monkeypatch: pytest.MonkeyPatch):
    """Give every test a fresh process-wide cache and no localstamp env config."""
    from localstamp import api

    monkeypatch.delenv("LOCALSTAMP_OFFSET", raising=False)
    monkeypatch.delenv("LOCALSTAMP_COMMAND_FALLBACK", raising=False)
    api.reset_defaults()
    yield
    api.reset_defaults()


@pytest.fixture
def cache():
    """An empty offset cache."""
    from localstamp.cache import OffsetCache

    return OffsetCache()


class FakeRunner:
    """Stands in for subprocess.run, recording the argv it was given."""

    def __init__(self, stdout: bytes = b"", returncode: int = 0, stderr: bytes = b"", exc=None):
        self.stdout = stdout
        self.returncode = returncode
        self.stderr = stderr
        self.exc = exc
        self.calls: list[tuple[str, ...]] = []

    def __call__(self, args: Sequence[str]) -> subprocess.CompletedProcess:
        self.calls.append(tuple(args))
        if self.exc is not None:
            raise self.exc
        return subprocess.CompletedProcess(
            list(args), self.returncode, stdout=self.stdout, stderr=self.stderr
        )


@pytest.fixture
def fake_runner():
    """Factory for command runners with canned output."""
    return FakeRunner


def failing_local_offset():
    """Host query that always fails."""
    raise OSError("local offset unavailable")
