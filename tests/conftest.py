"""Shared test fixtures."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from fakes import RecordingRunner

from ffcross.environment import BuildEnvironment
from ffcross.observability import StructuredLogger


@pytest.fixture
def runner() -> RecordingRunner:
    """Provide a fake runner so no real build tool is invoked."""
    return RecordingRunner()


@pytest.fixture
def environment(tmp_path: Path) -> BuildEnvironment:
    return BuildEnvironment.from_environ(
        {"PATH": "/usr/bin", "HOME": str(tmp_path / "home")},
        cwd=tmp_path,
        jobs=4,
    )


@pytest.fixture
def logger() -> StructuredLogger:
    return StructuredLogger(stream=io.StringIO(), color=False)
