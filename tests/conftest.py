"""Shared pytest fixtures for podreadme tests."""

from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path

import pytest


def _close_quietly(fd: int) -> None:
    try:
        os.close(fd)
    except OSError:
        pass


@pytest.fixture
def pipe_fds() -> Generator[tuple[int, int]]:
    """A ``(read_fd, write_fd)`` pipe, closed after the test."""
    read_fd, write_fd = os.pipe()
    try:
        yield read_fd, write_fd
    finally:
        _close_quietly(read_fd)
        _close_quietly(write_fd)


@pytest.fixture
def existing_dir(tmp_path: Path) -> Path:
    """A directory that exists on disk."""
    path = tmp_path / "docs"
    path.mkdir()
    return path


@pytest.fixture
def missing_path(tmp_path: Path) -> Path:
    """A path that does not exist."""
    return tmp_path / "no" / "such" / "path"
