"""Tests for the top-level package exports."""

import podreadme
from podreadme.domain.types import TYPE_NAMES


def test_exports_every_type() -> None:
    for name in TYPE_NAMES:
        assert getattr(podreadme, name)() is podreadme.get_type(name)


def test_version() -> None:
    assert podreadme.__version__ == "1.0.1"
