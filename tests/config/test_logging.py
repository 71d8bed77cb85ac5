"""Tests for structlog rendering of podreadme records."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Generator

import pytest

from podreadme.config.logging import LOGGER_NAME, configure_logging
from podreadme.domain.types import File


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore podreadme and root logger state after each test."""
    root = logging.getLogger()
    root_handlers = root.handlers[:]
    pkg = logging.getLogger(LOGGER_NAME)
    pkg_handlers = pkg.handlers[:]
    pkg_level = pkg.level
    pkg_propagate = pkg.propagate
    yield
    root.handlers = root_handlers
    pkg.handlers = pkg_handlers
    pkg.setLevel(pkg_level)
    pkg.propagate = pkg_propagate


def _json_lines(stream: io.StringIO) -> list[dict[str, object]]:
    return [json.loads(line) for line in stream.getvalue().splitlines()]


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, stream=io.StringIO())
        assert logging.getLogger(LOGGER_NAME).level == logging.DEBUG

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, stream=io.StringIO())
        assert logging.getLogger(LOGGER_NAME).level == logging.WARNING

    def test_root_logger_untouched(self) -> None:
        root = logging.getLogger()
        before = root.handlers[:]
        configure_logging(verbose=True, stream=io.StringIO())
        assert root.handlers == before

    def test_coercion_debug_line(self) -> None:
        out = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=out)
        File().validate("README.md")
        coerced = [line for line in _json_lines(out) if str(line["event"]).startswith("Coerced File")]
        assert coerced
        assert coerced[0]["logger"] == "podreadme.domain.types"
        assert coerced[0]["level"] == "debug"
        assert "timestamp" in coerced[0]

    def test_quiet_by_default(self) -> None:
        out = io.StringIO()
        configure_logging(log_json=True, stream=out)
        File().validate("README.md")
        assert out.getvalue() == ""

    def test_human_mode_output(self) -> None:
        out = io.StringIO()
        configure_logging(verbose=True, stream=out)
        logging.getLogger("podreadme.test").warning("hello world")
        assert "hello world" in out.getvalue()

    def test_reconfigure_replaces_handler(self) -> None:
        configure_logging(verbose=True, stream=io.StringIO())
        handler = configure_logging(verbose=True, log_json=True, stream=io.StringIO())
        pkg = logging.getLogger(LOGGER_NAME)
        installed = [h for h in pkg.handlers if type(h) is type(handler)]
        assert installed == [handler]
