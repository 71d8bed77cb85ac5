"""structlog rendering for podreadme log records.

The library only emits stdlib records on the ``podreadme`` logger. The
tool that consumes these types calls :func:`configure_logging` to render
them; the library itself never does.

Two output modes:
- Human (default): console-formatted lines
- JSON: structured JSON lines
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

LOGGER_NAME = "podreadme"


class _PodreadmeHandler(logging.StreamHandler):
    """Marks the handler installed here so reconfiguring replaces it."""


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Attach a structlog-formatted handler to the ``podreadme`` logger.

    Only the ``podreadme`` logger is touched; the root logger and any
    host handlers are left alone. Calling again replaces the handler.

    Args:
        verbose: Emit DEBUG records (rule construction, coercions).
        log_json: Use JSON renderer instead of console renderer.
        stream: Destination, default stderr.
    """
    stream = stream or sys.stderr

    pre_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    handler = _PodreadmeHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    logger = logging.getLogger(LOGGER_NAME)
    for old in [h for h in logger.handlers if isinstance(h, _PodreadmeHandler)]:
        logger.removeHandler(old)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
    return handler
