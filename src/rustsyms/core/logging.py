"""Structured logging for rustsyms.

structlog renders every event, stdlib logging routes it: each configured
output becomes one handler on the root logger with its own level and
renderer (console or JSON). Third-party stdlib loggers go through the same
formatters via ``foreign_pre_chain``.

The request correlation ID lives in structlog's contextvars, so it follows
the current thread or task and lands on every event as ``request_id``.

Log events never go to stdout unless explicitly configured, so the JSON
printed by the CLI stays machine-readable.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog
from structlog._config import BoundLoggerLazyProxy

if TYPE_CHECKING:
    from rustsyms.config.models import LoggingConfig, LogOutputConfig

_REQUEST_ID_KEY = "request_id"


def set_request_id(request_id: str | None = None) -> str:
    """Set or generate request correlation ID."""
    rid = request_id or uuid4().hex[:12]
    structlog.contextvars.bind_contextvars(**{_REQUEST_ID_KEY: rid})
    return rid


def clear_request_id() -> None:
    structlog.contextvars.unbind_contextvars(_REQUEST_ID_KEY)


def _level_number(name: str | None, default: int) -> int:
    if not name:
        return default
    return logging.getLevelNamesMapping().get(name.upper(), default)


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
    ]


def _build_formatter(
    output: LogOutputConfig, shared: list[structlog.types.Processor]
) -> structlog.stdlib.ProcessorFormatter:
    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        is_console = output.destination in ("stderr", "stdout")
        renderer = structlog.dev.ConsoleRenderer(
            colors=is_console and sys.stderr.isatty(),
            pad_event_to=0,
            pad_level=False,
        )
    return structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=shared)


def _build_handler(destination: str) -> logging.Handler:
    """Handler for stderr, stdout, or an absolute file path."""
    if destination == "stderr":
        return logging.StreamHandler(sys.stderr)
    if destination == "stdout":
        return logging.StreamHandler(sys.stdout)
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a")


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "WARNING",
) -> None:
    """Configure structlog. Pass config for multi-output, or use simple params.

    Safe to call again: handlers from the previous call are replaced.

    Args:
        config: Logging configuration with outputs
        json_format: Use JSON format for simple setup
        level: Default log level
    """
    from rustsyms.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )

    root_level = _level_number(config.level, logging.WARNING)
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguration must reach loggers created at import time
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(root_level)

    for output in config.outputs:
        handler = _build_handler(output.destination)
        handler.setLevel(_level_number(output.level, root_level))
        handler.setFormatter(_build_formatter(output, shared))
        root_logger.addHandler(handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Lazy proxy that resolves against the configuration active at each call.

    The name is an initial value, not a ``bind``: binding materialises the
    proxy with the configuration of that moment.
    """
    if name:
        # structlog.get_logger(logger=...) collides with wrap_logger's own
        # ``logger`` parameter, so build the same lazy proxy directly.
        return BoundLoggerLazyProxy(  # type: ignore[return-value]
            None, initial_values={"logger": name}, logger_factory_args=()
        )
    return structlog.get_logger()  # type: ignore[no-any-return]
