"""Structured logging via structlog.

Configures structlog once per process, from the CLI entry point. Library
modules use `logging.getLogger(__name__)`. A structlog `ProcessorFormatter`
on the root logger renders those records (and httpx's) through the same
processor chain as `structlog.get_logger()` calls.

Renderer selection:
  debug=True  — `ConsoleRenderer` for step logs a human reads.
  debug=False — `JSONRenderer` for machine-parseable logs.

ContextVar injection:
  `run_id` is bound by the orchestrator at the start of a run and added to
  every log line emitted while it is set.

Log output goes to stderr. stdout is reserved for workflow commands
(`::error::`, `::debug::`) that the Actions runner parses.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import TextIO

import structlog

_run_id_var: ContextVar[str] = ContextVar("run_id", default="")

# Handler installed by the last configure_structlog() call
_handler: logging.Handler | None = None


def get_run_id() -> str:
    """Return the current run ID, or empty string if not set."""
    return _run_id_var.get()


def set_run_id(run_id: str) -> None:
    _run_id_var.set(run_id)


def _inject_context_vars(
    logger: logging.Logger,
    method: str,
    event_dict: dict,
) -> dict:
    """Structlog processor: inject run_id from its ContextVar."""
    run_id = get_run_id()
    if run_id:
        event_dict["run_id"] = run_id
    return event_dict


def configure_structlog(debug: bool = False, stream: TextIO | None = None) -> None:
    """Configure structlog and the stdlib root logger for the process lifetime.

    Calling multiple times is safe; the last call replaces the handler
    installed by the previous one and leaves other root handlers alone.
    """
    global _handler
    stream = stream or sys.stderr
    level = logging.DEBUG if debug else logging.INFO

    shared_processors: list = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        _inject_context_vars,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if debug:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    root.addHandler(handler)
    root.setLevel(level)
    _handler = handler

    # httpx logs every request at INFO; keep it to warnings unless debugging.
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)
