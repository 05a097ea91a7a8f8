"""Statement logging sink built on structlog.

The ``Querier`` reports every execute, query, commit and rollback to a
:class:`Logger`: once before the statement runs and once after, with the
elapsed time and the error, if any.  Logging never affects control flow.

Usage::

    from reformql.logger import StructlogLogger, configure_logging

    configure_logging()                 # optional, uses reformql.config
    querier = Querier(executor, SQLITE3, StructlogLogger())
"""
from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import Any, Protocol

import structlog
from structlog.types import Processor

from reformql.config import Settings, get_settings


class Logger(Protocol):
    """Receives before/after events for every statement."""

    def before(self, query: str, args: Sequence[Any]) -> None: ...

    def after(
        self,
        query: str,
        args: Sequence[Any],
        duration: float,
        error: BaseException | None,
    ) -> None: ...


class StructlogLogger:
    """:class:`Logger` implementation emitting structlog events.

    Args:
        logger: Bound logger to use; defaults to ``structlog.get_logger("reformql")``.
        log_args: Include statement arguments in events.  Disable when
            arguments may carry secrets.
    """

    def __init__(self, logger: Any = None, log_args: bool = True) -> None:
        self._log = logger if logger is not None else structlog.get_logger("reformql")
        self._log_args = log_args

    def before(self, query: str, args: Sequence[Any]) -> None:
        self._log.debug("statement_started", query=query, **self._args(args))

    def after(
        self,
        query: str,
        args: Sequence[Any],
        duration: float,
        error: BaseException | None,
    ) -> None:
        duration_ms = round(duration * 1000, 3)
        if error is None:
            self._log.debug(
                "statement_finished", query=query, duration_ms=duration_ms, **self._args(args)
            )
        else:
            self._log.warning(
                "statement_failed",
                query=query,
                duration_ms=duration_ms,
                error=repr(error),
                **self._args(args),
            )

    def _args(self, args: Sequence[Any]) -> dict[str, Any]:
        return {"args": list(args)} if self._log_args else {}


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and stdlib logging for reformql.

    Sets up ISO-8601 timestamps, the configured level, and a console or
    JSON renderer on stderr.

    Args:
        settings: Settings to use; defaults to :func:`~reformql.config.get_settings`.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level, logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger("reformql")
    root.handlers[:] = [handler]
    root.setLevel(level)
    root.propagate = False

    renderer: Processor
    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
