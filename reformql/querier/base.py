"""Querier core: quoting, placeholders and logged statement execution."""
from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from reformql.dialects.base import Dialect
from reformql.drivers.base import DBTX, Result, Row
from reformql.logger import Logger
from reformql.schema.descriptor import View

T = TypeVar("T")


class QuerierBase:
    """Binds an execution capability to a dialect and a logging sink.

    Args:
        dbtx: Execution capability (connection adapter, engine adapter, ...).
        dialect: Dialect the generated SQL is written in.
        logger: Optional sink receiving before/after events for every
            statement.
    """

    def __init__(self, dbtx: DBTX, dialect: Dialect, logger: Logger | None = None) -> None:
        self.dbtx = dbtx
        self.dialect = dialect
        self.logger = logger

    def __repr__(self) -> str:
        return f"<{type(self).__name__} dialect={self.dialect.name!r}>"

    # ------------------------------------------------------------------
    # Dialect helpers
    # ------------------------------------------------------------------

    def quote_identifier(self, name: str) -> str:
        return self.dialect.quote_identifier(name)

    def quote_column(self, name: str) -> str:
        """Quotes a single column name; dots are part of the name."""
        return self.dialect.quote_part(name)

    def placeholder(self, position: int) -> str:
        return self.dialect.placeholder(position)

    def placeholders(self, start: int, count: int) -> list[str]:
        return self.dialect.placeholders(start, count)

    def qualified_view_name(self, view: View) -> str:
        """Returns the quoted, schema-qualified name of ``view``."""
        return self.quote_identifier(view.qualified_name)

    def qualified_columns(self, view: View) -> list[str]:
        """Returns ``"view"."column"`` for every column of ``view``."""
        name = self.qualified_view_name(view)
        return [f"{name}.{self.quote_column(c)}" for c in view.columns]

    # ------------------------------------------------------------------
    # Logged execution
    # ------------------------------------------------------------------

    def exec(self, query: str, *args: Any) -> Result:
        """Execute a statement and return its :class:`Result`."""
        return self._logged(query, args, lambda: self.dbtx.execute(query, args))

    def query_row(self, query: str, *args: Any) -> Row | None:
        """Run a query and return its first row, or ``None``."""
        return self._logged(query, args, lambda: self.dbtx.query_row(query, args))

    def query_rows(self, query: str, *args: Any) -> list[Row]:
        """Run a query and return all rows."""
        return self._logged(query, args, lambda: self.dbtx.query_rows(query, args))

    def _ensure_usable(self) -> None:
        """Hook for subclasses that can become unusable (finished transactions)."""

    def _logged(self, query: str, args: Sequence[Any], run: Callable[[], T]) -> T:
        self._ensure_usable()
        if self.logger is not None:
            self.logger.before(query, args)
        start = time.monotonic()
        error: BaseException | None = None
        try:
            return run()
        except Exception as exc:
            error = exc
            raise
        finally:
            if self.logger is not None:
                self.logger.after(query, args, time.monotonic() - start, error)
