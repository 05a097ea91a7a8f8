"""Transactions: a Querier bound to one open transaction."""
from __future__ import annotations

from collections.abc import Callable
from types import TracebackType

from reformql.dialects.base import Dialect
from reformql.drivers.base import DBTX, TXHandle
from reformql.errors import TransactionClosedError
from reformql.logger import Logger
from reformql.querier import Querier


class Transaction(Querier):
    """A :class:`~reformql.querier.Querier` scoped to an open transaction.

    ``commit()`` and ``rollback()`` are terminal and are logged as
    ``COMMIT`` / ``ROLLBACK`` through the same sink as statements.  Once
    either succeeds, any further use raises
    :class:`~reformql.errors.TransactionClosedError`.

    A failed explicit ``commit()`` leaves the transaction open so the caller
    can still roll back.

    Used as a context manager, the transaction commits on normal exit and
    rolls back when the block raises::

        with db.begin() as tx:
            tx.insert(person)

    If the commit on exit fails, it is rolled back before the error
    propagates.  On leaving the block the transaction is always finished and
    ``close`` has run, even when the rollback itself fails.

    Args:
        dbtx: Execution capability bound to the transaction's connection.
        handle: Object finishing the transaction (DB-API connection or
            SQLAlchemy ``Transaction``).
        dialect: Dialect of the connection.
        logger: Optional statement logging sink.
        close: Called once the transaction is finished, e.g. to return a
            pooled connection.
    """

    def __init__(
        self,
        dbtx: DBTX,
        handle: TXHandle,
        dialect: Dialect,
        logger: Logger | None = None,
        close: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(dbtx, dialect, logger)
        self._handle = handle
        self._close = close
        self._state: str | None = None

    @property
    def finished(self) -> bool:
        """Whether ``commit()`` or ``rollback()`` has completed."""
        return self._state is not None

    def commit(self) -> None:
        """Commits the transaction."""
        self._finish("COMMIT", self._handle.commit, "committed")

    def rollback(self) -> None:
        """Aborts the transaction."""
        self._finish("ROLLBACK", self._handle.rollback, "rolled back")

    def _ensure_usable(self) -> None:
        if self._state is not None:
            raise TransactionClosedError(self._state)

    def _finish(
        self,
        query: str,
        action: Callable[[], None],
        state: str,
        *,
        release: bool = False,
    ) -> None:
        # With release set, a failed action still ends the transaction and
        # returns the connection.
        try:
            self._logged(query, (), action)
        except Exception:
            if release:
                self._state = "abandoned"
                self._release()
            raise
        self._state = state
        self._release()

    def _release(self) -> None:
        close, self._close = self._close, None
        if close is not None:
            close()

    def _abort(self) -> None:
        self._finish("ROLLBACK", self._handle.rollback, "rolled back", release=True)

    def __enter__(self) -> "Transaction":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self.finished:
            return
        if exc_type is not None:
            self._abort()
            return
        try:
            self.commit()
        except Exception:
            self._abort()
            raise
