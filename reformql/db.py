"""DB: a Querier bound to a SQLAlchemy engine, able to open transactions."""
from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

import structlog

from reformql.config import Settings, get_settings
from reformql.dialects.base import Dialect
from reformql.dialects.registry import DialectFactory
from reformql.drivers.alchemy import EngineExecutor, SQLAlchemyExecutor
from reformql.errors import DialectConfigError
from reformql.logger import Logger, StructlogLogger
from reformql.querier import Querier
from reformql.tx import Transaction

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = structlog.get_logger(__name__)

T = TypeVar("T")


class DB(Querier):
    """A :class:`~reformql.querier.Querier` over a connection pool.

    Statements issued directly on a ``DB`` each run in their own short
    transaction.  Use :meth:`begin` or :meth:`in_transaction` to group
    statements.

    Args:
        engine: A :class:`sqlalchemy.engine.Engine`.
        dialect: Dialect the engine's driver speaks.
        logger: Optional statement logging sink.
    """

    def __init__(self, engine: Engine, dialect: Dialect, logger: Logger | None = None) -> None:
        super().__init__(EngineExecutor(engine), dialect, logger)
        self.engine = engine

    @classmethod
    def from_engine(cls, engine: Engine, logger: Logger | None = None) -> "DB":
        """Create a ``DB``, picking the dialect from the engine's driver.

        The SQLAlchemy driver name (``pysqlite``, ``psycopg2``, ``pymysql``,
        ...) is tried first, then the backend name (``sqlite``,
        ``postgresql``, ``mysql``).

        Raises:
            DialectConfigError: If neither name is registered.
        """
        driver = engine.dialect.driver
        backend = engine.dialect.name
        try:
            dialect = DialectFactory.for_driver(driver)
        except DialectConfigError:
            dialect = DialectFactory.for_driver(backend)
        log.debug("dialect_selected", driver=driver, backend=backend, dialect=dialect.name)
        return cls(engine, dialect, logger)

    def begin(self) -> Transaction:
        """Start a transaction on a dedicated pooled connection."""
        conn = self.engine.connect()
        try:
            trans = self._logged("BEGIN", (), conn.begin)
        except Exception:
            conn.close()
            raise
        return Transaction(
            SQLAlchemyExecutor(conn), trans, self.dialect, self.logger, close=conn.close
        )

    def in_transaction(self, fn: Callable[[Transaction], T]) -> T:
        """Run ``fn`` in a transaction.

        Commits if ``fn`` returns, rolls back and re-raises if it raises.
        """
        with self.begin() as tx:
            return fn(tx)

    def close(self) -> None:
        """Dispose of the engine's connection pool."""
        self.engine.dispose()


def open_db(url: str | None = None, settings: Settings | None = None) -> DB:
    """Create a :class:`DB` from a SQLAlchemy URL or from configuration.

    Args:
        url: SQLAlchemy database URL; defaults to ``settings.database_url``.
        settings: Settings to use; defaults to :func:`~reformql.config.get_settings`.
    """
    try:
        from sqlalchemy import create_engine
    except ImportError as exc:
        raise ImportError(
            "SQLAlchemy is required for open_db(). "
            'Install it with: pip install "reformql[sqlalchemy]"'
        ) from exc

    settings = settings or get_settings()
    engine = create_engine(url or settings.database_url)
    return DB.from_engine(engine, StructlogLogger(log_args=settings.log_args))
