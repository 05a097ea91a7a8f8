"""Dialect registry (Open/Closed Principle).

``DialectFactory``
    Central registry for :class:`~reformql.dialects.base.Dialect` instances.
    Register a dialect once, together with the driver identifiers that speak
    it; ``DB.from_engine`` and callers holding a raw DB-API connection look
    it up by driver name.

Usage::

    from reformql.dialects.registry import DialectFactory

    DialectFactory.register("cockroach", CockroachDialect(), drivers=("cockroachdb",))
    dialect = DialectFactory.for_driver("cockroachdb")

Unknown names raise :class:`~reformql.errors.DialectConfigError`, so a
misconfigured setup fails before any statement is built.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import ClassVar

from reformql.dialects.base import Dialect
from reformql.errors import DialectConfigError


class DialectFactory:
    """Registry mapping dialect and driver names to :class:`Dialect` instances.

    Example::

        DialectFactory.register("sqlite3", SQLITE3, drivers=("sqlite", "pysqlite"))

        DialectFactory.get("sqlite3")          # by dialect name
        DialectFactory.for_driver("pysqlite")  # by driver identifier
    """

    _dialects: ClassVar[dict[str, Dialect]] = {}
    _drivers: ClassVar[dict[str, str]] = {}

    @classmethod
    def register(
        cls,
        name: str,
        dialect: Dialect,
        drivers: Iterable[str] = (),
    ) -> None:
        """Register ``dialect`` under ``name`` and each driver identifier.

        Args:
            name: The dialect name (e.g. ``"postgresql"``).
            dialect: The shared :class:`Dialect` instance.
            drivers: Driver identifiers resolved to this dialect by
                :meth:`for_driver`.  ``name`` itself always resolves.
        """
        cls._dialects[name] = dialect
        cls._drivers[name.lower()] = name
        for driver in drivers:
            cls._drivers[driver.lower()] = name

    @classmethod
    def get(cls, name: str) -> Dialect:
        """Return the dialect registered under ``name``.

        Raises:
            DialectConfigError: If no dialect is registered for ``name``.
        """
        dialect = cls._dialects.get(name)
        if dialect is None:
            raise DialectConfigError(name, cls.registered_names())
        return dialect

    @classmethod
    def for_driver(cls, driver: str) -> Dialect:
        """Return the dialect spoken by ``driver``.

        Args:
            driver: A DB-API module name (``"sqlite3"``, ``"pymysql"``) or a
                SQLAlchemy dialect / driver name (``"pysqlite"``,
                ``"psycopg2"``, ``"postgresql"``).

        Raises:
            DialectConfigError: If the driver is unknown.
        """
        name = cls._drivers.get(driver.lower())
        if name is None:
            raise DialectConfigError(driver, sorted(cls._drivers))
        return cls._dialects[name]

    @classmethod
    def registered_names(cls) -> list[str]:
        """Return the sorted list of registered dialect names."""
        return sorted(cls._dialects)
