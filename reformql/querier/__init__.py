"""The Querier: builds and runs statements for mapped records.

``Querier`` is assembled from focused mixins sharing one ``QuerierBase``::

    Querier
      ├── CommandsMixin  (commands.py)  insert / update / save / delete
      └── SelectsMixin   (selects.py)   select / find / reload / count
            └── QuerierBase (base.py)   quoting, placeholders, logged execution
"""
from __future__ import annotations

from reformql.querier.base import QuerierBase
from reformql.querier.columns import check_aligned, cut_index, pick_columns
from reformql.querier.commands import CommandsMixin
from reformql.querier.selects import SelectsMixin


class Querier(CommandsMixin, SelectsMixin):
    """Builds dialect-correct SQL for records and runs it through a ``DBTX``.

    A querier holds no per-record state and can process many records in
    sequence.  It is bound to one connection or transaction and is not safe
    for concurrent use unless the underlying ``DBTX`` serialises access.

    Example::

        import sqlite3

        from reformql import DBAPIExecutor, Querier, SQLITE3

        q = Querier(DBAPIExecutor(sqlite3.connect("app.db")), SQLITE3)
        person = Person(name="Alice")
        q.insert(person)        # person.id now holds the generated key
    """


__all__ = [
    "Querier",
    "QuerierBase",
    "check_aligned",
    "cut_index",
    "pick_columns",
]
