"""A thin helper over a DB-API connection for building and running simple SQL."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any, Optional

_log = logging.getLogger(__name__)

_TRACE_PREFIX = "[db]"


def _flatten_query(query: str) -> str:
    """Put a statement on one line for logging."""
    return query.replace("\n", " ").replace("\t", "")


class DB:
    """Runs insert, update and delete statements built from dictionaries.

    The connection must use the ``?`` parameter style.  Statements run outside
    :meth:`transaction` are committed at once.
    """

    def __init__(self, connection: Any, trace: bool = False) -> None:
        self.connection = connection
        self.trace = trace
        self._depth = 0

    def close(self) -> None:
        """Close the connection; closing twice does nothing."""
        if self.connection is None:
            return
        connection, self.connection = self.connection, None
        connection.close()

    def _require(self) -> Any:
        if self.connection is None:
            raise RuntimeError("database connection is closed")
        return self.connection

    def _execute(self, query: str, params: list[Any]) -> Any:
        connection = self._require()
        if self.trace:
            _log.info("%s %s %r", _TRACE_PREFIX, _flatten_query(query), params)
        cursor = connection.cursor()
        cursor.execute(query, params)
        if self._depth == 0:
            connection.commit()
        return cursor

    def insert_sql(self, table: str, info: Mapping[str, Any]) -> tuple[str, list[Any]]:
        """Build an INSERT statement and its parameters from a column mapping."""
        if not info:
            raise ValueError("no columns to insert")
        columns = list(info)
        placeholders = ",".join("?" for _ in columns)
        query = f"INSERT INTO {table}({','.join(columns)}) VALUES({placeholders})"
        return query, list(info.values())

    def insert(self, table: str, info: Mapping[str, Any]) -> int:
        """Insert a row and return the id of the inserted row."""
        query, values = self.insert_sql(table, info)
        cursor = self._execute(query, values)
        return getattr(cursor, "lastrowid", None) or 0

    def update_sql(
        self, table: str, pk: Mapping[str, Any], info: Mapping[str, Any]
    ) -> tuple[str, list[Any]]:
        """Build an UPDATE statement setting ``info`` where every ``pk`` column matches."""
        assignments = ",".join(f"{column}=?" for column in info)
        conditions = " and ".join(f"{column}=?" for column in pk)
        query = f"UPDATE {table} SET {assignments} WHERE {conditions}"
        return query, [*info.values(), *pk.values()]

    def update_by_pk(
        self, table: str, pk: Mapping[str, Any], info: Mapping[str, Any]
    ) -> int:
        """Update matching rows and return how many were affected."""
        query, values = self.update_sql(table, pk, info)
        return self._execute(query, values).rowcount

    def delete_sql(self, table: str, pk: Mapping[str, Any]) -> tuple[str, list[Any]]:
        """Build a DELETE statement for rows where every ``pk`` column matches."""
        conditions = " and ".join(f"{column}=?" for column in pk)
        return f"DELETE FROM {table} WHERE {conditions}", list(pk.values())

    def delete_by_pk(self, table: str, pk: Mapping[str, Any]) -> int:
        """Delete matching rows and return how many were affected."""
        query, values = self.delete_sql(table, pk)
        return self._execute(query, values).rowcount

    def expand_in(self, query: str, *args: Any) -> tuple[str, list[Any]]:
        """Expand each list or tuple argument into one ``?`` per element.

        Arguments that are not sequences keep their single placeholder.  If no
        argument is a sequence the query is returned unchanged.
        """
        for arg in args:
            if isinstance(arg, (list, tuple)) and not arg:
                raise ValueError("empty slice passed to 'in' query")
        if not any(isinstance(arg, (list, tuple)) for arg in args):
            return query, list(args)

        pieces: list[str] = []
        new_args: list[Any] = []
        remaining = iter(args)
        used = 0
        rest = query
        while (pos := rest.find("?")) != -1:
            arg: Optional[Any] = next(remaining, _MISSING)
            if arg is _MISSING:
                raise ValueError("number of bindVars exceeds arguments")
            used += 1
            pieces.append(rest[: pos + 1])
            if isinstance(arg, (list, tuple)):
                pieces.append(", ?" * (len(arg) - 1))
                new_args.extend(arg)
            else:
                new_args.append(arg)
            rest = rest[pos + 1 :]
        pieces.append(rest)

        if used < len(args):
            raise ValueError("number of bindVars less than number arguments")
        return "".join(pieces), new_args

    @contextmanager
    def transaction(self) -> Iterator["DB"]:
        """Run the enclosed statements as one transaction.

        Commits when the block ends normally and rolls back when it raises.
        Nested blocks join the outermost transaction.
        """
        connection = self._require()
        self._depth += 1
        try:
            yield self
        except BaseException:
            self._depth -= 1
            if self._depth == 0:
                connection.rollback()
            raise
        else:
            self._depth -= 1
            if self._depth == 0:
                connection.commit()


_MISSING = object()