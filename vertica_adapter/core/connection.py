"""Execution adapter contract.

The connector layer talks to the database only through an object
satisfying ``Connection``: execute a statement and get a ``ResultCursor``
back, or stream a COPY payload. Driver-specific wrappers implement it by
composition over a DB-API connection.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import IO, Any, Iterator, Optional, Protocol, runtime_checkable


@dataclass
class ResultCursor:
    """Materialized result of one statement.

    Rows are dictionaries keyed by result column name, in result order.
    """

    column_names: list[str] = field(default_factory=list)
    rows: list[dict[str, Any]] = field(default_factory=list)

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def first(self) -> Optional[dict[str, Any]]:
        return self.rows[0] if self.rows else None

    def column(self, name: str) -> list[Any]:
        """Values of one column from every row."""
        return [row.get(name) for row in self.rows]


@runtime_checkable
class Connection(Protocol):
    """Contract for a checked-out database connection."""

    def execute(self, sql: str) -> ResultCursor:
        """Execute a statement and return its materialized result.

        Raises:
            TransportError: If the driver or server reports a failure
        """
        ...

    def copy(self, sql: str, stream: IO[bytes]) -> Optional[int]:
        """Run a COPY FROM STDIN statement reading data from stream.

        Returns:
            Rows accepted by the server, or None when not reported

        Raises:
            LoadError: If the transfer fails
        """
        ...

    def invalidate(self) -> None:
        """Discard the underlying connection instead of returning it to the pool."""
        ...
