"""Execution adapter over the vertica-python driver.

``VerticaConnection`` wraps a DB-API connection (usually a pooled proxy)
and implements the ``Connection`` contract by composition. It is the one
place where driver exceptions are translated into adapter errors.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import IO, Any, Iterator, Optional

from vertica_python.errors import Error as VerticaError

from vertica_adapter.core.config import config
from vertica_adapter.core.connection import ResultCursor
from vertica_adapter.exceptions import LoadError, TransportError

logger = logging.getLogger(__name__)

ACCEPTED_ROWS_SQL = "SELECT GET_NUM_ACCEPTED_ROWS()"


@contextmanager
def translate_errors(action: str, error_class: type[TransportError] = TransportError) -> Iterator[None]:
    """Re-raise driver errors as adapter errors.

    Args:
        action: What was being attempted, for the error message
        error_class: TransportError subclass to raise
    """
    try:
        yield
    except VerticaError as e:
        raise error_class(f"Failed to {action}: {e}") from e


def _column_name(description_entry: Any) -> str:
    name = getattr(description_entry, "name", None)
    if name is None:
        name = description_entry[0]
    return str(name)


class VerticaConnection:
    """A checked-out Vertica connection.

    Examples:
        >>> with connector.synchronize() as conn:
        ...     result = conn.execute('SELECT 1 AS "one"')
        ...     result.first()
        {'one': 1}
    """

    def __init__(self, dbapi_connection: Any, copy_buffer_size: Optional[int] = None):
        """Wrap a DB-API connection.

        Args:
            dbapi_connection: vertica-python connection or a pool proxy of one
            copy_buffer_size: Bytes requested from the COPY stream per read
        """
        self.dbapi_connection = dbapi_connection
        self.copy_buffer_size = copy_buffer_size or config.copy_buffer_size
        self.invalidated = False

    def execute(self, sql: str) -> ResultCursor:
        logger.debug("Executing SQL: %s", sql)
        with translate_errors("execute statement"):
            cursor = self.dbapi_connection.cursor()
            try:
                cursor.execute(sql)
                description = cursor.description or []
                names = [_column_name(entry) for entry in description]
                rows = [dict(zip(names, row)) for row in cursor.fetchall()] if names else []
            finally:
                cursor.close()
        return ResultCursor(column_names=names, rows=rows)

    def copy(self, sql: str, stream: IO[bytes]) -> Optional[int]:
        logger.debug("Executing COPY: %s", sql)
        with translate_errors("stream COPY data", LoadError):
            cursor = self.dbapi_connection.cursor()
            try:
                cursor.copy(sql, stream, buffer_size=self.copy_buffer_size)
                cursor.execute(ACCEPTED_ROWS_SQL)
                row = cursor.fetchone()
            finally:
                cursor.close()
        if not row or row[0] is None:
            return None
        return int(row[0])

    def is_closed(self) -> bool:
        """Whether the driver reports the underlying socket as closed."""
        closed = getattr(self.dbapi_connection, "closed", None)
        if callable(closed):
            closed = closed()
        return bool(closed)

    def invalidate(self) -> None:
        if self.invalidated:
            return
        self.invalidated = True
        invalidate = getattr(self.dbapi_connection, "invalidate", None)
        if invalidate is not None:
            invalidate()
