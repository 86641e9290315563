"""Vertica connector implementation.

This module provides connection management for Vertica databases and
exposes the dialect operations (SQL rendering, catalog introspection,
bulk loading and table DDL) on top of a connection pool.
"""

from __future__ import annotations

import functools
import logging
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, Union

import vertica_python
from pydantic import ValidationError
from sqlalchemy.pool import QueuePool

from vertica_adapter.core.capabilities import DialectCapabilities
from vertica_adapter.core.config import config as adapter_config
from vertica_adapter.core.connection import ResultCursor
from vertica_adapter.core.connector import Connector
from vertica_adapter.core.ddl import drop_table_sql
from vertica_adapter.exceptions import (
    ConfigurationError,
    ConnectionError,
    SchemaError,
    TransportError,
)
from vertica_adapter.models.column import ColumnDescriptor, TableIdentifier
from vertica_adapter.models.copy import CopyJob
from vertica_adapter.models.query import QuerySpec
from vertica_adapter.operators.vertica.connection import VerticaConnection
from vertica_adapter.operators.vertica.copy_loader import VerticaCopyLoader
from vertica_adapter.operators.vertica.introspector import VerticaSchemaIntrospector
from vertica_adapter.operators.vertica.table_generator import VerticaTableGenerator
from vertica_adapter.operators.vertica.translator import VerticaTranslator
from vertica_adapter.operators.vertica.type_mapper import VerticaTypeMapper

logger = logging.getLogger(__name__)

DEFAULT_PORT = 5433
QUERY_PLAN = "QUERY PLAN"
OUTPUT = "OUTPUT"
LOCKS = TableIdentifier(schema_name="v_monitor", name="locks")


class VerticaConnector(Connector):
    """Vertica connector using vertica-python and a SQLAlchemy queue pool.

    Every operation checks out one pooled connection for its duration.
    A bulk load holds its connection for the whole stream.

    Configuration keys:
        - host: Database host (default: localhost)
        - port: Database port (default: 5433)
        - user: Username
        - password: Password
        - database: Database name
        - ssl: Use TLS (default: False)
        - read_timeout: Socket timeout in seconds
          (default: VERTICA_ADAPTER_CONNECTION_TIMEOUT)
        - session_label: Label shown in v_monitor.sessions
        - pool_size, max_overflow, pool_timeout: Pool sizing
          (defaults from VERTICA_ADAPTER_* settings)

    Examples:
        >>> config = {
        ...     "host": "localhost",
        ...     "database": "analytics",
        ...     "user": "dbadmin",
        ...     "password": "secret",
        ... }
        >>> with VerticaConnector(config) as conn:
        ...     conn.list_tables(schema="public")
        ...     conn.copy_into("events", data=["1|click", "2|view"])
    """

    def __init__(
        self,
        config: dict[str, Any],
        connection_factory: Optional[Callable[[], Any]] = None,
    ):
        """Initialize Vertica connector.

        Args:
            config: Connection configuration dictionary
            connection_factory: Zero-argument callable returning a new DB-API
                connection. Defaults to ``vertica_python.connect`` with the
                parameters from config.
        """
        super().__init__(config)
        self.connection_factory = connection_factory or functools.partial(
            vertica_python.connect, **self._connection_parameters()
        )
        self.pool: Optional[QueuePool] = None
        self.translator = VerticaTranslator()
        self.type_mapper = VerticaTypeMapper()
        self.introspector = VerticaSchemaIntrospector(self, self.type_mapper)

    def _connection_parameters(self) -> dict[str, Any]:
        """Build vertica-python connection parameters from config."""
        params: dict[str, Any] = {
            "host": self.config.get("host", "localhost"),
            "port": int(self.config.get("port", DEFAULT_PORT)),
            "connection_timeout": self.config.get("read_timeout", adapter_config.connection_timeout),
            "autocommit": True,
        }
        for key in ("user", "password", "database", "ssl", "session_label"):
            if self.config.get(key) is not None:
                params[key] = self.config[key]
        return params

    @property
    def capabilities(self) -> DialectCapabilities:
        return self.translator.capabilities

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    def connect(self) -> None:
        """Create the connection pool and verify it with a test query.

        Raises:
            ConnectionError: If the first connection cannot be opened
        """
        pool = QueuePool(
            self.connection_factory,
            pool_size=int(self.config.get("pool_size", adapter_config.pool_size)),
            max_overflow=int(self.config.get("max_overflow", adapter_config.max_overflow)),
            timeout=float(self.config.get("pool_timeout", adapter_config.pool_timeout)),
        )
        try:
            proxy = pool.connect()
            try:
                VerticaConnection(proxy).execute("SELECT 1")
            finally:
                proxy.close()
        except Exception as e:
            pool.dispose()
            raise ConnectionError(f"Failed to connect to Vertica: {e}") from e

        self.pool = pool
        self.connection = pool
        logger.info("Connected to Vertica at %s", self.config.get("host", "localhost"))

    def disconnect(self) -> None:
        """Dispose the pool. Safe to call when already disconnected."""
        if self.pool is not None:
            self.pool.dispose()
            self.pool = None
            self.connection = None

    def test_connection(self) -> bool:
        try:
            if not self.is_connected:
                self.connect()
            self.execute("SELECT 1")
            return True
        except Exception:
            return False

    @contextmanager
    def synchronize(self) -> Iterator[VerticaConnection]:
        """Check out one pooled connection for the duration of the block.

        A connection the driver reports closed after a failure is
        discarded instead of being returned to the pool.

        Raises:
            TransportError: If not connected
            ConnectionError: If no connection can be checked out
        """
        if self.pool is None:
            raise TransportError("Not connected to database")

        try:
            proxy = self.pool.connect()
        except Exception as e:
            raise ConnectionError(f"Failed to check out a Vertica connection: {e}") from e

        conn = VerticaConnection(proxy, adapter_config.copy_buffer_size)
        try:
            yield conn
        except TransportError:
            if not conn.invalidated and conn.is_closed():
                conn.invalidate()
            raise
        finally:
            if not conn.invalidated:
                proxy.close()

    # ------------------------------------------------------------------
    # Statement execution
    # ------------------------------------------------------------------

    def execute(self, sql: str) -> ResultCursor:
        with self.synchronize() as conn:
            return conn.execute(sql)

    def execute_query(self, query: str) -> list[dict[str, Any]]:
        return self.execute(query).rows

    def execute_statement(self, statement: str) -> None:
        """Execute DDL or DML. Sessions run in autocommit mode."""
        self.execute(statement)

    def execute_insert(self, sql: str) -> Any:
        """Execute an INSERT and return the OUTPUT value of its first row."""
        row = self.execute(sql).first()
        if row is None:
            return None
        for key, value in row.items():
            if str(key).upper() == OUTPUT:
                return value
        return None

    # ------------------------------------------------------------------
    # Query rendering
    # ------------------------------------------------------------------

    def render_select(self, query: QuerySpec) -> str:
        return self.translator.render_select(query)

    def explain(self, query: QuerySpec, local: bool = False) -> str:
        """Return the server's query plan, one plan line per row, joined with newlines.

        Args:
            query: Query to explain
            local: Use EXPLAIN LOCAL (plan of the local node only)
        """
        result = self.execute(self.translator.explain_sql(query, local=local))
        if not result.column_names:
            return ""
        column = QUERY_PLAN if QUERY_PLAN in result.column_names else result.column_names[0]
        return "\n".join("" if line is None else str(line) for line in result.column(column))

    def locks_query(self) -> QuerySpec:
        return QuerySpec(from_=[LOCKS])

    def locks(self) -> list[dict[str, Any]]:
        """Rows of v_monitor.locks."""
        return self.execute_query(self.render_select(self.locks_query()))

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def _require_connection(self) -> None:
        if not self.is_connected:
            raise SchemaError("Not connected to database")

    def list_tables(self, schema: Optional[str] = None) -> list[str]:
        self._require_connection()
        return self.introspector.list_tables(schema)

    def describe_table(
        self,
        table: Union[str, TableIdentifier],
        schema: Optional[str] = None,
    ) -> list[tuple[str, ColumnDescriptor]]:
        self._require_connection()
        return self.introspector.describe_table(table, schema)

    def table_exists(self, table: Union[str, TableIdentifier], schema: Optional[str] = None) -> bool:
        self._require_connection()
        return self.introspector.table_exists(table, schema)

    def column_names(self, query: QuerySpec) -> list[str]:
        self._require_connection()
        return self.introspector.column_names(query)

    def get_schema(self, ref: str) -> list[ColumnDescriptor]:
        """Get column descriptors for a table.

        Args:
            ref: Table reference ("table" or "schema.table")

        Raises:
            SchemaError: If not connected or the table has no columns
        """
        columns = self.describe_table(ref)
        if not columns:
            raise SchemaError(f"Table does not exist: {ref}")
        return [descriptor for _, descriptor in columns]

    # ------------------------------------------------------------------
    # Bulk load and DDL
    # ------------------------------------------------------------------

    def copy_into(
        self,
        table: Union[str, TableIdentifier],
        columns: Optional[list[str]] = None,
        data: Any = None,
        producer: Optional[Callable[[], Optional[str]]] = None,
        options: Optional[str] = None,
        format: Optional[str] = None,
    ) -> Optional[int]:
        """Bulk load records with COPY FROM STDIN.

        Exactly one of data or producer must be given. data is a string or
        an iterable of strings; producer is called until it returns None.

        Args:
            table: Target table
            columns: Target columns, in record field order
            data: Buffered records
            producer: Pull callback returning the next record or None
            options: COPY options appended verbatim
            format: "csv" to append a comma delimiter option

        Returns:
            Rows accepted by the server, or None when not reported

        Raises:
            ConfigurationError: If both or neither source is given
            LoadError: If the transfer fails
        """
        try:
            job = CopyJob(
                table=table,
                columns=columns,
                data=data,
                producer=producer,
                options=options,
                format=format,
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid copy_into arguments: {e}") from e

        return VerticaCopyLoader(self).load(job).records_loaded

    def table_generator(self, table: Union[str, TableIdentifier]) -> VerticaTableGenerator:
        return VerticaTableGenerator(table)

    def create_table(self, generator: VerticaTableGenerator, if_not_exists: bool = False) -> None:
        """Create a table from a generator definition.

        Examples:
            >>> generator = conn.table_generator("auto_inc_test")
            >>> generator.primary_key("id")
            >>> generator.column("value", "INTEGER")
            >>> conn.create_table(generator, if_not_exists=True)
        """
        self.execute_statement(
            generator.create_table_sql(self.translator, self.type_mapper, if_not_exists=if_not_exists)
        )

    def drop_table(self, table: Union[str, TableIdentifier], if_exists: bool = False, cascade: bool = False) -> None:
        self.execute_statement(drop_table_sql(table, self.translator, if_exists=if_exists, cascade=cascade))
