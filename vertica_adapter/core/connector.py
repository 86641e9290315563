"""Base Connector abstract class.

This module defines the Connector interface for managing connections
to a database and exposing dialect operations on top of them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from vertica_adapter.models.column import ColumnDescriptor


class Connector(ABC):
    """Base class for managing connections to a database.

    Connectors handle connection lifecycle, schema introspection,
    and statement execution. Translators, introspectors and loaders are
    composed by the connector rather than inherited.

    Examples:
        Using a connector as a context manager:
        >>> with VerticaConnector(config) as conn:
        ...     columns = conn.get_schema("public.events")
        ...     rows = conn.execute_query('SELECT * FROM "events" LIMIT 10')
    """

    def __init__(self, config: dict[str, Any]):
        """Initialize connector with configuration.

        Args:
            config: Connection configuration dictionary
        """
        self.config = config
        self.connection: Optional[Any] = None

    @abstractmethod
    def connect(self) -> None:
        """Establish connection to the database.

        Raises:
            ConnectionError: If connection fails
        """
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close connection to the database.

        Should handle cases where connection is already closed gracefully.
        """
        pass

    @abstractmethod
    def test_connection(self) -> bool:
        """Test connectivity to the database.

        Returns:
            True if connection is successful, False otherwise
        """
        pass

    @abstractmethod
    def get_schema(self, ref: str) -> list[ColumnDescriptor]:
        """Get column descriptors for a table.

        Args:
            ref: Table reference (e.g., "public.events")

        Returns:
            List of ColumnDescriptor objects in catalog order

        Raises:
            SchemaError: If schema cannot be retrieved
        """
        pass

    @abstractmethod
    def execute_query(self, query: str) -> list[dict[str, Any]]:
        """Execute a query and return results.

        Args:
            query: SQL string

        Returns:
            List of records as dictionaries

        Raises:
            TransportError: If query execution fails
        """
        pass

    def __enter__(self) -> Connector:
        """Context manager entry: establish connection.

        Returns:
            Self
        """
        self.connect()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit: close connection."""
        self.disconnect()

    @property
    def is_connected(self) -> bool:
        """Check if connection is established.

        Returns:
            True if connected, False otherwise
        """
        return self.connection is not None
