"""Base Loader abstract class.

This module defines the Loader interface for bulk loading data
into a database table.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from vertica_adapter.core.connector import Connector
from vertica_adapter.models.copy import CopyJob
from vertica_adapter.models.results import LoadResult


class Loader(ABC):
    """Base class for bulk loading records into a table.

    Loaders compose a Connector for connection checkout and use the
    CopyJob to determine what to load and how.

    Examples:
        >>> connector = VerticaConnector(config)
        >>> loader = VerticaCopyLoader(connector)
        >>> with connector:
        ...     result = loader.load(CopyJob(table="events", data=lines))
        ...     print(f"Loaded {result.records_loaded} records")
    """

    def __init__(self, connector: Connector, config: Optional[dict[str, Any]] = None):
        """Initialize loader with connector and configuration.

        Args:
            connector: Connector instance for database access
            config: Optional loader-specific configuration
        """
        self.connector = connector
        self.config = config or {}

    @abstractmethod
    def load(self, job: CopyJob) -> LoadResult:
        """Load the job's records into its target table.

        Args:
            job: Validated bulk load description

        Returns:
            LoadResult with metrics

        Raises:
            LoadError: If the transfer fails
        """
        pass

    @abstractmethod
    def build_statement(self, job: CopyJob) -> str:
        """Build the load statement for a job.

        Args:
            job: Bulk load description

        Returns:
            SQL statement text
        """
        pass
