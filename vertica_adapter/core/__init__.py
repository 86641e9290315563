"""vertica_adapter core package.

This package contains the abstract base classes and generic dialect
logic that concrete dialects build on.
"""

from vertica_adapter.core.capabilities import DialectCapabilities
from vertica_adapter.core.connection import Connection, ResultCursor
from vertica_adapter.core.connector import Connector
from vertica_adapter.core.ddl import ColumnDefinition, TableGenerator, drop_table_sql
from vertica_adapter.core.loader import Loader
from vertica_adapter.core.registry import DialectRegistry, create_connector, default_registry
from vertica_adapter.core.translator import SQLTranslator
from vertica_adapter.core.type_mapper import TypeMapper

__all__ = [
    "ColumnDefinition",
    "Connection",
    "Connector",
    "DialectCapabilities",
    "DialectRegistry",
    "Loader",
    "ResultCursor",
    "SQLTranslator",
    "TableGenerator",
    "TypeMapper",
    "create_connector",
    "default_registry",
    "drop_table_sql",
]
