"""vertica_adapter - Vertica dialect adapter for SQL rendering, catalog introspection and COPY bulk loading."""

__version__ = "0.1.0"

# Re-export key models for convenience
from vertica_adapter.models import (
    ColumnDescriptor,
    CopyJob,
    LoadResult,
    NormalizedType,
    QuerySpec,
    TableIdentifier,
    TimeseriesSpec,
    WindowSpec,
)

# Re-export core classes for custom dialects
from vertica_adapter.core import (
    Connector,
    DialectRegistry,
    Loader,
    SQLTranslator,
    TableGenerator,
    TypeMapper,
    create_connector,
    default_registry,
)

# Re-export the Vertica dialect
from vertica_adapter.operators.vertica import (
    VerticaConnector,
    VerticaCopyLoader,
    VerticaTableGenerator,
    VerticaTranslator,
    VerticaTypeMapper,
)

__all__ = [
    # Version
    "__version__",
    # Models
    "ColumnDescriptor",
    "CopyJob",
    "LoadResult",
    "NormalizedType",
    "QuerySpec",
    "TableIdentifier",
    "TimeseriesSpec",
    "WindowSpec",
    # Core
    "Connector",
    "DialectRegistry",
    "Loader",
    "SQLTranslator",
    "TableGenerator",
    "TypeMapper",
    "create_connector",
    "default_registry",
    # Vertica
    "VerticaConnector",
    "VerticaCopyLoader",
    "VerticaTableGenerator",
    "VerticaTranslator",
    "VerticaTypeMapper",
]
