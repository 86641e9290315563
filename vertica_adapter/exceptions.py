"""vertica_adapter exception hierarchy."""

from __future__ import annotations


class AdapterError(Exception):
    """Base exception for all adapter errors."""

    pass


class ConfigurationError(AdapterError):
    """Raised when call-time arguments or configuration are invalid."""

    pass


class TranslationError(AdapterError):
    """Raised when an expression cannot be rendered by any translator."""

    pass


class TransportError(AdapterError):
    """Raised when the underlying connection or protocol fails."""

    pass


class ConnectionError(TransportError):
    """Raised when a connection to the database cannot be established."""

    pass


class LoadError(TransportError):
    """Raised when a bulk load fails mid-stream."""

    pass


class SchemaError(AdapterError):
    """Raised when schema operations fail."""

    pass


class TypeMappingError(AdapterError):
    """Raised when type mapping/conversion fails."""

    pass
