"""Dialect registry.

Maps a dialect identifier to the connector class that implements it.
The registry is an explicit value: it is built once at startup and passed
to ``create_connector`` instead of being discovered through global state.
Entries are either connector classes or dotted import paths, resolved
lazily so that a dialect's driver is only imported when it is used.
"""

from __future__ import annotations

import importlib
from typing import Any, Mapping, Optional, Union

from vertica_adapter.core.connector import Connector
from vertica_adapter.exceptions import ConfigurationError

ConnectorSpec = Union[str, type]

# Default dialects - maps dialect identifier to connector class path
DEFAULT_DIALECTS: dict[str, str] = {
    "vertica": "vertica_adapter.operators.vertica.connector.VerticaConnector",
}


class DialectRegistry:
    """Immutable mapping of dialect identifiers to connector classes.

    Examples:
        >>> registry = default_registry().register("vertica_eon", MyEonConnector)
        >>> registry.names()
        ['vertica', 'vertica_eon']
        >>> registry.resolve("vertica")
        <class 'vertica_adapter.operators.vertica.connector.VerticaConnector'>
    """

    def __init__(self, entries: Optional[Mapping[str, ConnectorSpec]] = None):
        self._entries: dict[str, ConnectorSpec] = dict(entries or {})

    def register(self, name: str, connector: ConnectorSpec) -> DialectRegistry:
        """Return a new registry with name mapped to connector."""
        if not name:
            raise ConfigurationError("Dialect name must not be empty")
        entries = dict(self._entries)
        entries[name] = connector
        return DialectRegistry(entries)

    def names(self) -> list[str]:
        return sorted(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def resolve(self, name: str) -> type:
        """Return the connector class for a dialect.

        Raises:
            ConfigurationError: If the dialect is unknown or its class cannot be imported
        """
        if name not in self._entries:
            raise ConfigurationError(
                f"Unknown dialect '{name}'. Available dialects: {', '.join(self.names()) or 'none'}"
            )

        spec = self._entries[name]
        if not isinstance(spec, str):
            return spec

        module_path, _, class_name = spec.rpartition(".")
        try:
            module = importlib.import_module(module_path)
        except ImportError as e:
            raise ConfigurationError(f"Failed to import connector module '{module_path}': {e}") from e
        try:
            return getattr(module, class_name)
        except AttributeError as e:
            raise ConfigurationError(f"Class '{class_name}' not found in module '{module_path}'") from e


def default_registry() -> DialectRegistry:
    return DialectRegistry(DEFAULT_DIALECTS)


def create_connector(
    config: dict[str, Any],
    registry: Optional[DialectRegistry] = None,
    **kwargs: Any,
) -> Connector:
    """Build the connector named by ``config["dialect"]``.

    Args:
        config: Connection configuration including a "dialect" key
        registry: Registry to resolve against (default: default_registry())
        **kwargs: Extra keyword arguments for the connector constructor

    Raises:
        ConfigurationError: If the dialect is missing or unknown
    """
    dialect = config.get("dialect")
    if not dialect:
        raise ConfigurationError("Connection config requires a 'dialect' key")

    registry = registry or default_registry()
    connector_class = registry.resolve(dialect)
    params = {key: value for key, value in config.items() if key != "dialect"}
    return connector_class(params, **kwargs)
