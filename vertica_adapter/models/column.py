"""Column and table models for vertica_adapter.

This module defines the portable column model produced by schema
introspection, the typed catalog row it is built from, and table
identifiers used across rendering, introspection and bulk loading.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, Field as PydanticField, field_validator

from vertica_adapter.exceptions import ConfigurationError


class NormalizedType(str, Enum):
    """Portable semantic column types.

    Raw vendor type strings ("varchar(20)", "int", "timestamptz") are
    mapped onto these by a dialect type mapper.
    """

    INTEGER = "integer"
    STRING = "string"
    BLOB = "blob"
    DATETIME = "datetime"
    DATE = "date"
    TIME = "time"
    FLOAT = "float"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    INTERVAL = "interval"
    UUID = "uuid"
    UNKNOWN = "unknown"


class TableIdentifier(BaseModel):
    """Optional schema component plus a table name.

    Equality is case-sensitive on the stored representation; no case
    folding is applied on input or output.

    Examples:
        >>> TableIdentifier(name="events")
        >>> TableIdentifier(schema_name="staging", name="events")
        >>> TableIdentifier.parse("staging.events")
    """

    schema_name: Optional[str] = PydanticField(
        None,
        description="Schema the table lives in (None for the search path)",
    )
    name: str = PydanticField(
        ...,
        description="Table name",
        min_length=1,
    )

    model_config = {"extra": "forbid", "frozen": True}

    @classmethod
    def parse(cls, ref: str) -> TableIdentifier:
        """Parse "schema.table" or "table" into an identifier.

        Args:
            ref: Table reference

        Returns:
            TableIdentifier

        Raises:
            ConfigurationError: If the reference has more than two parts
        """
        parts = ref.split(".")
        if len(parts) == 2 and all(parts):
            return cls(schema_name=parts[0], name=parts[1])
        elif len(parts) == 1 and parts[0]:
            return cls(name=parts[0])
        raise ConfigurationError(f"Invalid table reference: {ref}")

    @classmethod
    def coerce(cls, value: Union[str, TableIdentifier]) -> TableIdentifier:
        """Accept either an identifier or a dotted string reference."""
        if isinstance(value, TableIdentifier):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        raise ConfigurationError(f"Invalid table reference: {value!r}")

    def __str__(self) -> str:
        if self.schema_name:
            return f"{self.schema_name}.{self.name}"
        return self.name


class CatalogColumnRow(BaseModel):
    """One row of the column catalog joined with table constraints.

    Rows are validated once at the catalog-query boundary so that the
    introspector never works with loosely typed mappings.
    """

    column_name: str
    data_type: str
    is_nullable: bool = True
    column_default: Optional[str] = None
    constraint_name: Optional[str] = None
    is_identity: bool = False

    model_config = {"extra": "ignore"}

    @field_validator("column_default", "constraint_name", mode="before")
    @classmethod
    def coerce_optional_text(cls, v: Any) -> Optional[str]:
        """Catalog text columns may come back as non-string scalars."""
        if v is None:
            return None
        return str(v)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> CatalogColumnRow:
        """Build a catalog row by explicit column-name lookup.

        Lookup is case-insensitive on the result column names.

        Args:
            row: Mapping of result column name to value

        Returns:
            Validated CatalogColumnRow

        Raises:
            pydantic.ValidationError: If required columns are missing or malformed
        """
        lowered = {str(key).lower(): value for key, value in row.items()}
        values = {
            name: lowered[name]
            for name in cls.model_fields
            if name in lowered and lowered[name] is not None
        }
        return cls(**values)


class ColumnDescriptor(BaseModel):
    """Normalized description of one table column.

    Examples:
        >>> ColumnDescriptor(
        ...     name="name",
        ...     db_type="varchar(20)",
        ...     normalized_type=NormalizedType.STRING,
        ...     max_length=20,
        ... )
    """

    name: str = PydanticField(
        ...,
        description="Column name as stored in the catalog",
    )

    db_type: str = PydanticField(
        ...,
        description="Raw vendor type string (e.g., 'varchar(20)')",
    )

    normalized_type: NormalizedType = PydanticField(
        ...,
        description="Portable semantic type",
    )

    nullable: bool = PydanticField(
        True,
        description="Whether the column accepts NULL",
    )

    default: Optional[str] = PydanticField(
        None,
        description="Raw default expression; None when the catalog value is blank",
    )

    python_default: Optional[Any] = PydanticField(
        None,
        description="Default parsed into a Python value when it is a plain literal",
    )

    primary_key: bool = PydanticField(
        False,
        description="Whether the column belongs to the primary key",
    )

    max_length: Optional[int] = PydanticField(
        None,
        description="Declared length for string and binary types",
    )

    auto_increment: bool = PydanticField(
        False,
        description="Whether the engine generates values for this column",
    )

    model_config = {"extra": "forbid"}

    @field_validator("default", mode="before")
    @classmethod
    def blank_default_is_none(cls, v: Any) -> Optional[str]:
        """Normalize blank defaults to None, never the empty string."""
        if v is None:
            return None
        text = str(v)
        if not text.strip():
            return None
        return text
