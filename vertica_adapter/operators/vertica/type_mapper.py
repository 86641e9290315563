"""Vertica type mapper implementation.

This module provides type conversion between Vertica catalog type
strings and the portable NormalizedType set.
"""

from __future__ import annotations

from typing import Optional

from vertica_adapter.core.type_mapper import TypeMapper
from vertica_adapter.exceptions import TypeMappingError
from vertica_adapter.models.column import NormalizedType

# Declared type token for engine-generated identity columns
AUTO_INCREMENT = "AUTO_INCREMENT"


class VerticaTypeMapper(TypeMapper):
    """Type mapper for Vertica.

    Examples:
        >>> mapper = VerticaTypeMapper()
        >>> mapper.from_source("int")
        <NormalizedType.INTEGER: 'integer'>
        >>> mapper.from_source("varbinary(80)")
        <NormalizedType.BLOB: 'blob'>
        >>> mapper.from_source("numeric(18,0)")
        <NormalizedType.INTEGER: 'integer'>
    """

    # Vertica type -> normalized type mappings
    SOURCE_TO_NORMALIZED = {
        # Integer types (all 64-bit in Vertica)
        "int": NormalizedType.INTEGER,
        "integer": NormalizedType.INTEGER,
        "bigint": NormalizedType.INTEGER,
        "smallint": NormalizedType.INTEGER,
        "tinyint": NormalizedType.INTEGER,
        "int8": NormalizedType.INTEGER,
        "auto_increment": NormalizedType.INTEGER,
        "identity": NormalizedType.INTEGER,
        # Floating point types
        "float": NormalizedType.FLOAT,
        "float8": NormalizedType.FLOAT,
        "real": NormalizedType.FLOAT,
        "double precision": NormalizedType.FLOAT,
        # Decimal/Numeric
        "numeric": NormalizedType.DECIMAL,
        "decimal": NormalizedType.DECIMAL,
        "number": NormalizedType.DECIMAL,
        "money": NormalizedType.DECIMAL,
        # String types
        "varchar": NormalizedType.STRING,
        "character varying": NormalizedType.STRING,
        "char": NormalizedType.STRING,
        "character": NormalizedType.STRING,
        "long varchar": NormalizedType.STRING,
        # Binary types
        "varbinary": NormalizedType.BLOB,
        "binary": NormalizedType.BLOB,
        "long varbinary": NormalizedType.BLOB,
        "bytea": NormalizedType.BLOB,
        "raw": NormalizedType.BLOB,
        # Boolean
        "boolean": NormalizedType.BOOLEAN,
        "bool": NormalizedType.BOOLEAN,
        # Date/Time types
        "date": NormalizedType.DATE,
        "time": NormalizedType.TIME,
        "timetz": NormalizedType.TIME,
        "time with time zone": NormalizedType.TIME,
        "time without time zone": NormalizedType.TIME,
        "timestamp": NormalizedType.DATETIME,
        "timestamptz": NormalizedType.DATETIME,
        "timestamp with time zone": NormalizedType.DATETIME,
        "timestamp without time zone": NormalizedType.DATETIME,
        "datetime": NormalizedType.DATETIME,
        "smalldatetime": NormalizedType.DATETIME,
        # Other
        "uuid": NormalizedType.UUID,
    }

    # Normalized type -> Vertica DDL type mappings
    NORMALIZED_TO_TARGET = {
        NormalizedType.INTEGER: "INTEGER",
        NormalizedType.STRING: "VARCHAR",
        NormalizedType.BLOB: "VARBINARY",
        NormalizedType.DATETIME: "TIMESTAMP",
        NormalizedType.DATE: "DATE",
        NormalizedType.TIME: "TIME",
        NormalizedType.FLOAT: "FLOAT",
        NormalizedType.DECIMAL: "NUMERIC",
        NormalizedType.BOOLEAN: "BOOLEAN",
        NormalizedType.INTERVAL: "INTERVAL DAY TO SECOND",
        NormalizedType.UUID: "UUID",
    }

    DECIMAL_NAMES = frozenset({"numeric", "decimal", "number"})

    def from_source(self, source_type: str) -> NormalizedType:
        """Convert a Vertica catalog type to a normalized type.

        Examples:
            >>> mapper = VerticaTypeMapper()
            >>> mapper.from_source("timestamp")
            <NormalizedType.DATETIME: 'datetime'>
            >>> mapper.from_source("interval day to second")
            <NormalizedType.INTERVAL: 'interval'>
            >>> mapper.from_source("geometry(1024)")
            <NormalizedType.UNKNOWN: 'unknown'>
        """
        normalized = self.normalize_source_type(source_type)

        if normalized in self.DECIMAL_NAMES:
            # numeric(p,0) holds whole numbers only
            params = self.type_parameters(source_type)
            if len(params) == 2 and params[1] == "0":
                return NormalizedType.INTEGER
            return NormalizedType.DECIMAL

        if normalized in self.SOURCE_TO_NORMALIZED:
            return self.SOURCE_TO_NORMALIZED[normalized]

        # "interval day to second", "interval year to month", ...
        if normalized.startswith("interval"):
            return NormalizedType.INTERVAL

        return NormalizedType.UNKNOWN

    def to_target(self, normalized_type: NormalizedType, target_hint: Optional[str] = None) -> str:
        """Convert a normalized type to a Vertica DDL type.

        Examples:
            >>> mapper = VerticaTypeMapper()
            >>> mapper.to_target(NormalizedType.STRING)
            'VARCHAR'
            >>> mapper.to_target(NormalizedType.STRING, target_hint="LONG VARCHAR")
            'LONG VARCHAR'
        """
        if target_hint:
            return target_hint

        if normalized_type in self.NORMALIZED_TO_TARGET:
            return self.NORMALIZED_TO_TARGET[normalized_type]

        raise TypeMappingError(f"No Vertica type for {normalized_type!r}")

    def get_ddl_type(
        self,
        normalized_type: NormalizedType,
        size: Optional[int] = None,
        precision: Optional[int] = None,
        scale: Optional[int] = None,
        target_hint: Optional[str] = None,
    ) -> str:
        """Get Vertica DDL type string with size or precision/scale.

        Examples:
            >>> mapper = VerticaTypeMapper()
            >>> mapper.get_ddl_type(NormalizedType.STRING, size=20)
            'VARCHAR(20)'
            >>> mapper.get_ddl_type(NormalizedType.DECIMAL, precision=10, scale=2)
            'NUMERIC(10,2)'
        """
        if target_hint:
            return target_hint

        base_type = self.to_target(normalized_type)

        if normalized_type in (NormalizedType.STRING, NormalizedType.BLOB) and size is not None:
            return f"{base_type}({size})"

        if normalized_type == NormalizedType.DECIMAL and precision is not None:
            if scale is not None:
                return f"{base_type}({precision},{scale})"
            return f"{base_type}({precision})"

        return base_type
