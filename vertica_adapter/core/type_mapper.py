"""Base TypeMapper abstract class.

This module defines the TypeMapper interface for converting between
vendor type strings and the portable ``NormalizedType`` set.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from vertica_adapter.models.column import NormalizedType

_PARAMS = re.compile(r"\(([^)]*)\)")
_CAST_SUFFIX = re.compile(r"^(.*?)::[\w\s(),]+$", re.DOTALL)
_QUOTED = re.compile(r"^'(.*)'$", re.DOTALL)


class TypeMapper(ABC):
    """Base class for converting between vendor types and normalized types.

    TypeMappers handle bidirectional type conversion:
    - from_source: Convert a catalog type string to a NormalizedType
    - to_target: Convert a NormalizedType to a DDL type string

    Examples:
        >>> mapper = VerticaTypeMapper()
        >>> mapper.from_source("varchar(20)")
        <NormalizedType.STRING: 'string'>
        >>> mapper.max_length("varchar(20)")
        20
        >>> mapper.to_target(NormalizedType.BLOB)
        'VARBINARY'
    """

    @abstractmethod
    def from_source(self, source_type: str) -> NormalizedType:
        """Convert a vendor type string to a normalized type.

        Args:
            source_type: Vendor type (e.g., "int", "varchar(20)")

        Returns:
            Corresponding NormalizedType (UNKNOWN when unmapped)
        """
        pass

    @abstractmethod
    def to_target(self, normalized_type: NormalizedType, target_hint: Optional[str] = None) -> str:
        """Convert a normalized type to a vendor DDL type.

        Args:
            normalized_type: Portable type
            target_hint: Explicit vendor type; returned unchanged when given

        Returns:
            Vendor type string

        Raises:
            TypeMappingError: If the type cannot be mapped
        """
        pass

    def normalize_source_type(self, source_type: str) -> str:
        """Normalize a type string for lookup.

        Removes parameters, converts to lowercase and collapses whitespace.

        Examples:
            "VARCHAR(255)" -> "varchar"
            "NUMERIC(10,2)" -> "numeric"
            "TIMESTAMP(6) WITH TIME ZONE" -> "timestamp with time zone"
        """
        normalized = _PARAMS.sub("", source_type.lower())
        return " ".join(normalized.split())

    def type_parameters(self, source_type: str) -> list[str]:
        """Return the parenthesized parameters of a type string.

        Examples:
            "varchar(20)" -> ["20"]
            "numeric(10, 2)" -> ["10", "2"]
            "int" -> []
        """
        match = _PARAMS.search(source_type)
        if not match:
            return []
        return [part.strip() for part in match.group(1).split(",") if part.strip()]

    def max_length(self, source_type: str) -> Optional[int]:
        """Declared length of string and binary types, None otherwise."""
        if self.from_source(source_type) not in (NormalizedType.STRING, NormalizedType.BLOB):
            return None
        params = self.type_parameters(source_type)
        if len(params) == 1 and params[0].isdigit():
            return int(params[0])
        return None

    def parse_default(self, default: Optional[str], normalized_type: NormalizedType) -> Any:
        """Parse a catalog default expression into a Python value.

        Only plain literals are parsed; expressions such as ``now()`` give None.

        Examples:
            ("'000'", STRING) -> "000"
            ("42", INTEGER) -> 42
            ("'2024-01-01'::date", DATE) -> date(2024, 1, 1)
            ("now()", DATETIME) -> None
        """
        if default is None:
            return None
        text = default.strip()
        cast = _CAST_SUFFIX.match(text)
        if cast:
            text = cast.group(1).strip()
        if text.lower() == "null":
            return None

        quoted = _QUOTED.match(text)
        if quoted:
            text = quoted.group(1).replace("''", "'")
        elif normalized_type == NormalizedType.STRING:
            return None

        try:
            if normalized_type == NormalizedType.STRING:
                return text
            if normalized_type == NormalizedType.INTEGER:
                return int(text)
            if normalized_type == NormalizedType.FLOAT:
                return float(text)
            if normalized_type == NormalizedType.DECIMAL:
                return Decimal(text)
            if normalized_type == NormalizedType.BOOLEAN:
                lowered = text.lower()
                if lowered in ("true", "t"):
                    return True
                if lowered in ("false", "f"):
                    return False
                return None
            if normalized_type == NormalizedType.DATE:
                return date.fromisoformat(text)
            if normalized_type == NormalizedType.DATETIME:
                return datetime.fromisoformat(text)
            if normalized_type == NormalizedType.TIME:
                return time.fromisoformat(text)
        except (ValueError, InvalidOperation):
            return None
        return None
