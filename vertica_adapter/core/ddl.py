"""Table definition building and DDL rendering.

A ``TableGenerator`` collects column definitions in memory; the DDL
text is rendered afterwards with a dialect translator and type mapper.
Dialects subclass the generator to adjust definitions as they are built.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from vertica_adapter.core.translator import SQLTranslator
from vertica_adapter.core.type_mapper import TypeMapper
from vertica_adapter.exceptions import ConfigurationError, TranslationError
from vertica_adapter.models.column import NormalizedType, TableIdentifier

# Generic auto-increment modifier keyword
AUTO_INCREMENT_SQL = "AUTOINCREMENT"


@dataclass
class ColumnDefinition:
    """One column of a table being defined.

    ``type`` is either a vendor type string, used verbatim, or a
    NormalizedType, mapped through the dialect's type mapper.
    """

    name: str
    type: Union[str, NormalizedType]
    nullable: Optional[bool] = None
    default: Any = None
    unique: bool = False
    primary_key: bool = False
    auto_increment: bool = False
    size: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None


class TableGenerator:
    """Builds a table definition.

    Examples:
        >>> generator = TableGenerator("events")
        >>> generator.primary_key("id")
        >>> generator.column("kind", NormalizedType.STRING, size=20, nullable=False)
        >>> generator.create_table_sql(translator, type_mapper)
    """

    def __init__(self, table: Union[str, TableIdentifier]):
        self.table = TableIdentifier.coerce(table)
        self.columns: list[ColumnDefinition] = []
        self.primary_key_columns: list[str] = []

    def column(self, name: str, type: Union[str, NormalizedType], **options: Any) -> ColumnDefinition:
        """Add a column.

        Args:
            name: Column name
            type: Vendor type string or NormalizedType
            **options: Any ColumnDefinition field (nullable, default, size, ...)
        """
        definition = ColumnDefinition(name=name, type=type, **options)
        self.columns.append(definition)
        return definition

    def primary_key(
        self,
        name: Union[str, list[str]],
        type: Union[str, NormalizedType, None] = None,
        auto_increment: Optional[bool] = None,
        **options: Any,
    ) -> Optional[ColumnDefinition]:
        """Add a primary key.

        A single name adds a primary key column placed first, an
        auto-incrementing integer unless told otherwise. A list of names
        declares a composite key over columns added separately.

        Returns:
            The primary key column, or None for a composite key
        """
        if isinstance(name, list):
            if not name:
                raise ConfigurationError("Composite primary key requires at least one column")
            self.primary_key_columns = list(name)
            return None

        if self.primary_key_columns or any(c.primary_key for c in self.columns):
            raise ConfigurationError(f"Table {self.table} already has a primary key")

        definition = ColumnDefinition(
            name=name,
            type=type if type is not None else NormalizedType.INTEGER,
            primary_key=True,
            auto_increment=True if auto_increment is None else auto_increment,
            **options,
        )
        self.columns.insert(0, definition)
        return definition

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def create_table_sql(
        self,
        translator: SQLTranslator,
        type_mapper: TypeMapper,
        if_not_exists: bool = False,
    ) -> str:
        """Render CREATE TABLE.

        Raises:
            ConfigurationError: If the table has no columns
            TranslationError: If IF NOT EXISTS is requested but unsupported
        """
        if not self.columns:
            raise ConfigurationError(f"Table {self.table} has no columns")

        sql = "CREATE TABLE "
        if if_not_exists:
            if not translator.capabilities.supports_create_table_if_not_exists:
                raise TranslationError(f"{translator.name} dialect does not support CREATE TABLE IF NOT EXISTS")
            sql += "IF NOT EXISTS "

        elements = [self.column_definition_sql(c, translator, type_mapper) for c in self.columns]
        if self.primary_key_columns:
            keys = ", ".join(translator.quote_identifier(c) for c in self.primary_key_columns)
            elements.append(f"PRIMARY KEY ({keys})")

        return f"{sql}{translator.table_sql(self.table)} (" + ", ".join(elements) + ")"

    def column_definition_sql(
        self,
        column: ColumnDefinition,
        translator: SQLTranslator,
        type_mapper: TypeMapper,
    ) -> str:
        parts = [translator.quote_identifier(column.name), self._type_sql(column, type_mapper)]
        if column.unique:
            parts.append("UNIQUE")
        if column.nullable is True:
            parts.append("NULL")
        elif column.nullable is False:
            parts.append("NOT NULL")
        if column.default is not None:
            parts.append(f"DEFAULT {translator.literal(column.default)}")
        if column.primary_key:
            parts.append("PRIMARY KEY")
        if column.auto_increment:
            parts.append(AUTO_INCREMENT_SQL)
        return " ".join(parts)

    def _type_sql(self, column: ColumnDefinition, type_mapper: TypeMapper) -> str:
        if isinstance(column.type, NormalizedType):
            get_ddl_type = getattr(type_mapper, "get_ddl_type", None)
            if get_ddl_type is not None:
                return get_ddl_type(
                    column.type,
                    size=column.size,
                    precision=column.precision,
                    scale=column.scale,
                )
            return type_mapper.to_target(column.type)
        return column.type


def drop_table_sql(
    table: Union[str, TableIdentifier],
    translator: SQLTranslator,
    if_exists: bool = False,
    cascade: bool = False,
) -> str:
    """Render DROP TABLE.

    Raises:
        TranslationError: If IF EXISTS is requested but unsupported
    """
    sql = "DROP TABLE "
    if if_exists:
        if not translator.capabilities.supports_drop_table_if_exists:
            raise TranslationError(f"{translator.name} dialect does not support DROP TABLE IF EXISTS")
        sql += "IF EXISTS "
    sql += translator.table_sql(TableIdentifier.coerce(table))
    if cascade:
        sql += " CASCADE"
    return sql
