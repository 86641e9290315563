"""Vertica schema introspection.

Catalog queries are built as QuerySpecs and rendered through the Vertica
translator. Column rows are validated into ``CatalogColumnRow`` at the
query boundary and normalized into ``ColumnDescriptor``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Union

from pydantic import ValidationError

from vertica_adapter.models.column import (
    CatalogColumnRow,
    ColumnDescriptor,
    TableIdentifier,
)
from vertica_adapter.models.expressions import Aliased, Expression, Lit, and_, ident
from vertica_adapter.models.query import Join, QuerySpec
from vertica_adapter.operators.vertica.type_mapper import VerticaTypeMapper

if TYPE_CHECKING:
    from vertica_adapter.operators.vertica.connector import VerticaConnector

logger = logging.getLogger(__name__)

# Constraint name Vertica gives primary keys
PK_NAME = "C_PRIMARY"

TABLES = TableIdentifier(schema_name="v_catalog", name="tables")
COLUMNS = TableIdentifier(schema_name="v_catalog", name="columns")
TABLE_CONSTRAINTS = TableIdentifier(schema_name="v_catalog", name="table_constraints")


def _row_value(row: dict[str, Any], name: str) -> Any:
    """Look up a result column case-insensitively."""
    if name in row:
        return row[name]
    lowered = name.lower()
    for key, value in row.items():
        if str(key).lower() == lowered:
            return value
    return None


class VerticaSchemaIntrospector:
    """Reads Vertica's v_catalog views.

    Examples:
        >>> introspector = VerticaSchemaIntrospector(connector)
        >>> introspector.list_tables(schema="public")
        ['events', 'users']
        >>> name, column = introspector.describe_table("events")[0]
        >>> column.normalized_type
        <NormalizedType.INTEGER: 'integer'>
    """

    def __init__(self, connector: VerticaConnector, type_mapper: Optional[VerticaTypeMapper] = None):
        self.connector = connector
        self.type_mapper = type_mapper or VerticaTypeMapper()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def tables_query(self, schema: Optional[str] = None) -> QuerySpec:
        query = QuerySpec(select=["table_name"], from_=[TABLES])
        if schema:
            query = query.filter(table_schema=schema)
        return query

    def columns_query(self, table: str, schema: Optional[str] = None) -> QuerySpec:
        """Columns of one table joined with the table's constraints."""
        conditions = [Expression("=", (ident("table_name", "c"), table))]
        if schema:
            conditions.append(Expression("=", (ident("table_schema", "c"), schema)))

        return QuerySpec(
            select=[
                ident("column_name", "c"),
                ident("constraint_name", "tc"),
                ident("is_nullable", "c"),
                ident("column_default", "c"),
                ident("data_type", "c"),
                ident("is_identity", "c"),
            ],
            from_=[Aliased(COLUMNS, "c")],
            joins=[
                Join(
                    kind="LEFT OUTER",
                    table=Aliased(TABLE_CONSTRAINTS, "tc"),
                    on=Expression("=", (ident("table_id", "c"), ident("table_id", "tc"))),
                )
            ],
            where=and_(*conditions),
            order=[ident("ordinal_position", "c")],
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def list_tables(self, schema: Optional[str] = None) -> list[str]:
        """Table names in catalog order, without duplicates.

        Args:
            schema: Only list tables of this schema

        Returns:
            List of table names
        """
        sql = self.connector.translator.render_select(self.tables_query(schema))
        names: list[str] = []
        seen: set[str] = set()
        for row in self.connector.execute(sql):
            name = _row_value(row, "table_name")
            if name is None or name in seen:
                continue
            seen.add(name)
            names.append(name)
        return names

    def table_exists(self, table: Union[str, TableIdentifier], schema: Optional[str] = None) -> bool:
        target = TableIdentifier.coerce(table)
        schema = schema or target.schema_name
        query = QuerySpec(select=[Lit("1")], from_=[TABLES], limit=1).filter(table_name=target.name)
        if schema:
            query = query.filter(table_schema=schema)
        result = self.connector.execute(self.connector.translator.render_select(query))
        return len(result) > 0

    def describe_table(
        self,
        table: Union[str, TableIdentifier],
        schema: Optional[str] = None,
    ) -> list[tuple[str, ColumnDescriptor]]:
        """Describe the columns of a table in catalog order.

        Args:
            table: Table name, "schema.table" or TableIdentifier
            schema: Schema filter (defaults to the identifier's schema)

        Returns:
            List of (column name, ColumnDescriptor) pairs
        """
        target = TableIdentifier.coerce(table)
        schema = schema or target.schema_name
        sql = self.connector.translator.render_select(self.columns_query(target.name, schema))

        columns: list[tuple[str, ColumnDescriptor]] = []
        positions: dict[str, int] = {}
        for raw in self.connector.execute(sql):
            try:
                row = CatalogColumnRow.from_row(raw)
            except ValidationError as e:
                logger.warning("Skipping malformed catalog row for %s: %s", target, e)
                continue

            descriptor = self.describe_column(row)
            if row.column_name in positions:
                # The constraint join repeats a column once per table constraint
                index = positions[row.column_name]
                if descriptor.primary_key and not columns[index][1].primary_key:
                    columns[index] = (
                        row.column_name,
                        columns[index][1].model_copy(update={"primary_key": True}),
                    )
                continue

            positions[row.column_name] = len(columns)
            columns.append((row.column_name, descriptor))

        return columns

    def describe_column(self, row: CatalogColumnRow) -> ColumnDescriptor:
        """Normalize one catalog row."""
        normalized_type = self.type_mapper.from_source(row.data_type)
        default = row.column_default
        if default is not None and not default.strip():
            default = None

        return ColumnDescriptor(
            name=row.column_name,
            db_type=row.data_type,
            normalized_type=normalized_type,
            nullable=row.is_nullable,
            default=default,
            python_default=self.type_mapper.parse_default(default, normalized_type),
            primary_key=row.constraint_name == PK_NAME,
            max_length=self.type_mapper.max_length(row.data_type),
            auto_increment=row.is_identity,
        )

    def column_names(self, query: QuerySpec) -> list[str]:
        """Result column names of a query, fetched without reading any rows."""
        empty_query = query.model_copy(
            update={
                "where": None,
                "having": None,
                "order": [],
                "distinct": False,
                "limit": 0,
                "offset": None,
            }
        )
        return self.connector.execute(self.connector.translator.render_select(empty_query)).column_names
