"""Generic SQL translator.

This module renders a ``QuerySpec`` and its expression tree into SQL
text. It defines the default SELECT clause order, identifier quoting,
literal rendering and the generic operator set. Dialect translators
subclass it, override the parts they do differently and call ``super()``
for everything else.
"""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from vertica_adapter.core.capabilities import DialectCapabilities
from vertica_adapter.exceptions import TranslationError
from vertica_adapter.models.column import TableIdentifier
from vertica_adapter.models.expressions import (
    Aliased,
    Expression,
    Function,
    Identifier,
    Lit,
    Ordered,
    ident,
)
from vertica_adapter.models.query import Join, QuerySpec, WindowSpec

# Binary operators rendered as "(left OP right)"
BINARY_OPERATORS = frozenset(
    {"=", "!=", "<", ">", "<=", ">=", "+", "-", "*", "/", "%", "||", "IS", "IS NOT", "IN", "NOT IN"}
)
LIKE_OPERATORS = frozenset({"LIKE", "NOT LIKE"})
BOOLEAN_OPERATORS = frozenset({"AND", "OR"})

ESCAPE = " ESCAPE "
BACKSLASH = "\\"


class SQLTranslator:
    """Base translator for SQL dialects.

    Subclasses customize rendering by overriding:
    - SELECT_CLAUSES: clause names rendered in order by render_select()
    - _select_<clause>_sql(): rendering of one clause
    - complex_expression_sql(): operator rendering (call super() as fallback)
    - capabilities: feature flags for this dialect

    Examples:
        >>> translator = SQLTranslator()
        >>> translator.render_select(QuerySpec(from_=["orders"], limit=10))
        'SELECT * FROM "orders" LIMIT 10'
    """

    name = "generic"
    QUOTE_CHAR = '"'
    SELECT_CLAUSES: tuple[str, ...] = (
        "with",
        "select",
        "distinct",
        "columns",
        "from",
        "join",
        "where",
        "group",
        "having",
        "compounds",
        "order",
        "limit",
        "lock",
    )
    capabilities = DialectCapabilities()

    def render_select(self, query: QuerySpec) -> str:
        """Render a SELECT statement.

        Present clauses are rendered in SELECT_CLAUSES order; absent
        clauses are omitted.

        Args:
            query: Query description

        Returns:
            SQL text

        Raises:
            ConfigurationError: If a clause payload is incomplete
            TranslationError: If the query uses something this dialect cannot render
        """
        self.validate_query(query)
        sql: list[str] = []
        for clause in self.SELECT_CLAUSES:
            getattr(self, f"_select_{clause}_sql")(sql, query)
        return "".join(sql)

    def validate_query(self, query: QuerySpec) -> None:
        """Check clause payloads before any SQL is built."""
        if query.timeseries is not None and "timeseries" not in self.SELECT_CLAUSES:
            raise TranslationError(f"{self.name} dialect does not support TIMESERIES")

    # ------------------------------------------------------------------
    # SELECT clauses
    # ------------------------------------------------------------------

    def _select_with_sql(self, sql: list[str], query: QuerySpec) -> None:
        if not query.with_:
            return
        ctes = [f"{self.quote_identifier(name)} AS {self._subquery_sql(body)}" for name, body in query.with_]
        sql.append("WITH " + ", ".join(ctes) + " ")

    def _select_select_sql(self, sql: list[str], query: QuerySpec) -> None:
        sql.append("SELECT")

    def _select_distinct_sql(self, sql: list[str], query: QuerySpec) -> None:
        if query.distinct:
            sql.append(" DISTINCT")

    def _select_columns_sql(self, sql: list[str], query: QuerySpec) -> None:
        if query.select:
            sql.append(" " + ", ".join(self.column_sql(column) for column in query.select))
        else:
            sql.append(" *")

    def _select_from_sql(self, sql: list[str], query: QuerySpec) -> None:
        if query.from_:
            sql.append(" FROM " + ", ".join(self.source_sql(source) for source in query.from_))

    def _select_join_sql(self, sql: list[str], query: QuerySpec) -> None:
        for join in query.joins:
            sql.append(self.join_sql(join))

    def _select_where_sql(self, sql: list[str], query: QuerySpec) -> None:
        if query.where is not None:
            sql.append(" WHERE " + self.literal(query.where))

    def _select_group_sql(self, sql: list[str], query: QuerySpec) -> None:
        if query.group:
            sql.append(" GROUP BY " + ", ".join(self.column_sql(item) for item in query.group))

    def _select_having_sql(self, sql: list[str], query: QuerySpec) -> None:
        if query.having is not None:
            sql.append(" HAVING " + self.literal(query.having))

    def _select_compounds_sql(self, sql: list[str], query: QuerySpec) -> None:
        for compound in query.compounds:
            sql.append(f" {compound.kind} {self.render_select(compound.query)}")

    def _select_order_sql(self, sql: list[str], query: QuerySpec) -> None:
        if query.order:
            sql.append(" ORDER BY " + ", ".join(self.order_sql(item) for item in query.order))

    def _select_limit_sql(self, sql: list[str], query: QuerySpec) -> None:
        if query.limit is not None:
            sql.append(f" LIMIT {int(query.limit)}")
        if query.offset is not None:
            sql.append(f" OFFSET {int(query.offset)}")

    def _select_lock_sql(self, sql: list[str], query: QuerySpec) -> None:
        if query.lock:
            sql.append(f" {query.lock}")

    # ------------------------------------------------------------------
    # Clause components
    # ------------------------------------------------------------------

    def column_sql(self, column: Any) -> str:
        """Render a select/group list item; a bare string names a column."""
        if isinstance(column, str):
            if column == "*":
                return "*"
            if column.endswith(".*"):
                return self.table_sql(TableIdentifier.parse(column[:-2])) + ".*"
            return self.literal(ident(column))
        return self.literal(column)

    def source_sql(self, source: Any) -> str:
        """Render a FROM/JOIN source; a bare string is a table reference."""
        if isinstance(source, str):
            return self.table_sql(TableIdentifier.parse(source))
        if isinstance(source, TableIdentifier):
            return self.table_sql(source)
        if isinstance(source, Aliased):
            return f"{self.source_sql(source.expr)} AS {self.quote_identifier(source.alias)}"
        if isinstance(source, QuerySpec):
            return self._subquery_sql(source)
        return self.literal(source)

    def join_sql(self, join: Join) -> str:
        sql = f" {join.kind} JOIN {self.source_sql(join.table)}"
        if join.kind == "CROSS":
            return sql
        if join.on is not None:
            sql += f" ON {self.literal(join.on)}"
        elif join.using:
            sql += " USING (" + ", ".join(self.quote_identifier(c) for c in join.using) + ")"
        return sql

    def order_sql(self, item: Any) -> str:
        if isinstance(item, Ordered):
            sql = f"{self.column_sql(item.expr)} {'DESC' if item.descending else 'ASC'}"
            if item.nulls:
                sql += f" NULLS {item.nulls.upper()}"
            return sql
        return self.column_sql(item)

    def window_sql(self, window: WindowSpec) -> str:
        """Render a window specification including its parentheses."""
        parts = []
        if window.partition:
            parts.append("PARTITION BY " + ", ".join(self.column_sql(p) for p in window.partition))
        if window.order:
            parts.append("ORDER BY " + ", ".join(self.order_sql(o) for o in window.order))
        if window.frame:
            parts.append(window.frame)
        return "(" + " ".join(parts) + ")"

    def table_sql(self, table: TableIdentifier) -> str:
        if table.schema_name:
            return f"{self.quote_identifier(table.schema_name)}.{self.quote_identifier(table.name)}"
        return self.quote_identifier(table.name)

    def _subquery_sql(self, body: Any) -> str:
        if isinstance(body, QuerySpec):
            return f"({self.render_select(body)})"
        if isinstance(body, Lit):
            return f"({body.sql})"
        raise TranslationError(f"Cannot render subquery from {type(body).__name__}")

    # ------------------------------------------------------------------
    # Identifiers and literals
    # ------------------------------------------------------------------

    def quote_identifier(self, name: str) -> str:
        q = self.QUOTE_CHAR
        return f"{q}{name.replace(q, q + q)}{q}"

    def quote_string(self, value: str) -> str:
        return "'" + value.replace("'", "''") + "'"

    def literal(self, value: Any) -> str:
        """Render any supported value or expression node as SQL."""
        if isinstance(value, Expression):
            return self.complex_expression_sql(value.op, value.args)
        if isinstance(value, Identifier):
            if value.qualifier:
                return f"{self.quote_identifier(value.qualifier)}.{self.quote_identifier(value.name)}"
            return self.quote_identifier(value.name)
        if isinstance(value, Lit):
            return value.sql
        if isinstance(value, Function):
            return f"{value.name}(" + ", ".join(self.literal(arg) for arg in value.args) + ")"
        if isinstance(value, Aliased):
            return f"{self.literal(value.expr)} AS {self.quote_identifier(value.alias)}"
        if isinstance(value, Ordered):
            return self.order_sql(value)
        if isinstance(value, TableIdentifier):
            return self.table_sql(value)
        if isinstance(value, QuerySpec):
            return self._subquery_sql(value)
        if isinstance(value, WindowSpec):
            return self.window_sql(value)
        if value is None:
            return "NULL"
        # bool before int: bool is an int subclass
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        if isinstance(value, str):
            return self.quote_string(value)
        if isinstance(value, datetime):
            return self.quote_string(value.isoformat(sep=" "))
        if isinstance(value, (date, time)):
            return self.quote_string(value.isoformat())
        if isinstance(value, (bytes, bytearray)):
            return f"X'{bytes(value).hex()}'"
        if isinstance(value, (list, tuple)):
            return "(" + ", ".join(self.literal(v) for v in value) + ")"
        raise TranslationError(f"Cannot render literal of type {type(value).__name__}")

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def complex_expression_sql(self, op: str, args: tuple) -> str:
        """Render an operator expression.

        Raises:
            TranslationError: If the operator is unknown to this translator
        """
        if op in BINARY_OPERATORS:
            return f"({self.literal(args[0])} {op} {self.literal(args[1])})"
        if op in LIKE_OPERATORS:
            return self._like_sql(op, args[0], args[1])
        if op in BOOLEAN_OPERATORS:
            return "(" + f" {op} ".join(self.literal(arg) for arg in args) + ")"
        if op == "NOT":
            return f"NOT {self.literal(args[0])}"
        if op in ("ILIKE", "NOT ILIKE"):
            # No native ILIKE: compare upper-cased operands
            like = "LIKE" if op == "ILIKE" else "NOT LIKE"
            return self._like_sql(like, Function("UPPER", (args[0],)), Function("UPPER", (args[1],)))
        raise TranslationError(f"{self.name} dialect does not support operator {op!r}")

    def _like_sql(self, op: str, source: Any, pattern: Any) -> str:
        return (
            f"({self.literal(source)} {op} {self.literal(pattern)}"
            f"{ESCAPE}{self.literal(BACKSLASH)})"
        )
