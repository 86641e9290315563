"""Vertica SQL translator.

Adds Vertica's TIMESERIES clause (rendered between JOIN and WHERE),
REGEXP_LIKE for regular expression operators, native ILIKE with an
explicit escape character and EXPLAIN statement prefixes. Everything
else falls back to the generic translator.
"""

from __future__ import annotations

from typing import Any

from vertica_adapter.core.capabilities import DialectCapabilities
from vertica_adapter.core.translator import BACKSLASH, ESCAPE, SQLTranslator
from vertica_adapter.models.expressions import ident
from vertica_adapter.models.query import QuerySpec, TimeseriesSpec

EXPLAIN = "EXPLAIN "
EXPLAIN_LOCAL = "EXPLAIN LOCAL "
TIMESERIES = " TIMESERIES "
AS = " AS "
OVER = " OVER "
REGEXP_LIKE = "REGEXP_LIKE"
CASE_INSENSITIVE_FLAG = "i"


class VerticaTranslator(SQLTranslator):
    """Translator for Vertica.

    Examples:
        >>> translator = VerticaTranslator()
        >>> query = QuerySpec(from_=["t3"]).with_timeseries(
        ...     alias="slice_time", time_unit="1 second", over={"order": "occurred_at"}
        ... )
        >>> print(translator.render_select(query))
        SELECT * FROM "t3" TIMESERIES slice_time AS '1 second' OVER (ORDER BY "occurred_at")
    """

    name = "vertica"
    SELECT_CLAUSES = (
        "with",
        "select",
        "distinct",
        "columns",
        "from",
        "join",
        "timeseries",
        "where",
        "group",
        "having",
        "compounds",
        "order",
        "limit",
        "lock",
    )
    capabilities = DialectCapabilities(
        supports_regexp=True,
        supports_window_functions=True,
        supports_timeseries=True,
        supports_create_table_if_not_exists=True,
        supports_drop_table_if_exists=True,
        supports_transaction_isolation_levels=True,
    )

    def validate_query(self, query: QuerySpec) -> None:
        super().validate_query(query)
        if query.timeseries is not None:
            query.timeseries.require_complete()

    def _select_timeseries_sql(self, sql: list[str], query: QuerySpec) -> None:
        if query.timeseries is not None:
            sql.append(self.render_timeseries(query.timeseries))

    def render_timeseries(self, spec: TimeseriesSpec) -> str:
        """Render the TIMESERIES clause, with its leading space.

        Raises:
            ConfigurationError: If alias, time_unit or over is missing
        """
        spec.require_complete()
        return (
            f"{TIMESERIES}{spec.alias}{AS}{self.quote_string(spec.time_unit)}"
            f"{OVER}{self.window_sql(spec.over)}"
        )

    def render_regexp_match(self, source: Any, pattern: Any, case_insensitive: bool = False) -> str:
        """Render ``REGEXP_LIKE(source, pattern[, 'i'])``; a string source names a column."""
        args = [self._operand(source), self.literal(pattern)]
        if case_insensitive:
            args.append(self.literal(CASE_INSENSITIVE_FLAG))
        return f"{REGEXP_LIKE}(" + ", ".join(args) + ")"

    def render_ilike(self, source: Any, pattern: Any, negate: bool = False) -> str:
        """Render ``(source [NOT] ILIKE pattern ESCAPE '\\')``; a string source names a column."""
        op = "NOT ILIKE" if negate else "ILIKE"
        return (
            f"({self._operand(source)} {op} {self.literal(pattern)}"
            f"{ESCAPE}{self.literal(BACKSLASH)})"
        )

    def explain_sql(self, query: QuerySpec, local: bool = False) -> str:
        return (EXPLAIN_LOCAL if local else EXPLAIN) + self.render_select(query)

    def complex_expression_sql(self, op: str, args: tuple) -> str:
        if op in ("ILIKE", "NOT ILIKE"):
            return self.render_ilike(args[0], args[1], negate=op == "NOT ILIKE")
        if op == "~":
            return self.render_regexp_match(args[0], args[1])
        if op == "~*":
            return self.render_regexp_match(args[0], args[1], case_insensitive=True)
        if op == "!~":
            return "NOT " + self.render_regexp_match(args[0], args[1])
        if op == "!~*":
            return "NOT " + self.render_regexp_match(args[0], args[1], case_insensitive=True)
        return super().complex_expression_sql(op, args)

    def _operand(self, value: Any) -> str:
        if isinstance(value, str):
            return self.literal(ident(value))
        return self.literal(value)
