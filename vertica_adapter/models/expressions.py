"""Expression tree nodes rendered by the SQL translators.

Nodes are small immutable values. Plain Python values inside an
expression are literals; identifiers must be wrapped with ``ident`` (or
``Identifier``) unless they appear in a select/from/group/order list,
where a bare string already names a column or table.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Identifier:
    """A column or table name, optionally qualified."""

    name: str
    qualifier: Optional[str] = None


@dataclass(frozen=True)
class Lit:
    """Raw SQL text, emitted verbatim."""

    sql: str


@dataclass(frozen=True)
class Function:
    """SQL function call: ``name(arg, ...)``."""

    name: str
    args: tuple = ()


@dataclass(frozen=True)
class Aliased:
    """``expr AS alias``."""

    expr: Any
    alias: str


# Operators whose negation is another operator of the same arity
NEGATIONS = {
    "=": "!=",
    "!=": "=",
    "<": ">=",
    ">=": "<",
    ">": "<=",
    "<=": ">",
    "LIKE": "NOT LIKE",
    "NOT LIKE": "LIKE",
    "ILIKE": "NOT ILIKE",
    "NOT ILIKE": "ILIKE",
    "IN": "NOT IN",
    "NOT IN": "IN",
    "IS": "IS NOT",
    "IS NOT": "IS",
    "~": "!~",
    "!~": "~",
    "~*": "!~*",
    "!~*": "~*",
}


@dataclass(frozen=True)
class Expression:
    """An operator applied to arguments, e.g. ``Expression("=", (a, b))``."""

    op: str
    args: tuple = ()

    def negate(self) -> Expression:
        """Return the logical negation of this expression.

        Operators with a direct inverse are swapped; anything else is
        wrapped in NOT.
        """
        if self.op in NEGATIONS:
            return Expression(NEGATIONS[self.op], self.args)
        if self.op == "NOT":
            return self.args[0]
        return Expression("NOT", (self,))

    def __invert__(self) -> Expression:
        return self.negate()

    def __and__(self, other: Any) -> Expression:
        return and_(self, other)

    def __or__(self, other: Any) -> Expression:
        return or_(self, other)


@dataclass(frozen=True)
class Ordered:
    """An ORDER BY item."""

    expr: Any
    descending: bool = False
    nulls: Optional[str] = None

    def invert(self) -> Ordered:
        """Flip the sort direction."""
        return Ordered(self.expr, not self.descending, self.nulls)


def ident(name: str, qualifier: Optional[str] = None) -> Identifier:
    """Build an identifier; ``ident("items.value")`` is split on the dot."""
    if qualifier is None and "." in name:
        qualifier, name = name.split(".", 1)
    return Identifier(name, qualifier)


def lit(sql: str) -> Lit:
    return Lit(sql)


def func(name: str, *args: Any) -> Function:
    return Function(name, tuple(args))


def asc(expr: Any, nulls: Optional[str] = None) -> Ordered:
    return Ordered(_as_identifier(expr), False, nulls)


def desc(expr: Any, nulls: Optional[str] = None) -> Ordered:
    return Ordered(_as_identifier(expr), True, nulls)


def and_(*conditions: Any) -> Any:
    """Conjunction of conditions; a single condition is returned unchanged."""
    conditions = tuple(c for c in conditions if c is not None)
    if not conditions:
        return None
    if len(conditions) == 1:
        return conditions[0]
    return Expression("AND", conditions)


def or_(*conditions: Any) -> Any:
    """Disjunction of conditions; a single condition is returned unchanged."""
    conditions = tuple(c for c in conditions if c is not None)
    if not conditions:
        return None
    if len(conditions) == 1:
        return conditions[0]
    return Expression("OR", conditions)


def not_(condition: Any) -> Expression:
    if isinstance(condition, Expression):
        return condition.negate()
    return Expression("NOT", (condition,))


def ilike(source: Any, pattern: Any) -> Expression:
    """Case-insensitive LIKE; a string source names a column."""
    return Expression("ILIKE", (_as_identifier(source), pattern))


def regexp(source: Any, pattern: Any, case_insensitive: bool = False) -> Expression:
    """Regular expression match; a string source names a column."""
    op = "~*" if case_insensitive else "~"
    return Expression(op, (_as_identifier(source), pattern))


def condition_from_mapping(criteria: dict[str, Any]) -> Any:
    """Build an AND of column conditions from keyword-style criteria.

    ``None`` becomes IS NULL, lists and tuples become IN, compiled regular
    expressions become a regexp match (case-insensitive when compiled with
    ``re.IGNORECASE``), anything else becomes equality.
    """
    conditions = []
    for column, value in criteria.items():
        column_ref = ident(column)
        if value is None:
            conditions.append(Expression("IS", (column_ref, None)))
        elif isinstance(value, (list, tuple)):
            conditions.append(Expression("IN", (column_ref, tuple(value))))
        elif isinstance(value, re.Pattern):
            conditions.append(
                regexp(column_ref, value.pattern, bool(value.flags & re.IGNORECASE))
            )
        else:
            conditions.append(Expression("=", (column_ref, value)))
    return and_(*conditions)


def _as_identifier(value: Any) -> Any:
    if isinstance(value, str):
        return ident(value)
    return value
