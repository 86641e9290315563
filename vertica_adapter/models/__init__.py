"""vertica_adapter models package.

This package contains the Pydantic models and expression nodes that
describe queries, columns, bulk loads and their results.
"""

from vertica_adapter.models.column import (
    CatalogColumnRow,
    ColumnDescriptor,
    NormalizedType,
    TableIdentifier,
)
from vertica_adapter.models.copy import CopyJob
from vertica_adapter.models.expressions import (
    Aliased,
    Expression,
    Function,
    Identifier,
    Lit,
    Ordered,
    and_,
    asc,
    desc,
    func,
    ident,
    ilike,
    lit,
    not_,
    or_,
    regexp,
)
from vertica_adapter.models.query import Compound, Join, QuerySpec, TimeseriesSpec, WindowSpec
from vertica_adapter.models.results import LoadResult

__all__ = [
    # Column models
    "CatalogColumnRow",
    "ColumnDescriptor",
    "NormalizedType",
    "TableIdentifier",
    # Query models
    "Compound",
    "Join",
    "QuerySpec",
    "TimeseriesSpec",
    "WindowSpec",
    # Expressions
    "Aliased",
    "Expression",
    "Function",
    "Identifier",
    "Lit",
    "Ordered",
    "and_",
    "asc",
    "desc",
    "func",
    "ident",
    "ilike",
    "lit",
    "not_",
    "or_",
    "regexp",
    # Bulk load
    "CopyJob",
    "LoadResult",
]
