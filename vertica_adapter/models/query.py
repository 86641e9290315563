"""Query description models.

A ``QuerySpec`` is an ordered set of optional clause payloads. It carries
no SQL of its own; a dialect translator turns it into text, always
rendering present clauses in the dialect's fixed order.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field as PydanticField, field_validator

from vertica_adapter.exceptions import ConfigurationError
from vertica_adapter.models.expressions import (
    Ordered,
    and_,
    condition_from_mapping,
    ident,
)


class WindowSpec(BaseModel):
    """Window specification rendered inside ``OVER (...)``.

    Examples:
        >>> WindowSpec(order=["occurred_at"])
        >>> WindowSpec(partition=["device_id"], order=[desc("occurred_at")])
    """

    partition: list[Any] = PydanticField(
        default_factory=list,
        description="PARTITION BY expressions (bare strings are columns)",
    )
    order: list[Any] = PydanticField(
        default_factory=list,
        description="ORDER BY items (bare strings are columns)",
    )
    frame: Optional[str] = PydanticField(
        None,
        description="Raw frame clause, e.g. 'ROWS BETWEEN 1 PRECEDING AND CURRENT ROW'",
    )

    model_config = {"extra": "forbid", "arbitrary_types_allowed": True}

    @field_validator("partition", "order", mode="before")
    @classmethod
    def listify(cls, v: Any) -> list[Any]:
        """Accept a single item where a list is expected."""
        if v is None:
            return []
        if isinstance(v, (list, tuple)):
            return list(v)
        return [v]


class TimeseriesSpec(BaseModel):
    """Vertica TIMESERIES clause payload.

    All three fields must be present before rendering; ``require_complete``
    reports the first missing one.
    """

    alias: Optional[str] = PydanticField(
        None,
        description="Name of the time slice column",
    )
    time_unit: Optional[str] = PydanticField(
        None,
        description="Slice length as an interval literal, e.g. '1 second'",
    )
    over: Optional[WindowSpec] = PydanticField(
        None,
        description="Window the slices are computed over",
    )

    model_config = {"extra": "forbid"}

    @field_validator("over", mode="before")
    @classmethod
    def coerce_window(cls, v: Any) -> Any:
        """Allow ``{"order": "occurred_at"}`` in place of a WindowSpec."""
        if isinstance(v, dict):
            return WindowSpec(**v)
        return v

    def require_complete(self) -> TimeseriesSpec:
        """Check that alias, time_unit and over are all set.

        Returns:
            Self, for chaining

        Raises:
            ConfigurationError: Naming the first missing field
        """
        if not self.alias:
            raise ConfigurationError("timeseries requires alias")
        if not self.time_unit:
            raise ConfigurationError("timeseries requires time_unit")
        if self.over is None:
            raise ConfigurationError("timeseries requires an over clause")
        return self


class Join(BaseModel):
    """A JOIN clause entry."""

    kind: Literal["INNER", "LEFT OUTER", "RIGHT OUTER", "FULL OUTER", "CROSS"] = "INNER"
    table: Any = PydanticField(
        ...,
        description="Table (string, TableIdentifier, Aliased) or subquery",
    )
    on: Optional[Any] = PydanticField(
        None,
        description="Join condition expression",
    )
    using: list[str] = PydanticField(
        default_factory=list,
        description="USING column list (ignored when 'on' is set)",
    )

    model_config = {"extra": "forbid", "arbitrary_types_allowed": True}


class Compound(BaseModel):
    """A set operation appended to a SELECT."""

    kind: Literal["UNION", "UNION ALL", "INTERSECT", "EXCEPT"] = "UNION"
    query: QuerySpec

    model_config = {"extra": "forbid"}


class QuerySpec(BaseModel):
    """Abstract SELECT description.

    Builder helpers never mutate; they return an updated copy.

    Examples:
        >>> q = QuerySpec(from_=["events"]).filter(kind="click").ordered_by(desc("occurred_at"))
        >>> q = q.with_timeseries(alias="slice_time", time_unit="1 second", over={"order": "occurred_at"})
    """

    with_: list[tuple[str, Any]] = PydanticField(
        default_factory=list,
        description="Common table expressions as (name, QuerySpec or Lit)",
    )
    select: list[Any] = PydanticField(
        default_factory=list,
        description="Select list; empty renders '*'",
    )
    distinct: bool = False
    from_: list[Any] = PydanticField(
        default_factory=list,
        description="FROM sources (bare strings are table references)",
    )
    joins: list[Join] = PydanticField(default_factory=list)
    timeseries: Optional[TimeseriesSpec] = None
    where: Optional[Any] = None
    group: list[Any] = PydanticField(default_factory=list)
    having: Optional[Any] = None
    compounds: list[Compound] = PydanticField(default_factory=list)
    order: list[Any] = PydanticField(default_factory=list)
    limit: Optional[int] = PydanticField(None, ge=0)
    offset: Optional[int] = PydanticField(None, ge=0)
    lock: Optional[str] = PydanticField(
        None,
        description="Locking clause, e.g. 'FOR UPDATE'",
    )

    model_config = {"extra": "forbid", "arbitrary_types_allowed": True}

    def with_select(self, *columns: Any) -> QuerySpec:
        return self.model_copy(update={"select": list(columns)})

    def filter(self, condition: Any = None, **criteria: Any) -> QuerySpec:
        """AND a condition (and/or keyword criteria) into the WHERE clause."""
        if criteria:
            condition = and_(condition, condition_from_mapping(criteria))
        return self.model_copy(update={"where": and_(self.where, condition)})

    def ordered_by(self, *items: Any) -> QuerySpec:
        return self.model_copy(update={"order": list(items)})

    def reverse_order(self, *items: Any) -> QuerySpec:
        """Order by the given items (or the current order) with every direction flipped."""
        source = list(items) if items else self.order
        flipped = []
        for item in source:
            if isinstance(item, Ordered):
                flipped.append(item.invert())
            else:
                flipped.append(Ordered(ident(item) if isinstance(item, str) else item, True))
        return self.model_copy(update={"order": flipped})

    def limited(self, limit: Optional[int], offset: Optional[int] = None) -> QuerySpec:
        return self.model_copy(update={"limit": limit, "offset": offset})

    def joined(self, table: Any, on: Any = None, kind: str = "INNER", using: Optional[list[str]] = None) -> QuerySpec:
        join = Join(kind=kind, table=table, on=on, using=using or [])
        return self.model_copy(update={"joins": [*self.joins, join]})

    def compound(self, other: QuerySpec, kind: str = "UNION") -> QuerySpec:
        return self.model_copy(update={"compounds": [*self.compounds, Compound(kind=kind, query=other)]})

    def for_update(self) -> QuerySpec:
        return self.model_copy(update={"lock": "FOR UPDATE"})

    def with_timeseries(
        self,
        alias: Optional[str] = None,
        time_unit: Optional[str] = None,
        over: Any = None,
    ) -> QuerySpec:
        """Attach a TIMESERIES clause.

        Raises:
            ConfigurationError: If alias, time_unit or over is missing
        """
        spec = TimeseriesSpec(alias=alias, time_unit=time_unit, over=over).require_complete()
        return self.model_copy(update={"timeseries": spec})


Compound.model_rebuild()
