"""Bulk load job model.

A ``CopyJob`` describes one ``COPY ... FROM STDIN`` call: the target
table, an optional column list, exactly one data source and the
statement options.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Callable, Iterator, Literal, Optional

from pydantic import BaseModel, Field as PydanticField, field_validator, model_validator

from vertica_adapter.exceptions import ConfigurationError
from vertica_adapter.models.column import TableIdentifier

CSV_DELIMITER_OPTION = "DELIMITER ','"


class CopyJob(BaseModel):
    """One bulk load into a table.

    Data sources:
        - data: a string (one record) or any iterable of record strings
        - producer: a callable returning the next record, or None when done

    Supplying both or neither raises ConfigurationError at construction,
    before any connection is touched.

    Examples:
        >>> CopyJob(table="events", data=["1|click", "2|view"])
        >>> CopyJob(table="events", columns=["id", "kind"], producer=reader.next_line)
        >>> CopyJob(table="events", data=rows, format="csv")
    """

    table: TableIdentifier = PydanticField(
        ...,
        description="Target table",
    )

    columns: Optional[list[str]] = PydanticField(
        None,
        description="Columns in input order; all table columns when omitted",
    )

    data: Optional[Any] = PydanticField(
        None,
        description="A record string or an iterable of record strings",
    )

    producer: Optional[Callable[[], Optional[str]]] = PydanticField(
        None,
        description="Pull callback returning the next record or None at end of stream",
    )

    options: Optional[str] = PydanticField(
        None,
        description="Space-separated COPY options, e.g. \"DELIMITER ',' NULL ''\"",
    )

    format: Optional[Literal["csv"]] = PydanticField(
        None,
        description="'csv' appends a comma delimiter option",
    )

    model_config = {"extra": "forbid", "arbitrary_types_allowed": True}

    @field_validator("table", mode="before")
    @classmethod
    def coerce_table(cls, v: Any) -> TableIdentifier:
        return TableIdentifier.coerce(v)

    @field_validator("data", mode="before")
    @classmethod
    def wrap_single_record(cls, v: Any) -> Any:
        """A lone string is one record, not an iterable of characters."""
        if isinstance(v, (str, bytes)):
            return [v]
        if v is not None and (isinstance(v, Mapping) or not isinstance(v, Iterable)):
            raise ConfigurationError(
                f"copy_into data must be a string or an iterable of strings, got {type(v).__name__}"
            )
        return v

    @model_validator(mode="after")
    def check_single_source(self) -> CopyJob:
        if self.data is not None and self.producer is not None:
            raise ConfigurationError("Cannot provide both data and a producer to copy_into")
        if self.data is None and self.producer is None:
            raise ConfigurationError("Must provide either data or a producer to copy_into")
        return self

    @property
    def statement_options(self) -> Optional[str]:
        """Options appended after FROM STDIN.

        CSV format adds the comma delimiter once, after any explicit options.
        """
        options = (self.options or "").strip()
        if self.format == "csv":
            options = f"{options} {CSV_DELIMITER_OPTION}".strip()
        return options or None

    def records(self) -> Iterator[Any]:
        """Yield raw records from whichever source was supplied."""
        if self.producer is not None:
            while True:
                record = self.producer()
                if record is None:
                    return
                yield record
        else:
            yield from self.data
