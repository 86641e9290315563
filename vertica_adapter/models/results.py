"""Result models for bulk loads.

This module defines the result class that captures the outcome and
metrics of one ``COPY ... FROM STDIN`` run.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field as PydanticField


class LoadResult(BaseModel):
    """Result of a bulk load.

    ``records_loaded`` is the row count reported by the server; it is
    None when the server did not report one. ``records_sent`` counts the
    records streamed from the client side.
    """

    table: str = PydanticField(
        ...,
        description="Target table reference",
    )

    statement: str = PydanticField(
        ...,
        description="COPY statement that was executed",
    )

    records_loaded: Optional[int] = PydanticField(
        None,
        description="Rows accepted by the server, when reported",
        ge=0,
    )

    records_sent: int = PydanticField(
        0,
        description="Records streamed to the server",
        ge=0,
    )

    duration_seconds: float = PydanticField(
        0.0,
        description="Duration of load in seconds",
        ge=0.0,
    )

    started_at: datetime = PydanticField(
        ...,
        description="Load start time",
    )

    completed_at: Optional[datetime] = PydanticField(
        None,
        description="Load completion time",
    )

    metadata: dict[str, Any] = PydanticField(
        default_factory=dict,
        description="Additional metadata",
    )

    model_config = {"extra": "forbid"}
