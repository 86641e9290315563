"""Dialect capability flags."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DialectCapabilities:
    """Feature flags describing what a dialect supports.

    The defaults describe the generic translator; dialects override the
    flags they extend.
    """

    supports_regexp: bool = False
    supports_window_functions: bool = False
    supports_timeseries: bool = False
    supports_create_table_if_not_exists: bool = False
    supports_drop_table_if_exists: bool = False
    supports_transaction_isolation_levels: bool = False

    def as_dict(self) -> dict[str, bool]:
        return {
            "supports_regexp": self.supports_regexp,
            "supports_window_functions": self.supports_window_functions,
            "supports_timeseries": self.supports_timeseries,
            "supports_create_table_if_not_exists": self.supports_create_table_if_not_exists,
            "supports_drop_table_if_exists": self.supports_drop_table_if_exists,
            "supports_transaction_isolation_levels": self.supports_transaction_isolation_levels,
        }
