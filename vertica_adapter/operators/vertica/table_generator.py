"""Vertica table generator.

Vertica expresses identity columns through a declared type token rather
than a modifier keyword, so auto-incrementing primary keys are rewritten
as they are added.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from vertica_adapter.core.ddl import ColumnDefinition, TableGenerator
from vertica_adapter.models.column import NormalizedType
from vertica_adapter.operators.vertica.type_mapper import AUTO_INCREMENT


class VerticaTableGenerator(TableGenerator):
    """Table generator for Vertica.

    Examples:
        >>> generator = VerticaTableGenerator("auto_inc_test")
        >>> generator.primary_key("id")
        >>> generator.column("value", "INTEGER")
        >>> print(generator.create_table_sql(translator, type_mapper))
        CREATE TABLE "auto_inc_test" ("id" AUTO_INCREMENT PRIMARY KEY, "value" INTEGER)
    """

    def primary_key(
        self,
        name: Union[str, list[str]],
        type: Union[str, NormalizedType, None] = None,
        auto_increment: Optional[bool] = None,
        **options: Any,
    ) -> Optional[ColumnDefinition]:
        definition = super().primary_key(name, type, auto_increment, **options)

        if definition is not None and definition.auto_increment:
            definition.auto_increment = False
            definition.type = AUTO_INCREMENT

        return definition
