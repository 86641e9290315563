"""Vertica operator for vertica_adapter.

This package provides Vertica support: connection management, SQL
translation, catalog introspection, COPY bulk loading and table DDL.
"""

from vertica_adapter.operators.vertica.connector import VerticaConnector
from vertica_adapter.operators.vertica.copy_loader import VerticaCopyLoader
from vertica_adapter.operators.vertica.introspector import VerticaSchemaIntrospector
from vertica_adapter.operators.vertica.table_generator import VerticaTableGenerator
from vertica_adapter.operators.vertica.translator import VerticaTranslator
from vertica_adapter.operators.vertica.type_mapper import VerticaTypeMapper

__all__ = [
    "VerticaConnector",
    "VerticaCopyLoader",
    "VerticaSchemaIntrospector",
    "VerticaTableGenerator",
    "VerticaTranslator",
    "VerticaTypeMapper",
]
