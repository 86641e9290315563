"""Tests for table definitions and DDL rendering."""

import pytest

from vertica_adapter.core.ddl import TableGenerator, drop_table_sql
from vertica_adapter.core.translator import SQLTranslator
from vertica_adapter.exceptions import ConfigurationError, TranslationError
from vertica_adapter.models import NormalizedType
from vertica_adapter.operators.vertica import (
    VerticaTableGenerator,
    VerticaTranslator,
    VerticaTypeMapper,
)
from vertica_adapter.operators.vertica.type_mapper import AUTO_INCREMENT


@pytest.fixture
def translator():
    return VerticaTranslator()


@pytest.fixture
def mapper():
    return VerticaTypeMapper()


class TestVerticaTableGenerator:
    """Test the auto-increment primary key rewrite."""

    def test_auto_increment_primary_key(self, translator, mapper):
        generator = VerticaTableGenerator("auto_inc_test")
        generator.primary_key("id")
        generator.column("value", "INTEGER")

        assert generator.create_table_sql(translator, mapper) == (
            'CREATE TABLE "auto_inc_test" ("id" AUTO_INCREMENT PRIMARY KEY, "value" INTEGER)'
        )

    def test_rewrite_happens_when_key_is_added(self, translator, mapper):
        generator = VerticaTableGenerator("t")
        definition = generator.primary_key("id")

        assert definition.type == AUTO_INCREMENT
        assert definition.auto_increment is False
        first = generator.create_table_sql(translator, mapper)
        assert generator.create_table_sql(translator, mapper) == first

    def test_explicit_non_incrementing_key(self, translator, mapper):
        generator = VerticaTableGenerator("t")
        generator.primary_key("code", "VARCHAR(10)", auto_increment=False)
        assert generator.create_table_sql(translator, mapper) == (
            'CREATE TABLE "t" ("code" VARCHAR(10) PRIMARY KEY)'
        )

    def test_if_not_exists(self, translator, mapper):
        generator = VerticaTableGenerator("t")
        generator.primary_key("id")
        assert generator.create_table_sql(translator, mapper, if_not_exists=True) == (
            'CREATE TABLE IF NOT EXISTS "t" ("id" AUTO_INCREMENT PRIMARY KEY)'
        )


class TestTableGenerator:
    """Test the generic table generator."""

    def test_generic_auto_increment_keyword(self, mapper):
        generator = TableGenerator("t")
        generator.column("value", NormalizedType.FLOAT)
        generator.primary_key("id")

        assert generator.create_table_sql(SQLTranslator(), mapper) == (
            'CREATE TABLE "t" ("id" INTEGER PRIMARY KEY AUTOINCREMENT, "value" FLOAT)'
        )

    def test_column_options(self, translator, mapper):
        generator = TableGenerator("t")
        generator.column("name", NormalizedType.STRING, size=20, nullable=False, default="x")
        generator.column("price", NormalizedType.DECIMAL, precision=10, scale=2, unique=True)

        assert generator.create_table_sql(translator, mapper) == (
            'CREATE TABLE "t" ("name" VARCHAR(20) NOT NULL DEFAULT \'x\', '
            '"price" NUMERIC(10,2) UNIQUE)'
        )

    def test_composite_primary_key(self, translator, mapper):
        generator = VerticaTableGenerator("t")
        generator.column("a", "INTEGER")
        generator.column("b", "INTEGER")
        assert generator.primary_key(["a", "b"]) is None

        assert generator.create_table_sql(translator, mapper) == (
            'CREATE TABLE "t" ("a" INTEGER, "b" INTEGER, PRIMARY KEY ("a", "b"))'
        )

    def test_second_primary_key_fails(self):
        generator = TableGenerator("t")
        generator.primary_key("id")
        with pytest.raises(ConfigurationError):
            generator.primary_key("other")

    def test_empty_table_fails(self, translator, mapper):
        with pytest.raises(ConfigurationError):
            TableGenerator("t").create_table_sql(translator, mapper)

    def test_unsupported_guard(self, mapper):
        generator = TableGenerator("t")
        generator.primary_key("id")
        with pytest.raises(TranslationError):
            generator.create_table_sql(SQLTranslator(), mapper, if_not_exists=True)
        with pytest.raises(TranslationError):
            drop_table_sql("t", SQLTranslator(), if_exists=True)


class TestDropTable:
    """Test DROP TABLE rendering."""

    def test_drop_table(self, translator):
        assert drop_table_sql("t", translator) == 'DROP TABLE "t"'
        assert drop_table_sql("staging.t", translator, if_exists=True, cascade=True) == (
            'DROP TABLE IF EXISTS "staging"."t" CASCADE'
        )


class TestConnectorDDL:
    """Test DDL executed through the connector."""

    def test_create_and_drop(self, connector, server):
        generator = connector.table_generator("auto_inc_test")
        generator.primary_key("id")
        generator.column("value", "INTEGER")

        connector.create_table(generator, if_not_exists=True)
        connector.drop_table("auto_inc_test", if_exists=True)

        assert server.executed == [
            'CREATE TABLE IF NOT EXISTS "auto_inc_test" ("id" AUTO_INCREMENT PRIMARY KEY, "value" INTEGER)',
            'DROP TABLE IF EXISTS "auto_inc_test"',
        ]
