"""Tests for Vertica catalog introspection."""

import logging

import pytest

from vertica_adapter.exceptions import SchemaError
from vertica_adapter.models import NormalizedType, QuerySpec
from vertica_adapter.operators.vertica import VerticaConnector

CATALOG_COLUMNS = [
    "column_name",
    "constraint_name",
    "is_nullable",
    "column_default",
    "data_type",
    "is_identity",
]


@pytest.fixture
def events_catalog(server):
    """Catalog rows for an events table."""
    server.respond(
        '"v_catalog"."columns"',
        CATALOG_COLUMNS,
        [
            ("id", "C_PRIMARY", False, None, "int", True),
            ("name", None, True, "", "varchar(20)", False),
            ("payload", "C_UNIQUE", True, None, "varbinary(80)", False),
            ("code", None, True, "'000'", "char(3)", False),
        ],
    )
    return server


class TestDescribeTable:
    """Test column normalization from catalog rows."""

    def test_columns_in_catalog_order(self, connector, events_catalog):
        columns = connector.describe_table("events")
        assert [name for name, _ in columns] == ["id", "name", "payload", "code"]

    def test_primary_key_from_constraint_name(self, connector, events_catalog):
        columns = dict(connector.describe_table("events"))
        assert columns["id"].primary_key is True
        assert columns["name"].primary_key is False
        assert columns["payload"].primary_key is False

    def test_type_round_trip(self, connector, events_catalog):
        columns = dict(connector.describe_table("events"))
        assert columns["name"].normalized_type == NormalizedType.STRING
        assert columns["name"].max_length == 20
        assert columns["payload"].normalized_type == NormalizedType.BLOB
        assert columns["id"].normalized_type == NormalizedType.INTEGER
        assert columns["id"].auto_increment is True
        assert columns["id"].nullable is False

    def test_defaults(self, connector, events_catalog):
        columns = dict(connector.describe_table("events"))
        assert columns["name"].default is None
        assert columns["code"].default == "'000'"
        assert columns["code"].python_default == "000"

    def test_catalog_query(self, connector, events_catalog):
        connector.describe_table("public.events")
        assert events_catalog.executed[-1] == (
            'SELECT "c"."column_name", "tc"."constraint_name", "c"."is_nullable", '
            '"c"."column_default", "c"."data_type", "c"."is_identity" '
            'FROM "v_catalog"."columns" AS "c" '
            'LEFT OUTER JOIN "v_catalog"."table_constraints" AS "tc" '
            'ON ("c"."table_id" = "tc"."table_id") '
            "WHERE ((\"c\".\"table_name\" = 'events') AND (\"c\".\"table_schema\" = 'public')) "
            'ORDER BY "c"."ordinal_position"'
        )

    def test_repeated_column_merged(self, connector, server):
        server.respond(
            '"v_catalog"."columns"',
            CATALOG_COLUMNS,
            [
                ("id", "C_UNIQUE", False, None, "int", False),
                ("value", "C_UNIQUE", True, None, "int", False),
                ("id", "C_PRIMARY", False, None, "int", False),
            ],
        )
        columns = connector.describe_table("t")
        assert [name for name, _ in columns] == ["id", "value"]
        assert columns[0][1].primary_key is True
        assert columns[1][1].primary_key is False

    def test_malformed_row_skipped(self, connector, server, caplog):
        server.respond(
            '"v_catalog"."columns"',
            CATALOG_COLUMNS,
            [
                (None, None, True, None, "int", False),
                ("ok", None, True, None, "int", False),
            ],
        )
        with caplog.at_level(logging.WARNING, logger="vertica_adapter"):
            columns = connector.describe_table("t")
        assert [name for name, _ in columns] == ["ok"]
        assert "Skipping malformed catalog row" in caplog.text

    def test_get_schema_missing_table(self, connector):
        with pytest.raises(SchemaError, match="does not exist"):
            connector.get_schema("missing")

    def test_requires_connection(self, server):
        connector = VerticaConnector({}, connection_factory=server.connect)
        with pytest.raises(SchemaError):
            connector.describe_table("events")


class TestTables:
    """Test table listing and existence checks."""

    def test_list_tables(self, connector, server):
        server.respond('"v_catalog"."tables"', ["table_name"], [("events",), ("users",), ("events",)])
        assert connector.list_tables(schema="public") == ["events", "users"]
        assert server.executed[-1] == (
            'SELECT "table_name" FROM "v_catalog"."tables" WHERE ("table_schema" = \'public\')'
        )

    def test_table_exists(self, connector, server):
        assert connector.table_exists("events") is False
        server.respond("SELECT 1 FROM", ["?column?"], [(1,)])
        assert connector.table_exists("staging.events") is True
        assert server.executed[-1] == (
            'SELECT 1 FROM "v_catalog"."tables" '
            "WHERE ((\"table_name\" = 'events') AND (\"table_schema\" = 'staging')) LIMIT 1"
        )

    def test_column_names(self, connector, server):
        server.respond("LIMIT 0", ["id", "kind"], [])
        query = QuerySpec(select=["id", "kind"], from_=["events"]).filter(kind="x").limited(5)
        assert connector.column_names(query) == ["id", "kind"]
        assert server.executed[-1] == 'SELECT "id", "kind" FROM "events" LIMIT 0'
