"""Tests for the Vertica connector lifecycle and statement execution."""

import pytest

from vertica_adapter.core.connection import Connection
from vertica_adapter.exceptions import ConnectionError, TransportError
from vertica_adapter.models import QuerySpec
from vertica_adapter.operators.vertica import VerticaConnector


class TestLifecycle:
    """Test pool creation and teardown."""

    def test_connect_runs_check_query(self, server):
        connector = VerticaConnector({}, connection_factory=server.connect)
        connector.connect()
        try:
            assert connector.is_connected
            assert server.executed == ["SELECT 1"]
        finally:
            connector.disconnect()
        assert not connector.is_connected
        assert server.connections[0].is_closed

    def test_connect_failure(self, server):
        server.refuse_connections = True
        connector = VerticaConnector({}, connection_factory=server.connect)
        with pytest.raises(ConnectionError, match="Failed to connect to Vertica"):
            connector.connect()
        assert not connector.is_connected

    def test_context_manager(self, server):
        with VerticaConnector({}, connection_factory=server.connect) as connector:
            assert connector.is_connected
        assert not connector.is_connected

    def test_test_connection(self, server):
        connector = VerticaConnector({}, connection_factory=server.connect)
        assert connector.test_connection() is True
        connector.disconnect()

        server.refuse_connections = True
        assert VerticaConnector({}, connection_factory=server.connect).test_connection() is False

    def test_disconnect_twice(self, connector):
        connector.disconnect()
        connector.disconnect()
        assert not connector.is_connected

    def test_not_connected(self, server):
        connector = VerticaConnector({}, connection_factory=server.connect)
        with pytest.raises(TransportError, match="Not connected"):
            connector.execute("SELECT 1")

    def test_connection_parameters(self):
        connector = VerticaConnector(
            {
                "host": "db1",
                "user": "dbadmin",
                "password": "secret",
                "database": "VMart",
                "read_timeout": 5,
                "ssl": True,
            }
        )
        params = connector.connection_factory.keywords
        assert params == {
            "host": "db1",
            "port": 5433,
            "user": "dbadmin",
            "password": "secret",
            "database": "VMart",
            "connection_timeout": 5,
            "ssl": True,
            "autocommit": True,
        }

    def test_capabilities(self, connector):
        capabilities = connector.capabilities
        assert capabilities.supports_timeseries
        assert capabilities.supports_create_table_if_not_exists
        assert capabilities.supports_drop_table_if_exists


class TestExecution:
    """Test statement execution through pooled connections."""

    def test_execute_query(self, connector, server):
        server.respond("FROM \"events\"", ["id", "kind"], [(1, "click"), (2, "view")])
        assert connector.execute_query('SELECT * FROM "events"') == [
            {"id": 1, "kind": "click"},
            {"id": 2, "kind": "view"},
        ]

    def test_execute_insert_returns_output(self, connector, server):
        server.respond("INSERT INTO", ["OUTPUT"], [(1,)])
        assert connector.execute_insert("INSERT INTO \"t\" VALUES (1)") == 1

    def test_execute_statement(self, connector, server):
        connector.execute_statement('TRUNCATE TABLE "t"')
        assert server.executed == ['TRUNCATE TABLE "t"']

    def test_driver_error(self, connector, server):
        server.fail_on = "BROKEN"
        with pytest.raises(TransportError, match="Failed to execute statement"):
            connector.execute("SELECT BROKEN")

    def test_connection_reused(self, connector, server):
        connector.execute("SELECT 2")
        connector.execute("SELECT 3")
        assert len(server.connections) == 1

    def test_closed_connection_discarded_after_error(self, connector, server):
        server.fail_on = "BROKEN"
        server.connections[0].is_closed = True
        with pytest.raises(TransportError):
            connector.execute("SELECT BROKEN")

        server.fail_on = None
        connector.execute("SELECT 2")
        assert len(server.connections) == 2


class TestDatasetOperations:
    """Test EXPLAIN, locks and rendering helpers."""

    def test_explain(self, connector, server):
        server.respond("EXPLAIN", ["QUERY PLAN"], [("Access Path:",), ("+-STORAGE ACCESS",)])
        plan = connector.explain(QuerySpec(from_=["events"]))

        assert plan == "Access Path:\n+-STORAGE ACCESS"
        assert server.executed[-1] == 'EXPLAIN SELECT * FROM "events"'

    def test_explain_local_first_column(self, connector, server):
        server.respond("EXPLAIN LOCAL", ["plan"], [("a",), ("b",)])
        assert connector.explain(QuerySpec(from_=["events"]), local=True) == "a\nb"
        assert server.executed[-1] == 'EXPLAIN LOCAL SELECT * FROM "events"'

    def test_locks(self, connector, server):
        server.respond('"v_monitor"."locks"', ["object_name", "lock_mode"], [("t", "X")])
        assert connector.locks() == [{"object_name": "t", "lock_mode": "X"}]
        assert server.executed[-1] == 'SELECT * FROM "v_monitor"."locks"'

    def test_render_select(self, connector):
        assert connector.render_select(QuerySpec(from_=["t"], limit=1)) == 'SELECT * FROM "t" LIMIT 1'


class TestConnectionContract:
    """Test the checked-out connection wrapper."""

    def test_satisfies_protocol(self, connector):
        with connector.synchronize() as conn:
            assert isinstance(conn, Connection)
            result = conn.execute("SELECT 1")
            assert result.first() is None
            assert len(result) == 0

    def test_result_cursor(self, connector, server):
        server.respond("FROM \"t\"", ["id"], [(1,), (2,)])
        with connector.synchronize() as conn:
            result = conn.execute('SELECT "id" FROM "t"')
        assert result.column_names == ["id"]
        assert result.column("id") == [1, 2]
        assert result.first() == {"id": 1}
