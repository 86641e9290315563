"""Shared fixtures: an in-memory stand-in for a vertica-python server.

``FakeServer`` scripts query responses and records every statement and
COPY payload it receives. ``server.connect`` is handed to
``VerticaConnector`` as its connection factory, so tests exercise the real
pool and connection wrapper without a database.
"""

import os
from collections import namedtuple

import pytest
from vertica_python.errors import DataError, Error as VerticaError

from vertica_adapter.operators.vertica import VerticaConnector

Column = namedtuple("Column", ["name", "type_code"])


class FakeCursor:
    """DB-API cursor returning scripted results."""

    def __init__(self, connection):
        self.connection = connection
        self.description = None
        self._rows = []

    def execute(self, sql):
        server = self.connection.server
        server.executed.append(sql)
        if server.fail_on is not None and server.fail_on in sql:
            raise VerticaError(f"Scripted failure for: {sql}")

        if "GET_NUM_ACCEPTED_ROWS" in sql:
            self._set_result(["GET_NUM_ACCEPTED_ROWS"], [(server.accepted_rows,)])
            return

        for match, columns, rows in server.responses:
            if match in sql:
                self._set_result(columns, rows)
                return

        self._set_result([], [])

    def _set_result(self, columns, rows):
        self.description = [Column(name, None) for name in columns] or None
        self._rows = [tuple(row) for row in rows]

    def fetchall(self):
        rows, self._rows = self._rows, []
        return rows

    def fetchone(self):
        if not self._rows:
            return None
        return self._rows.pop(0)

    def copy(self, sql, stream, buffer_size=131072):
        server = self.connection.server
        server.executed.append(sql)
        payload = b""
        while True:
            try:
                chunk = stream.read(buffer_size)
            except Exception as e:
                raise DataError(f"Failed to send a COPY data stream: {e}") from e
            if not chunk:
                break
            payload += chunk
            if server.copy_error_after is not None and payload.count(b"\n") >= server.copy_error_after:
                raise VerticaError("Scripted COPY failure")
        server.copies.append((sql, payload))
        if server.accepted_rows is Ellipsis:
            server.accepted_rows = payload.count(b"\n")

    def close(self):
        pass


class FakeConnection:
    """DB-API connection created by FakeServer.connect."""

    def __init__(self, server):
        self.server = server
        self.is_closed = False
        self.rollbacks = 0

    def cursor(self):
        return FakeCursor(self)

    def closed(self):
        return self.is_closed

    def rollback(self):
        self.rollbacks += 1

    def commit(self):
        pass

    def close(self):
        self.is_closed = True


class FakeServer:
    """Scripted Vertica server state shared by every fake connection."""

    def __init__(self):
        self.responses = []
        self.executed = []
        self.copies = []
        self.connections = []
        self.fail_on = None
        self.copy_error_after = None
        self.accepted_rows = Ellipsis
        self.refuse_connections = False

    def respond(self, match, columns, rows):
        """Return (columns, rows) for any statement containing match."""
        self.responses.append((match, columns, rows))

    def connect(self):
        if self.refuse_connections:
            raise VerticaError("Connection refused")
        connection = FakeConnection(self)
        self.connections.append(connection)
        return connection


@pytest.fixture
def server():
    """A fresh scripted server."""
    return FakeServer()


@pytest.fixture
def connector(server):
    """A connected VerticaConnector backed by the fake server."""
    connector = VerticaConnector({"host": "fake-vertica"}, connection_factory=server.connect)
    connector.connect()
    server.executed.clear()
    yield connector
    connector.disconnect()


@pytest.fixture
def live_config():
    """Connection config for a real server, from VERTICA_TEST_* variables."""
    host = os.environ.get("VERTICA_TEST_HOST")
    if not host:
        pytest.skip("VERTICA_TEST_HOST not set")
    return {
        "dialect": "vertica",
        "host": host,
        "port": int(os.environ.get("VERTICA_TEST_PORT", "5433")),
        "user": os.environ.get("VERTICA_TEST_USER", "dbadmin"),
        "password": os.environ.get("VERTICA_TEST_PASSWORD", ""),
        "database": os.environ.get("VERTICA_TEST_DATABASE", "VMart"),
    }
