"""End-to-end Vertica example.

This example creates a table with an auto-increment key, bulk loads it
with COPY, introspects it and runs TIMESERIES, ILIKE and EXPLAIN queries.

Prerequisites:
- Vertica running and reachable
- VERTICA_HOST, VERTICA_USER, VERTICA_PASSWORD, VERTICA_DATABASE set
"""

import os

from vertica_adapter import NormalizedType, QuerySpec, create_connector
from vertica_adapter.core.config import configure_logging
from vertica_adapter.models import desc, func, ident, ilike, lit


def connection_config():
    return {
        "dialect": "vertica",
        "host": os.environ.get("VERTICA_HOST", "localhost"),
        "user": os.environ.get("VERTICA_USER", "dbadmin"),
        "password": os.environ.get("VERTICA_PASSWORD", ""),
        "database": os.environ.get("VERTICA_DATABASE", "VMart"),
        "session_label": "vertica_adapter_example",
    }


def setup_table(conn):
    """Create the readings table."""
    print("Setting up readings table...")

    conn.drop_table("readings", if_exists=True)
    generator = conn.table_generator("readings")
    generator.primary_key("id")
    generator.column("device", NormalizedType.STRING, size=40, nullable=False)
    generator.column("reading", NormalizedType.FLOAT)
    generator.column("taken_at", NormalizedType.DATETIME)
    conn.create_table(generator)

    print("  ✓ Table created")


def example_bulk_load(conn):
    """Example 1: COPY from buffered records and from a pull callback."""
    print("\n" + "=" * 60)
    print("Example 1: Bulk Load")
    print("=" * 60)

    columns = ["device", "reading", "taken_at"]
    loaded = conn.copy_into(
        "readings",
        columns=columns,
        data=[
            "Acme sensor 1|20.5|2025-01-01 12:00:00",
            "Acme sensor 1|21.0|2025-01-01 12:00:03",
        ],
    )
    print(f"  Buffered records loaded: {loaded}")

    lines = iter(
        [
            "Globex gauge,19.0,2025-01-01 12:00:01\n",
            "Globex gauge,19.4,2025-01-01 12:00:04\n",
        ]
    )
    loaded = conn.copy_into("readings", columns=columns, producer=lambda: next(lines, None), format="csv")
    print(f"  Callback records loaded: {loaded}")


def example_introspection(conn):
    """Example 2: Describe the table."""
    print("\n" + "=" * 60)
    print("Example 2: Introspection")
    print("=" * 60)

    for name, column in conn.describe_table("readings"):
        flags = " PK" if column.primary_key else ""
        print(f"  {name}: {column.db_type} -> {column.normalized_type.value}{flags}")


def example_queries(conn):
    """Example 3: TIMESERIES, ILIKE and EXPLAIN."""
    print("\n" + "=" * 60)
    print("Example 3: Queries")
    print("=" * 60)

    sliced = QuerySpec(
        select=["slice_time", "device", func("TS_FIRST_VALUE", ident("reading"))],
        from_=["readings"],
    ).with_timeseries(
        alias="slice_time",
        time_unit="1 second",
        over={"partition": "device", "order": "taken_at"},
    )
    print(f"  SQL: {conn.render_select(sliced)}")
    for row in conn.execute_query(conn.render_select(sliced)):
        print(f"    {row}")

    acme = (
        QuerySpec(select=[func("COUNT", lit("*"))], from_=["readings"])
        .filter(ilike("device", "%acme%"))
    )
    print(f"  Acme readings: {conn.execute_query(conn.render_select(acme))}")

    latest = QuerySpec(from_=["readings"]).ordered_by(desc("taken_at")).limited(1)
    print("  Plan:")
    for line in conn.explain(latest).splitlines():
        print(f"    {line}")


def main():
    """Run all examples."""
    configure_logging()
    print("=" * 60)
    print("vertica_adapter End-to-End Examples")
    print("=" * 60)

    try:
        with create_connector(connection_config()) as conn:
            setup_table(conn)
            example_bulk_load(conn)
            example_introspection(conn)
            example_queries(conn)
            conn.drop_table("readings", if_exists=True)

        print("\n" + "=" * 60)
        print("✅ All examples completed successfully!")
        print("=" * 60)

    except Exception as e:
        print(f"\n❌ Error: {e}")
        import traceback

        traceback.print_exc()


if __name__ == "__main__":
    main()
