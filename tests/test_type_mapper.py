"""Tests for Vertica type mapping."""

from datetime import date
from decimal import Decimal

import pytest

from vertica_adapter.exceptions import TypeMappingError
from vertica_adapter.models import NormalizedType
from vertica_adapter.operators.vertica import VerticaTypeMapper


@pytest.fixture
def mapper():
    return VerticaTypeMapper()


class TestFromSource:
    """Test raw catalog type normalization."""

    @pytest.mark.parametrize(
        "source_type,expected",
        [
            ("int", NormalizedType.INTEGER),
            ("INTEGER", NormalizedType.INTEGER),
            ("varchar(20)", NormalizedType.STRING),
            ("long varchar(65000)", NormalizedType.STRING),
            ("varbinary(80)", NormalizedType.BLOB),
            ("timestamp", NormalizedType.DATETIME),
            ("timestamptz", NormalizedType.DATETIME),
            ("date", NormalizedType.DATE),
            ("time", NormalizedType.TIME),
            ("float", NormalizedType.FLOAT),
            ("numeric(10,2)", NormalizedType.DECIMAL),
            ("numeric(18,0)", NormalizedType.INTEGER),
            ("boolean", NormalizedType.BOOLEAN),
            ("interval day to second", NormalizedType.INTERVAL),
            ("uuid", NormalizedType.UUID),
            ("geometry(1024)", NormalizedType.UNKNOWN),
        ],
    )
    def test_from_source(self, mapper, source_type, expected):
        assert mapper.from_source(source_type) == expected

    def test_max_length(self, mapper):
        assert mapper.max_length("varchar(20)") == 20
        assert mapper.max_length("varbinary(80)") == 80
        assert mapper.max_length("int") is None
        assert mapper.max_length("numeric(10,2)") is None


class TestDefaults:
    """Test catalog default parsing."""

    def test_parse_literals(self, mapper):
        assert mapper.parse_default("'000'", NormalizedType.STRING) == "000"
        assert mapper.parse_default("42", NormalizedType.INTEGER) == 42
        assert mapper.parse_default("1.50", NormalizedType.DECIMAL) == Decimal("1.50")
        assert mapper.parse_default("true", NormalizedType.BOOLEAN) is True
        assert mapper.parse_default("'2024-01-01'::date", NormalizedType.DATE) == date(2024, 1, 1)

    def test_expressions_are_not_parsed(self, mapper):
        assert mapper.parse_default("now()", NormalizedType.DATETIME) is None
        assert mapper.parse_default("NULL", NormalizedType.INTEGER) is None
        assert mapper.parse_default(None, NormalizedType.STRING) is None


class TestToTarget:
    """Test normalized type to DDL type mapping."""

    def test_ddl_types(self, mapper):
        assert mapper.get_ddl_type(NormalizedType.STRING, size=20) == "VARCHAR(20)"
        assert mapper.get_ddl_type(NormalizedType.DECIMAL, precision=10, scale=2) == "NUMERIC(10,2)"
        assert mapper.get_ddl_type(NormalizedType.INTEGER) == "INTEGER"
        assert mapper.to_target(NormalizedType.STRING, target_hint="LONG VARCHAR") == "LONG VARCHAR"

    def test_unknown_has_no_ddl_type(self, mapper):
        with pytest.raises(TypeMappingError):
            mapper.to_target(NormalizedType.UNKNOWN)
