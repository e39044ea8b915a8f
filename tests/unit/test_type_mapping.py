"""
Unit tests for the closed type mappings.
"""

import pytest
from geoalchemy2 import Geography, Geometry
from sqlalchemy import DateTime, Float, Integer, Numeric, String

from spatial_helper.models import DataColumn, ValueType
from spatial_helper.spatial_utils import (
    ColumnType,
    UnmappedColumnTypeError,
    column_type_for,
    sqlalchemy_type_for,
    value_type_for_dbf_field,
    value_type_for_pg_type,
)


# =============================================================================
# Test: ValueType -> ColumnType
# =============================================================================

@pytest.mark.parametrize(
    "value_type,column_type",
    [
        (ValueType.FLOAT, ColumnType.FLOAT),
        (ValueType.DECIMAL, ColumnType.DECIMAL),
        (ValueType.TEXT, ColumnType.VARCHAR),
        (ValueType.TIMESTAMP, ColumnType.DATETIME),
        (ValueType.INT32, ColumnType.INT),
        (ValueType.GEOGRAPHY, ColumnType.GEOGRAPHY),
        (ValueType.GEOMETRY, ColumnType.GEOMETRY),
    ],
)
def test_mapped_value_types(value_type, column_type):
    assert column_type_for(value_type) is column_type


@pytest.mark.parametrize(
    "value_type",
    [ValueType.INT64, ValueType.BOOLEAN, ValueType.BINARY, ValueType.OBJECT],
)
def test_unmapped_value_types_rejected(value_type):
    with pytest.raises(UnmappedColumnTypeError, match=value_type.value):
        column_type_for(value_type)


# =============================================================================
# Test: SQLAlchemy types
# =============================================================================

def test_scalar_sqlalchemy_types():
    assert isinstance(sqlalchemy_type_for(DataColumn("f", ValueType.FLOAT)), Float)
    assert isinstance(sqlalchemy_type_for(DataColumn("t", ValueType.TIMESTAMP)), DateTime)
    assert isinstance(sqlalchemy_type_for(DataColumn("i", ValueType.INT32)), Integer)


def test_decimal_is_numeric_18_2():
    sa_type = sqlalchemy_type_for(DataColumn("d", ValueType.DECIMAL))
    assert isinstance(sa_type, Numeric)
    assert (sa_type.precision, sa_type.scale) == (18, 2)


def test_text_is_varchar_50():
    sa_type = sqlalchemy_type_for(DataColumn("s", ValueType.TEXT))
    assert isinstance(sa_type, String)
    assert sa_type.length == 50


def test_geography_uses_column_srid():
    sa_type = sqlalchemy_type_for(DataColumn("g", ValueType.GEOGRAPHY, srid=4283))
    assert isinstance(sa_type, Geography)
    assert sa_type.srid == 4283


def test_geometry_without_srid():
    sa_type = sqlalchemy_type_for(DataColumn("g", ValueType.GEOMETRY))
    assert isinstance(sa_type, Geometry)
    assert sa_type.srid == -1


def test_sqlalchemy_type_rejects_unmapped():
    with pytest.raises(UnmappedColumnTypeError):
        sqlalchemy_type_for(DataColumn("flag", ValueType.BOOLEAN))


# =============================================================================
# Test: Source type lookups
# =============================================================================

@pytest.mark.parametrize(
    "type_name,value_type",
    [
        ("float8", ValueType.FLOAT),
        ("numeric", ValueType.DECIMAL),
        ("varchar", ValueType.TEXT),
        ("timestamptz", ValueType.TIMESTAMP),
        ("int4", ValueType.INT32),
        ("int8", ValueType.INT64),
        ("geometry", ValueType.GEOMETRY),
        ("GEOGRAPHY", ValueType.GEOGRAPHY),
        ("tsvector", ValueType.OBJECT),
    ],
)
def test_pg_type_lookup(type_name, value_type):
    assert value_type_for_pg_type(type_name) is value_type


@pytest.mark.parametrize(
    "field,value_type",
    [
        (("C", 50, 0), ValueType.TEXT),
        (("N", 9, 0), ValueType.INT32),
        (("N", 18, 0), ValueType.DECIMAL),
        (("N", 12, 3), ValueType.DECIMAL),
        (("F", 19, 11), ValueType.FLOAT),
        (("D", 8, 0), ValueType.TIMESTAMP),
        (("L", 1, 0), ValueType.BOOLEAN),
    ],
)
def test_dbf_field_lookup(field, value_type):
    assert value_type_for_dbf_field(*field) is value_type
