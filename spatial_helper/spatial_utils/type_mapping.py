# =============================================================================
# Type Mapping
# =============================================================================
# Closed mappings between database types and host value types:
# - PostgreSQL type name -> ValueType (reading query results)
# - dBase field type -> ValueType (reading shapefile attributes)
# - ValueType -> ColumnType -> SQLAlchemy type (creating tables)
# =============================================================================

from enum import Enum

from geoalchemy2 import Geography, Geometry
from sqlalchemy import DateTime, Float, Integer, Numeric, String
from sqlalchemy.types import TypeEngine

from ..models.table import DataColumn, ValueType

__all__ = [
    "ColumnType",
    "UnmappedColumnTypeError",
    "COLUMN_TYPES",
    "column_type_for",
    "sqlalchemy_type_for",
    "value_type_for_pg_type",
    "value_type_for_dbf_field",
]


class UnmappedColumnTypeError(ValueError):
    """Raised when a value type has no destination column type."""


class ColumnType(str, Enum):
    """Destination column types understood by the table writer."""
    FLOAT = "float"
    DECIMAL = "decimal(18,2)"
    VARCHAR = "varchar(50)"
    DATETIME = "datetime"
    INT = "int"
    GEOGRAPHY = "geography"
    GEOMETRY = "geometry"


# Closed set: any ValueType not listed here cannot be written
COLUMN_TYPES = {
    ValueType.FLOAT: ColumnType.FLOAT,
    ValueType.DECIMAL: ColumnType.DECIMAL,
    ValueType.TEXT: ColumnType.VARCHAR,
    ValueType.TIMESTAMP: ColumnType.DATETIME,
    ValueType.INT32: ColumnType.INT,
    ValueType.GEOGRAPHY: ColumnType.GEOGRAPHY,
    ValueType.GEOMETRY: ColumnType.GEOMETRY,
}

DECIMAL_PRECISION = 18
DECIMAL_SCALE = 2
VARCHAR_LENGTH = 50


def column_type_for(value_type: ValueType) -> ColumnType:
    """
    Look up the destination column type for a host value type.

    Raises:
        UnmappedColumnTypeError: If the value type is outside the closed set
    """
    try:
        return COLUMN_TYPES[value_type]
    except KeyError:
        raise UnmappedColumnTypeError(
            f"No destination column type for value type '{value_type.value}'. "
            f"Supported: {', '.join(v.value for v in COLUMN_TYPES)}"
        ) from None


def sqlalchemy_type_for(column: DataColumn) -> TypeEngine:
    """
    Build the SQLAlchemy column type for a DataColumn.

    Spatial columns use GeoAlchemy2 types with the column's SRID (or -1 when
    unset for geometry, 4326 for geography) and no spatial index.

    Raises:
        UnmappedColumnTypeError: If the column's value type is unmapped
    """
    column_type = column_type_for(column.value_type)

    if column_type is ColumnType.FLOAT:
        return Float()
    if column_type is ColumnType.DECIMAL:
        return Numeric(precision=DECIMAL_PRECISION, scale=DECIMAL_SCALE)
    if column_type is ColumnType.VARCHAR:
        return String(VARCHAR_LENGTH)
    if column_type is ColumnType.DATETIME:
        return DateTime()
    if column_type is ColumnType.INT:
        return Integer()
    if column_type is ColumnType.GEOGRAPHY:
        srid = column.srid if column.srid and column.srid > 0 else 4326
        return Geography(geometry_type="GEOMETRY", srid=srid, spatial_index=False)
    srid = column.srid if column.srid else -1
    return Geometry(geometry_type="GEOMETRY", srid=srid, spatial_index=False)


# =============================================================================
# Source type lookups
# =============================================================================

_PG_TYPES = {
    "float4": ValueType.FLOAT,
    "float8": ValueType.FLOAT,
    "numeric": ValueType.DECIMAL,
    "money": ValueType.DECIMAL,
    "text": ValueType.TEXT,
    "varchar": ValueType.TEXT,
    "bpchar": ValueType.TEXT,
    "name": ValueType.TEXT,
    "uuid": ValueType.TEXT,
    "timestamp": ValueType.TIMESTAMP,
    "timestamptz": ValueType.TIMESTAMP,
    "date": ValueType.TIMESTAMP,
    "int2": ValueType.INT32,
    "int4": ValueType.INT32,
    "int8": ValueType.INT64,
    "bool": ValueType.BOOLEAN,
    "bytea": ValueType.BINARY,
    "geometry": ValueType.GEOMETRY,
    "geography": ValueType.GEOGRAPHY,
}


def value_type_for_pg_type(type_name: str) -> ValueType:
    """Map a ``pg_type.typname`` to a ValueType (OBJECT when unrecognised)."""
    return _PG_TYPES.get(type_name.lower(), ValueType.OBJECT)


def value_type_for_dbf_field(field_type: str, size: int, decimal: int) -> ValueType:
    """
    Map a dBase field descriptor to a ValueType.

    N fields with no decimals that fit in nine digits are INT32; wider or
    fractional N fields are DECIMAL.
    """
    field_type = field_type.upper()
    if field_type == "N":
        if decimal == 0 and size <= 9:
            return ValueType.INT32
        return ValueType.DECIMAL
    if field_type == "F":
        return ValueType.FLOAT
    if field_type == "D":
        return ValueType.TIMESTAMP
    if field_type == "L":
        return ValueType.BOOLEAN
    if field_type in ("C", "M"):
        return ValueType.TEXT
    return ValueType.OBJECT
