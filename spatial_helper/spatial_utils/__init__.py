# =============================================================================
# Spatial Utils Library
# =============================================================================
# Column classification, type mapping and shapefile helpers.
# =============================================================================

"""
Spatial utilities for the converters.

This library provides:
- ColumnMapper / classify_columns: Query result column classification
- Type mapping: PostgreSQL / dBase types -> ValueType -> destination column
- validate_identifier: SQL identifier allowlist
- Shapefile helpers: companion files, header fields, .prj SRID detection
"""

from .column_mapper import (
    ColumnDescriptor,
    ColumnLayout,
    ColumnMapper,
    classify_columns,
    describe_columns,
)
from .identifiers import quote_identifier, validate_identifier
from .type_mapping import (
    COLUMN_TYPES,
    ColumnType,
    UnmappedColumnTypeError,
    column_type_for,
    sqlalchemy_type_for,
    value_type_for_dbf_field,
    value_type_for_pg_type,
)
from .shapefile_io import (
    companion_path,
    dbf_columns,
    open_shapefile,
    read_dbf_last_update,
    read_shp_file_length,
    srid_from_prj,
)

__all__ = [
    "ColumnDescriptor",
    "ColumnLayout",
    "ColumnMapper",
    "classify_columns",
    "describe_columns",
    "quote_identifier",
    "validate_identifier",
    "COLUMN_TYPES",
    "ColumnType",
    "UnmappedColumnTypeError",
    "column_type_for",
    "sqlalchemy_type_for",
    "value_type_for_dbf_field",
    "value_type_for_pg_type",
    "companion_path",
    "dbf_columns",
    "open_shapefile",
    "read_dbf_last_update",
    "read_shp_file_length",
    "srid_from_prj",
]
