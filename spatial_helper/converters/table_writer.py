# =============================================================================
# Table Writer - DataTable to PostGIS Table
# =============================================================================
# Ensures a destination table with the DataTable's column schema exists,
# then appends all rows in one bulk insert.
#
# Destination table transitions:
#   exists,  is_new_table  -> drop, create
#   missing, is_new_table  -> create
#   missing, !is_new_table -> create (fallback)
#   exists,  !is_new_table -> reuse (column names must match)
# =============================================================================

import logging
from typing import Any, Dict, List, Optional

from geoalchemy2 import WKTElement
from sqlalchemy import Column, MetaData, Table

from ..geometry_service import GeometryService, get_geometry_service
from ..models import ConversionResult, DataTable, SpatialValue
from ..resources import PostGISResource
from ..spatial_utils.identifiers import validate_identifier
from ..spatial_utils.type_mapping import sqlalchemy_type_for

__all__ = ["SchemaMismatchError", "table_to_database"]

logger = logging.getLogger(__name__)


class SchemaMismatchError(ValueError):
    """Raised when a reused destination table's columns differ from the source."""


def _build_table(
    source: DataTable, table_name: str, schema: Optional[str]
) -> Table:
    """
    Build the SQLAlchemy definition of the destination table.

    Raises:
        UnmappedColumnTypeError: If a column's value type has no column type
    """
    columns = [
        Column(column.name, sqlalchemy_type_for(column))
        for column in source.columns
    ]
    return Table(table_name, MetaData(), *columns, schema=schema)


def _to_records(
    source: DataTable, service: Optional[GeometryService] = None
) -> List[Dict[str, Any]]:
    """
    Rows as insert parameters; spatial values are bound as EWKT.

    ``service`` supplies the configured WKT precision and is required when
    the table holds spatial values.
    """
    records = []
    for row in source.rows:
        record = {}
        for column, value in zip(source.columns, row):
            if isinstance(value, SpatialValue):
                value = WKTElement(service.to_ewkt(value), extended=True)
            record[column.name] = value
        records.append(record)
    return records


def _check_existing_schema(existing: List[str], source: DataTable) -> None:
    """
    Raises:
        SchemaMismatchError: If column names differ (order-insensitive)
    """
    missing = [name for name in source.column_names if name not in existing]
    extra = [name for name in existing if name not in source.column_names]
    if missing or extra:
        raise SchemaMismatchError(
            f"Existing table columns do not match source: "
            f"missing in table {missing}, not in source {extra}"
        )


def table_to_database(
    table: DataTable,
    connection_string: str,
    database_name: str,
    table_name: str,
    is_new_table: bool,
    schema: Optional[str] = None,
) -> ConversionResult:
    """
    Write a DataTable to a PostGIS table, creating the table if needed.

    Column types follow the closed mapping in
    ``spatial_helper.spatial_utils.type_mapping``. With ``is_new_table`` an
    existing table is dropped and recreated; without it an existing table is
    reused after checking its column names, and a missing one is created.

    Never raises: failures (unmapped types, drop/create/insert errors) are
    returned in the result. The engine is disposed on every path.

    Args:
        table: Source table
        connection_string: SQLAlchemy URL of the PostGIS server
        database_name: Target database (replaces the URL's database)
        table_name: Destination table name
        is_new_table: Drop and recreate the table if it exists
        schema: Destination schema (default: search path)

    Returns:
        ConversionResult whose value is the number of rows written

    Example:
        >>> result = table_to_database(table, url, "gis", "suburbs", is_new_table=True)
        >>> result.success, result.value
        (True, 342)
    """
    rows_written = 0

    try:
        validate_identifier(table_name, "table_name")
        if schema is not None:
            validate_identifier(schema, "schema")

        destination = _build_table(table, table_name, schema)
        service = None
        if any(column.value_type.is_spatial for column in table.columns):
            service = get_geometry_service()

        with PostGISResource(connection_string=connection_string, database=database_name) as db:
            exists = db.table_exists(table_name, schema=schema)

            if exists and is_new_table:
                db.drop_table(table_name, schema=schema)
                db.create_table(destination)
            elif not exists:
                if not is_new_table:
                    logger.info(f"Table {table_name} does not exist; creating it")
                db.create_table(destination)
            else:
                _check_existing_schema(db.get_column_names(table_name, schema=schema), table)
                logger.info(f"Appending to existing table {table_name}")

            rows_written = db.bulk_insert(destination, _to_records(table, service))

    except Exception as e:
        logger.warning(f"Writing table {table_name} to database {database_name} failed: {e}")
        return ConversionResult(value=rows_written, error=e)

    return ConversionResult(value=rows_written)
