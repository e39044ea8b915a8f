# =============================================================================
# Query Import - PostGIS Query to FeatureCollection
# =============================================================================
# Executes a query and builds an in-memory feature collection from its rows.
# The first geometry/geography column is the feature geometry; every other
# column becomes an attribute column.
# =============================================================================

import logging
import re
from itertools import chain
from typing import Any, Iterable, Optional, Sequence

from sqlalchemy import TextClause, text

from ..geometry_service import GeometryService, get_geometry_service
from ..models import FeatureCollection, FeatureType
from ..models.spatial import SpatialKind
from ..resources import PostGISResource
from ..spatial_utils.column_mapper import (
    ColumnDescriptor,
    classify_columns,
    describe_columns,
)

__all__ = ["query_to_feature_collection"]

logger = logging.getLogger(__name__)


_UNESCAPED_COLON = re.compile(r"(?<!\\):")


def _as_literal_text(sql: str) -> TextClause:
    """
    Wrap caller SQL so that no ``:name`` is parsed as a bind parameter.

    Every colon is escaped, so literals like ``'zone :a'`` and casts like
    ``::geometry`` reach the server unchanged.
    """
    return text(_UNESCAPED_COLON.sub(r"\\:", sql))


def _decode(service: GeometryService, value: Any, kind: SpatialKind):
    if value is None:
        return None
    return service.from_ewkb(value, kind)


def _build_feature_collection(
    descriptors: Sequence[ColumnDescriptor],
    rows: Iterable[Sequence[Any]],
    service: GeometryService,
) -> Optional[FeatureCollection]:
    """
    Build a feature collection from described result rows.

    Args:
        descriptors: Column descriptors in reader order
        rows: Result rows in query order
        service: Geometry service decoding spatial values

    Returns:
        FeatureCollection, or None if there are no rows
    """
    rows = iter(rows)
    first = next(rows, None)
    if first is None:
        return None

    layout = classify_columns(descriptors)

    feature_type = FeatureType.UNSPECIFIED
    if layout.has_spatial_column:
        first_value = _decode(service, first[layout.spatial_index], layout.spatial_kind)
        if first_value is not None:
            feature_type = first_value.feature_type

    collection = FeatureCollection(feature_type=feature_type, table=layout.table)

    for row in chain([first], rows):
        values = list(row)

        geometry = None
        if layout.has_spatial_column:
            geometry = _decode(service, values[layout.spatial_index], layout.spatial_kind)

        for index, kind in layout.extra_spatial.items():
            values[index] = _decode(service, values[index], kind)

        collection.add_feature(geometry, layout.mapper.map(values))

    logger.info(
        f"Imported {len(collection)} features "
        f"({feature_type.value}, {len(layout.table.columns)} attribute columns)"
    )
    return collection


def query_to_feature_collection(
    connection_string: str, sql: str
) -> Optional[FeatureCollection]:
    """
    Execute a query and return its rows as a feature collection.

    Column types are introspected from the cursor description and resolved
    through ``pg_type``. The first geometry/geography column supplies the
    feature geometry and the collection's feature type (taken from the first
    row). A result without a spatial column yields UNSPECIFIED features with
    no geometry.

    Failures propagate to the caller; there is no retry.

    Args:
        connection_string: SQLAlchemy URL of the PostGIS database
        sql: Query to execute

    Returns:
        FeatureCollection, or None when the query returned no rows

    Raises:
        GeometryServiceError: If the geometry service was not initialised
        ValueError: If a column's type cannot be introspected
        sqlalchemy.exc.SQLAlchemyError: On connectivity or query failure

    Example:
        >>> collection = query_to_feature_collection(
        ...     settings.connection_string,
        ...     "SELECT name, geom FROM parcels WHERE zone = 'R1'",
        ... )
        >>> collection.feature_type
        <FeatureType.POLYGON: 'polygon'>
    """
    service = get_geometry_service()

    with PostGISResource(connection_string=connection_string) as db:
        with db.get_engine().connect() as conn:
            result = conn.execute(_as_literal_text(sql))
            try:
                if not result.returns_rows:
                    return None

                description = result.cursor.description
                first = result.fetchone()
                if first is None:
                    logger.info("Query returned no rows")
                    return None

                type_names = db.resolve_type_names(conn, [entry[1] for entry in description])
                descriptors = describe_columns(description, type_names)

                return _build_feature_collection(
                    descriptors, chain([first], result), service
                )
            finally:
                result.close()
