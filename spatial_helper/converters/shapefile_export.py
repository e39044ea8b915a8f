# =============================================================================
# Shapefile Export - Shapefile to DataTable
# =============================================================================
# Copies a shapefile's attribute table and appends one spatial column holding
# each feature's geometry as a geometry or geography value.
# =============================================================================

import logging
from enum import Enum
from pathlib import Path
from typing import Optional, Union

import shapefile

from ..geometry_service import GeometryService, get_geometry_service
from ..models import ConversionResult, DataTable, SpatialValue, ValueType
from ..models.spatial import SpatialKind
from ..spatial_utils.shapefile_io import dbf_columns, open_shapefile, srid_from_prj

__all__ = ["RingOrientation", "shapefile_to_table"]

logger = logging.getLogger(__name__)


class RingOrientation(str, Enum):
    """When to reverse ring winding of geography values."""
    NEVER = "never"
    ALWAYS = "always"
    AUTO = "auto"  # only polygons with a clockwise (shapefile-native) exterior

    @classmethod
    def coerce(cls, value: Union[bool, str, "RingOrientation"]) -> "RingOrientation":
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return cls.ALWAYS if value else cls.NEVER
        return cls(str(value).lower())


def _has_clockwise_exterior(value: SpatialValue) -> bool:
    geometry = value.geometry
    if geometry.geom_type == "Polygon":
        polygons = [geometry]
    elif geometry.geom_type == "MultiPolygon":
        polygons = list(geometry.geoms)
    else:
        return False
    return any(not polygon.exterior.is_ccw for polygon in polygons if not polygon.is_empty)


def _convert_shape(
    shape,
    service: GeometryService,
    srid: int,
    kind: SpatialKind,
    orientation: RingOrientation,
) -> Optional[SpatialValue]:
    """Serialise one pyshp shape to WKT and reparse it as the target kind."""
    if shape.shapeType == shapefile.NULL:
        return None

    value = service.from_shape(shape.__geo_interface__, srid, kind)

    if kind is SpatialKind.GEOGRAPHY:
        if orientation is RingOrientation.ALWAYS:
            value = value.reorient()
        elif orientation is RingOrientation.AUTO and _has_clockwise_exterior(value):
            value = value.reorient()
    return value


def shapefile_to_table(
    shapefile_path: Union[str, Path],
    srid: Optional[int],
    spatial_column_name: str,
    reorient_ring: Union[bool, str, RingOrientation] = False,
) -> ConversionResult:
    """
    Convert a shapefile to a DataTable with an appended spatial column.

    The attribute columns and rows are copied from the .dbf verbatim. The
    spatial column is GEOGRAPHY when ``srid`` is positive and GEOMETRY
    otherwise; each feature geometry is written to WKT and reparsed tagged
    with ``srid``. Row order follows shapefile record order.

    Never raises: any failure aborts the conversion and is returned in the
    result alongside the partially built table.

    Args:
        shapefile_path: Path to the .shp file
        srid: Target SRID; None reads it from the .prj companion file
        spatial_column_name: Name of the appended spatial column
        reorient_ring: Geography ring reorientation: False/"never",
            True/"always", or "auto" (clockwise exteriors only)

    Returns:
        ConversionResult whose value is the DataTable

    Example:
        >>> result = shapefile_to_table("suburbs.shp", 4283, "geog", reorient_ring=True)
        >>> if result.success:
        ...     table = result.value
    """
    table = DataTable()

    try:
        service = get_geometry_service()
        orientation = RingOrientation.coerce(reorient_ring)

        if srid is None:
            srid = srid_from_prj(shapefile_path)

        with open_shapefile(shapefile_path) as reader:
            for column in dbf_columns(reader):
                table.add_column(column.name, column.value_type)
            for record in reader.iterRecords():
                table.add_row(list(record))

            if srid > 0:
                kind = SpatialKind.GEOGRAPHY
                table.add_column(spatial_column_name, ValueType.GEOGRAPHY, srid=srid)
            else:
                kind = SpatialKind.GEOMETRY
                srid = 0
                table.add_column(spatial_column_name, ValueType.GEOMETRY, srid=srid)

            column_index = table.column_index(spatial_column_name)
            for i, shape in enumerate(reader.iterShapes()):
                table.rows[i][column_index] = _convert_shape(
                    shape, service, srid, kind, orientation
                )

        logger.info(
            f"Converted shapefile {shapefile_path}: {len(table)} rows, "
            f"{kind.value} column '{spatial_column_name}' (SRID {srid})"
        )
    except Exception as e:
        logger.warning(f"Shapefile conversion failed for {shapefile_path}: {e}")
        return ConversionResult(value=table, error=e)

    return ConversionResult(value=table)
