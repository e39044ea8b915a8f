# =============================================================================
# Spatial Types Module
# =============================================================================
# Provides reusable spatial data types:
# - FeatureType: Feature classification of a geometry (point, line, ...)
# - SpatialKind: Planar geometry or ellipsoidal geography
# - Bounds: Bounding box with validation
# - SpatialValue: A shapely geometry tagged with SRID and kind
# =============================================================================

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

import shapely
from pydantic import BaseModel, Field, model_validator
from shapely.geometry.base import BaseGeometry

__all__ = ["FeatureType", "SpatialKind", "Bounds", "SpatialValue", "feature_type_of"]


# =============================================================================
# Enums
# =============================================================================

class FeatureType(str, Enum):
    """Feature classification shared by every feature of a collection."""
    UNSPECIFIED = "unspecified"
    POINT = "point"
    LINE = "line"
    POLYGON = "polygon"
    MULTIPOINT = "multipoint"


class SpatialKind(str, Enum):
    """Spatial value family: planar geometry or ellipsoidal geography."""
    GEOMETRY = "geometry"
    GEOGRAPHY = "geography"


_FEATURE_TYPE_BY_GEOM_TYPE = {
    "Point": FeatureType.POINT,
    "MultiPoint": FeatureType.MULTIPOINT,
    "LineString": FeatureType.LINE,
    "LinearRing": FeatureType.LINE,
    "MultiLineString": FeatureType.LINE,
    "Polygon": FeatureType.POLYGON,
    "MultiPolygon": FeatureType.POLYGON,
}


def feature_type_of(geometry: Optional[BaseGeometry]) -> FeatureType:
    """
    Classify a shapely geometry.

    Geometry collections, empty geometries and ``None`` are UNSPECIFIED.
    """
    if geometry is None or geometry.is_empty:
        return FeatureType.UNSPECIFIED
    return _FEATURE_TYPE_BY_GEOM_TYPE.get(geometry.geom_type, FeatureType.UNSPECIFIED)


# =============================================================================
# Bounds (Bounding Box)
# =============================================================================

class Bounds(BaseModel):
    """
    Bounding box defining a rectangular area.

    Validates that minx <= maxx and miny <= maxy (allows point bounds).

    Attributes:
        minx: Minimum X coordinate (west)
        miny: Minimum Y coordinate (south)
        maxx: Maximum X coordinate (east)
        maxy: Maximum Y coordinate (north)
    """

    minx: float = Field(..., description="Minimum X coordinate (west)")
    miny: float = Field(..., description="Minimum Y coordinate (south)")
    maxx: float = Field(..., description="Maximum X coordinate (east)")
    maxy: float = Field(..., description="Maximum Y coordinate (north)")

    @model_validator(mode='after')
    def validate_bounds(self) -> 'Bounds':
        """
        Validate that minx <= maxx and miny <= maxy.

        Raises:
            ValueError: If bounds are invalid (min > max)
        """
        if self.minx > self.maxx:
            raise ValueError(
                f"Invalid bounds: minx ({self.minx}) must be less than or equal to maxx ({self.maxx})"
            )
        if self.miny > self.maxy:
            raise ValueError(
                f"Invalid bounds: miny ({self.miny}) must be less than or equal to maxy ({self.maxy})"
            )
        return self

    @classmethod
    def from_sequence(cls, values) -> 'Bounds':
        """Build bounds from an ``(minx, miny, maxx, maxy)`` sequence."""
        minx, miny, maxx, maxy = (float(v) for v in values)
        return cls(minx=minx, miny=miny, maxx=maxx, maxy=maxy)

    @property
    def width(self) -> float:
        """Calculate the width (east-west extent) of the bounding box."""
        return self.maxx - self.minx

    @property
    def height(self) -> float:
        """Calculate the height (north-south extent) of the bounding box."""
        return self.maxy - self.miny


# =============================================================================
# Spatial Value
# =============================================================================

@dataclass(frozen=True)
class SpatialValue:
    """
    Geometry or geography payload.

    Instances are produced by the geometry service
    (see ``spatial_helper.geometry_service``), which validates geography
    coordinates and applies the configured WKT precision.

    Attributes:
        geometry: Shapely geometry
        srid: Spatial reference identifier (0 when unknown)
        kind: GEOMETRY (planar) or GEOGRAPHY (ellipsoidal)
    """
    geometry: BaseGeometry
    srid: int = 0
    kind: SpatialKind = SpatialKind.GEOMETRY

    @property
    def feature_type(self) -> FeatureType:
        return feature_type_of(self.geometry)

    @property
    def is_geography(self) -> bool:
        return self.kind is SpatialKind.GEOGRAPHY

    @property
    def wkt(self) -> str:
        return self.geometry.wkt

    @property
    def ewkt(self) -> str:
        """
        WKT prefixed with ``SRID=<srid>;`` as accepted by PostGIS.

        Always full precision; ``GeometryService.to_ewkt`` applies the
        configured WKT precision.
        """
        return f"SRID={self.srid};{self.geometry.wkt}"

    @property
    def wkb(self) -> bytes:
        return shapely.to_wkb(self.geometry)

    def reorient(self) -> "SpatialValue":
        """
        Return a copy with ring and line winding order reversed.

        Equivalent of reorienting a geography whose rings were stored with
        the opposite (shapefile, clockwise exterior) convention.
        """
        return replace(self, geometry=shapely.reverse(self.geometry))

    def __str__(self) -> str:
        return self.wkt
