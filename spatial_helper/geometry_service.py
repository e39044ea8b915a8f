# =============================================================================
# Geometry Service
# =============================================================================
# Process-wide geometry implementation backing SpatialValue construction.
# The host application initialises it once, before any spatial operation.
# =============================================================================

"""
Process-wide geometry service with an init-only lifecycle.

Usage:
    >>> from spatial_helper import initialize_geometry_service
    >>> initialize_geometry_service()          # once, at startup
    >>> service = get_geometry_service()
    >>> value = service.from_wkt("POINT (115.86 -31.95)", 4326, SpatialKind.GEOGRAPHY)
"""

import logging
import threading
from typing import Any, Mapping, Optional, Union

import shapely
from shapely import wkb, wkt
from shapely.geometry import shape
from shapely.geometry.base import BaseGeometry

from .models.config import GeometryServiceSettings
from .models.spatial import SpatialKind, SpatialValue

__all__ = [
    "GeometryService",
    "GeometryServiceError",
    "initialize_geometry_service",
    "get_geometry_service",
    "reset_geometry_service",
]

logger = logging.getLogger(__name__)


class GeometryServiceError(RuntimeError):
    """Raised when the geometry service is used before or re-initialised after setup."""


class GeometryService:
    """
    Builds SpatialValues from text, binary and GeoJSON-like inputs.

    Geography values are validated against lon/lat ranges unless disabled
    in the settings, and must carry a positive SRID.
    """

    def __init__(self, settings: GeometryServiceSettings):
        self.settings = settings

    def to_wkt(self, geometry: BaseGeometry) -> str:
        """Serialise a geometry to WKT using the configured precision."""
        if self.settings.wkt_precision is None:
            return shapely.to_wkt(geometry, rounding_precision=-1, trim=True)
        return shapely.to_wkt(
            geometry, rounding_precision=self.settings.wkt_precision, trim=True
        )

    def to_ewkt(self, value: SpatialValue) -> str:
        """EWKT (``SRID=<srid>;<wkt>``) of a value, at the configured precision."""
        return f"SRID={value.srid};{self.to_wkt(value.geometry)}"

    def from_geometry(
        self, geometry: BaseGeometry, srid: int, kind: SpatialKind
    ) -> SpatialValue:
        """Tag a shapely geometry with ``srid`` and ``kind``."""
        if kind is SpatialKind.GEOGRAPHY:
            self._check_geography(geometry, srid)
        return SpatialValue(geometry=geometry, srid=int(srid), kind=kind)

    def from_wkt(self, text: str, srid: int, kind: SpatialKind) -> SpatialValue:
        """
        Parse well-known text into a SpatialValue.

        Raises:
            shapely.errors.GEOSException: If the text is not valid WKT
            ValueError: If a geography value is out of range
        """
        return self.from_geometry(wkt.loads(text), srid, kind)

    def from_ewkb(
        self, value: Union[str, bytes, bytearray, memoryview], kind: SpatialKind
    ) -> SpatialValue:
        """
        Decode (E)WKB as returned by psycopg2 for geometry/geography columns.

        Hex strings and raw bytes are both accepted. The SRID embedded in
        EWKB is preserved (0 when absent).
        """
        if isinstance(value, str):
            geometry = wkb.loads(value, hex=True)
        else:
            geometry = wkb.loads(bytes(value))
        srid = shapely.get_srid(geometry)
        return self.from_geometry(geometry, srid, kind)

    def from_shape(
        self, geo_interface: Mapping[str, Any], srid: int, kind: SpatialKind
    ) -> SpatialValue:
        """
        Build a SpatialValue from a ``__geo_interface__`` mapping.

        The geometry is round-tripped through WKT so that the value is
        exactly what a text exchange would produce.
        """
        text = self.to_wkt(shape(geo_interface))
        return self.from_wkt(text, srid, kind)

    def _check_geography(self, geometry: BaseGeometry, srid: int) -> None:
        if srid is None or srid <= 0:
            raise ValueError(f"Geography values require a positive SRID, got {srid}")
        if not self.settings.validate_geography or geometry.is_empty:
            return
        minx, miny, maxx, maxy = geometry.bounds
        if minx < -180 or maxx > 180 or miny < -90 or maxy > 90:
            raise ValueError(
                f"Geography coordinates out of range: bounds "
                f"({minx}, {miny}, {maxx}, {maxy}) exceed lon [-180, 180], lat [-90, 90]"
            )


# =============================================================================
# Process-wide registration
# =============================================================================

_service: Optional[GeometryService] = None
_lock = threading.Lock()


def initialize_geometry_service(
    settings: Optional[GeometryServiceSettings] = None,
) -> GeometryService:
    """
    Register the process-wide geometry service.

    Calling again with equal settings returns the registered service.
    Without ``settings`` the field defaults are used and the environment is
    not read; pass ``GeometryServiceSettings()`` to opt in to ``SPATIAL_*``
    variables.

    Raises:
        GeometryServiceError: If already initialised with different settings
    """
    global _service
    settings = settings or GeometryServiceSettings.defaults()

    with _lock:
        if _service is not None:
            if _service.settings != settings:
                raise GeometryServiceError(
                    "Geometry service already initialised with different settings"
                )
            return _service

        _service = GeometryService(settings)
        logger.info(
            f"Initialised geometry service (shapely {shapely.__version__}, "
            f"GEOS {shapely.geos_version_string})"
        )
        return _service


def get_geometry_service() -> GeometryService:
    """
    Return the registered geometry service.

    Raises:
        GeometryServiceError: If initialize_geometry_service() was not called
    """
    if _service is None:
        raise GeometryServiceError(
            "Geometry service not initialised; call initialize_geometry_service() at startup"
        )
    return _service


def reset_geometry_service() -> None:
    """Clear the registration. Intended for test hosts."""
    global _service
    with _lock:
        _service = None
