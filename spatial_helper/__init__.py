# =============================================================================
# spatial_helper
# =============================================================================
# Moves spatial and tabular data between PostGIS, shapefiles and in-memory
# feature collections.
# =============================================================================

"""
Spatial data conversion helpers.

Call ``initialize_geometry_service()`` once at startup, then:
- query_to_feature_collection: PostGIS query -> FeatureCollection
- shapefile_to_table: Shapefile -> DataTable (+ spatial column)
- feature_collection_to_table: FeatureCollection -> DataTable
- table_to_database: DataTable -> PostGIS table
- get_shapefile_header_info: Shapefile header metadata

Sub-packages:
- models: Data types and configuration models
- spatial_utils: Column mapping, type mapping and shapefile helpers
- resources: Database access
- converters: The conversion operations
"""

from .converters import (
    RingOrientation,
    SchemaMismatchError,
    ShapefileHeader,
    feature_collection_to_table,
    get_shapefile_header_info,
    query_to_feature_collection,
    shapefile_to_table,
    table_to_database,
)
from .geometry_service import (
    GeometryService,
    GeometryServiceError,
    get_geometry_service,
    initialize_geometry_service,
    reset_geometry_service,
)

__version__ = "0.1.0"

__all__ = [
    "RingOrientation",
    "SchemaMismatchError",
    "ShapefileHeader",
    "feature_collection_to_table",
    "get_shapefile_header_info",
    "query_to_feature_collection",
    "shapefile_to_table",
    "table_to_database",
    "GeometryService",
    "GeometryServiceError",
    "get_geometry_service",
    "initialize_geometry_service",
    "reset_geometry_service",
]
