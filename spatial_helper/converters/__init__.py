# =============================================================================
# Converters
# =============================================================================
# One-shot conversions between PostGIS, shapefiles, feature collections and
# tables. Each call is independent and holds no state between calls.
# =============================================================================

"""
Converters.

Catch-and-return (return ConversionResult, never raise):
- shapefile_to_table
- table_to_database

Propagate (raise on failure):
- query_to_feature_collection
- feature_collection_to_table
- get_shapefile_header_info
"""

from .flatten import feature_collection_to_table
from .query_import import query_to_feature_collection
from .shapefile_export import RingOrientation, shapefile_to_table
from .shapefile_header import ShapefileHeader, get_shapefile_header_info
from .table_writer import SchemaMismatchError, table_to_database

__all__ = [
    "feature_collection_to_table",
    "query_to_feature_collection",
    "RingOrientation",
    "shapefile_to_table",
    "ShapefileHeader",
    "get_shapefile_header_info",
    "SchemaMismatchError",
    "table_to_database",
]
