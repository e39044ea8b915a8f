# =============================================================================
# Data Models Library
# =============================================================================
# Data types shared by the converters.
# =============================================================================

"""
Data models for spatial_helper.

This library provides:
- Spatial types: FeatureType, SpatialKind, Bounds, SpatialValue
- Tabular types: ValueType, DataColumn, DataRow, DataTable
- Feature types: Feature, FeatureCollection
- ConversionResult: catch-and-return carrier
- Configuration models
"""

# Spatial types
from .spatial import (
    Bounds,
    FeatureType,
    SpatialKind,
    SpatialValue,
    feature_type_of,
)

# Tabular types
from .table import (
    DataColumn,
    DataRow,
    DataTable,
    ValueType,
)

# Feature types
from .features import (
    Feature,
    FeatureCollection,
)

from .results import ConversionResult

# Configuration models
from .config import (
    GeometryServiceSettings,
    PostGISSettings,
)

__all__ = [
    # Spatial types
    "Bounds",
    "FeatureType",
    "SpatialKind",
    "SpatialValue",
    "feature_type_of",
    # Tabular types
    "DataColumn",
    "DataRow",
    "DataTable",
    "ValueType",
    # Feature types
    "Feature",
    "FeatureCollection",
    "ConversionResult",
    # Configuration models
    "GeometryServiceSettings",
    "PostGISSettings",
]
