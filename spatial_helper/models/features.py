# =============================================================================
# Feature Collection Module
# =============================================================================
# In-memory set of (spatial value, attribute row) pairs.
# =============================================================================

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Any

from .spatial import FeatureType, SpatialValue
from .table import DataRow, DataTable

__all__ = ["Feature", "FeatureCollection"]


@dataclass
class Feature:
    """
    One geographic entity.

    Attributes:
        geometry: Spatial value, or None when the source had no spatial column
        row: Attribute row, owned by the collection's attribute table
    """
    geometry: Optional[SpatialValue]
    row: DataRow

    @property
    def attributes(self) -> dict:
        """Attribute values keyed by column name."""
        return self.row.as_dict()


@dataclass
class FeatureCollection:
    """
    Features sharing one feature type and one attribute table.

    The attribute table holds the non-spatial columns; each feature's row is
    a row of that table, so ``table.rows[i] is features[i].row``.
    """
    feature_type: FeatureType = FeatureType.UNSPECIFIED
    table: DataTable = field(default_factory=DataTable)
    features: List[Feature] = field(default_factory=list)

    def add_feature(
        self, geometry: Optional[SpatialValue], values: Sequence[Any] = ()
    ) -> Feature:
        """Append an attribute row to the table and pair it with ``geometry``."""
        row = self.table.add_row(values)
        feature = Feature(geometry=geometry, row=row)
        self.features.append(feature)
        return feature

    @property
    def is_empty(self) -> bool:
        return not self.features

    def __len__(self) -> int:
        return len(self.features)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self.features)
