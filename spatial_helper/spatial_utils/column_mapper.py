# =============================================================================
# Column Mapper - Reader Columns to Attribute Table Columns
# =============================================================================
# Classifies query result columns as spatial or attribute columns and maps
# reader positions to attribute table positions.
# =============================================================================

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..models.spatial import SpatialKind
from ..models.table import DataTable, ValueType
from .type_mapping import value_type_for_pg_type

__all__ = [
    "ColumnDescriptor",
    "ColumnMapper",
    "ColumnLayout",
    "describe_columns",
    "classify_columns",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnDescriptor:
    """
    Name and database type name of one result column.

    Attributes:
        name: Column name as reported by the cursor
        type_name: PostgreSQL type name (``pg_type.typname``)
    """
    name: str
    type_name: str

    @property
    def value_type(self) -> ValueType:
        return value_type_for_pg_type(self.type_name)

    @property
    def spatial_kind(self) -> Optional[SpatialKind]:
        if self.value_type is ValueType.GEOMETRY:
            return SpatialKind.GEOMETRY
        if self.value_type is ValueType.GEOGRAPHY:
            return SpatialKind.GEOGRAPHY
        return None


class ColumnMapper:
    """
    Positional map from reader column index to attribute table column index.

    Built once per import and applied to every row.

    Example:
        >>> mapper = ColumnMapper()
        >>> mapper.add_map(0, 0)
        >>> mapper.add_map(2, 1)      # reader column 1 is the spatial column
        >>> mapper.map(["a", b"...", 3])
        ['a', 3]
    """

    def __init__(self) -> None:
        self._map: Dict[int, int] = {}

    def add_map(self, source: int, target: int) -> None:
        """
        Raises:
            ValueError: If ``source`` is already mapped
        """
        if source in self._map:
            raise ValueError(f"Source column {source} is already mapped")
        self._map[source] = target

    def map(self, values: Sequence[Any]) -> List[Any]:
        """Project a reader row onto the attribute table's columns."""
        result: List[Any] = [None] * len(self._map)
        for source, target in self._map.items():
            result[target] = values[source]
        return result

    @property
    def sources(self) -> List[int]:
        return list(self._map)

    def __len__(self) -> int:
        return len(self._map)


@dataclass
class ColumnLayout:
    """
    Classification of a result set's columns.

    Attributes:
        table: Empty attribute table (non-spatial columns, reader order)
        mapper: Reader index -> attribute table index
        spatial_index: Reader index of THE spatial column (None if absent)
        spatial_kind: Kind of THE spatial column (None if absent)
        extra_spatial: Reader index -> kind for further spatial columns that
            were kept as attribute columns
    """
    table: DataTable
    mapper: ColumnMapper
    spatial_index: Optional[int] = None
    spatial_kind: Optional[SpatialKind] = None
    extra_spatial: Dict[int, SpatialKind] = field(default_factory=dict)

    @property
    def has_spatial_column(self) -> bool:
        return self.spatial_index is not None


def describe_columns(
    description: Sequence[Sequence[Any]], type_names: Mapping[int, str]
) -> List[ColumnDescriptor]:
    """
    Build column descriptors from a DBAPI cursor description.

    Args:
        description: ``cursor.description`` (name, type_code, ...)
        type_names: type OID -> ``pg_type.typname``

    Raises:
        ValueError: If a column's type cannot be introspected
    """
    descriptors = []
    for entry in description:
        name, type_code = entry[0], entry[1]
        type_name = type_names.get(type_code) if type_code is not None else None
        if not type_name:
            raise ValueError(f"Could not get column type for column '{name}' (oid {type_code})")
        descriptors.append(ColumnDescriptor(name=name, type_name=type_name))
    return descriptors


def classify_columns(descriptors: Sequence[ColumnDescriptor]) -> ColumnLayout:
    """
    Split result columns into one spatial column and attribute columns.

    The first geometry/geography column by position becomes the spatial
    column. Any later spatial column is kept as an attribute column whose
    values are decoded into SpatialValues.
    """
    layout = ColumnLayout(table=DataTable(), mapper=ColumnMapper())

    for index, descriptor in enumerate(descriptors):
        kind = descriptor.spatial_kind

        if kind is not None and layout.spatial_index is None:
            layout.spatial_index = index
            layout.spatial_kind = kind
            continue

        if kind is not None:
            logger.warning(
                f"Result has more than one spatial column; '{descriptor.name}' "
                f"is kept as an attribute column"
            )
            layout.extra_spatial[index] = kind

        layout.table.add_column(descriptor.name, descriptor.value_type)
        layout.mapper.add_map(index, len(layout.table.columns) - 1)

    return layout
