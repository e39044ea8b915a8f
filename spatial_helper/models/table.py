# =============================================================================
# Tabular Structure Module
# =============================================================================
# In-memory table shuttled between the database, shapefiles and feature
# collections:
# - ValueType: Semantic host value type of a column
# - DataColumn: Named, typed column
# - DataRow: Row aligned to the owning table's columns
# - DataTable: Ordered columns + ordered rows
# =============================================================================

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Iterator, List, Optional, Sequence, Union

import pyarrow as pa

from .spatial import SpatialValue

__all__ = ["ValueType", "DataColumn", "DataRow", "DataTable"]


class ValueType(str, Enum):
    """Semantic value type carried by a column."""
    FLOAT = "float"
    DECIMAL = "decimal"
    TEXT = "text"
    TIMESTAMP = "timestamp"
    INT32 = "int32"
    INT64 = "int64"
    BOOLEAN = "boolean"
    BINARY = "binary"
    GEOGRAPHY = "geography"
    GEOMETRY = "geometry"
    OBJECT = "object"

    @property
    def is_spatial(self) -> bool:
        return self in (ValueType.GEOGRAPHY, ValueType.GEOMETRY)


@dataclass
class DataColumn:
    """
    Column of a DataTable.

    Attributes:
        name: Column name (unique within its table)
        value_type: Semantic value type
        srid: Spatial reference id for GEOMETRY/GEOGRAPHY columns
    """
    name: str
    value_type: ValueType = ValueType.TEXT
    srid: Optional[int] = None


class DataRow:
    """
    Row of a DataTable.

    Values are positionally aligned to the table's columns and can be read
    or assigned by index or by column name.
    """

    __slots__ = ("_table", "_values")

    def __init__(self, table: "DataTable", values: List[Any]):
        self._table = table
        self._values = values

    def _position(self, key: Union[int, str]) -> int:
        if isinstance(key, str):
            return self._table.column_index(key)
        return key

    def __getitem__(self, key: Union[int, str]) -> Any:
        return self._values[self._position(key)]

    def __setitem__(self, key: Union[int, str], value: Any) -> None:
        self._values[self._position(key)] = value

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DataRow):
            return self._values == other._values
        if isinstance(other, (list, tuple)):
            return self._values == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"DataRow({self._values!r})"

    @property
    def values(self) -> tuple:
        """Snapshot of the row values in column order."""
        return tuple(self._values)

    def as_dict(self) -> dict:
        """Row values keyed by column name."""
        return dict(zip(self._table.column_names, self._values))

    def _extend(self) -> None:
        self._values.append(None)


class DataTable:
    """
    Ordered sequence of typed columns and aligned rows.

    A row's width always equals the column count: adding a column pads
    every existing row with ``None``, and partial rows are padded on
    insertion.

    Example:
        >>> table = DataTable([DataColumn("name"), DataColumn("pop", ValueType.INT32)])
        >>> row = table.add_row(["Perth"])
        >>> row["pop"] = 2_100_000
        >>> geog = table.add_column("geog", ValueType.GEOGRAPHY, srid=4326)
        >>> table.rows[0].values
        ('Perth', 2100000, None)
    """

    def __init__(self, columns: Optional[Iterable[DataColumn]] = None):
        self.columns: List[DataColumn] = []
        self.rows: List[DataRow] = []
        for column in columns or ():
            self.add_column(column.name, column.value_type, column.srid)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[DataRow]:
        return iter(self.rows)

    def __repr__(self) -> str:
        return f"DataTable(columns={self.column_names!r}, rows={len(self.rows)})"

    @property
    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]

    def column_index(self, name: str) -> int:
        """
        Return the position of a column.

        Raises:
            KeyError: If no column has that name
        """
        for index, column in enumerate(self.columns):
            if column.name == name:
                return index
        raise KeyError(f"Column not found: {name}")

    def add_column(
        self,
        name: str,
        value_type: ValueType = ValueType.TEXT,
        srid: Optional[int] = None,
    ) -> DataColumn:
        """
        Append a column, padding existing rows with ``None``.

        Raises:
            ValueError: If the name is empty or already used
        """
        if not name:
            raise ValueError("Column name cannot be empty")
        if name in self.column_names:
            raise ValueError(f"Duplicate column name: {name}")

        column = DataColumn(name=name, value_type=value_type, srid=srid)
        self.columns.append(column)
        for row in self.rows:
            row._extend()
        return column

    def add_row(self, values: Sequence[Any] = ()) -> DataRow:
        """
        Append a row from a full or partial value sequence.

        Missing trailing values are filled with ``None``.

        Raises:
            ValueError: If more values are given than there are columns
        """
        values = list(values)
        if len(values) > len(self.columns):
            raise ValueError(
                f"Row has {len(values)} values but table has {len(self.columns)} columns"
            )
        values.extend([None] * (len(self.columns) - len(values)))

        row = DataRow(self, values)
        self.rows.append(row)
        return row

    def load_rows(self, rows: Iterable[Sequence[Any]]) -> int:
        """Append many rows; returns the number appended."""
        count = 0
        for values in rows:
            self.add_row(values)
            count += 1
        return count

    def to_records(self) -> List[dict]:
        """Rows as dictionaries keyed by column name."""
        names = self.column_names
        return [dict(zip(names, row)) for row in self.rows]

    def to_arrow(self) -> pa.Table:
        """
        Convert to a PyArrow table.

        Spatial values are emitted as WKB binary; other values are passed to
        PyArrow for type inference.
        """
        arrays = {}
        for index, column in enumerate(self.columns):
            values = [row[index] for row in self.rows]
            if column.value_type.is_spatial:
                values = [v.wkb if isinstance(v, SpatialValue) else v for v in values]
                arrays[column.name] = pa.array(values, type=pa.binary())
            else:
                arrays[column.name] = pa.array(values)
        return pa.table(arrays)
