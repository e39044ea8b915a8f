"""
Unit tests for feature_collection_to_table.
"""

from shapely.geometry import Point

from spatial_helper.converters import feature_collection_to_table
from spatial_helper.models import (
    DataColumn,
    DataTable,
    FeatureCollection,
    FeatureType,
    SpatialValue,
    ValueType,
)


def _collection(rows):
    collection = FeatureCollection(
        feature_type=FeatureType.POINT,
        table=DataTable([DataColumn("name"), DataColumn("pop", ValueType.INT32)]),
    )
    for i, values in enumerate(rows):
        collection.add_feature(SpatialValue(Point(i, i)), values)
    return collection


def test_rows_copied_in_feature_order():
    table = feature_collection_to_table(_collection([["a", 1], ["b", 2], ["c", None]]))

    assert len(table) == 3
    assert [row.values for row in table] == [("a", 1), ("b", 2), ("c", None)]


def test_columns_are_placeholders():
    table = feature_collection_to_table(_collection([["a", 1]]))

    assert table.column_names == ["Column1", "Column2"]
    assert all(c.value_type is ValueType.TEXT for c in table.columns)


def test_rows_are_copies():
    collection = _collection([["a", 1]])
    table = feature_collection_to_table(collection)

    table.rows[0][0] = "changed"

    assert collection.features[0].row["name"] == "a"


def test_empty_collection_gives_empty_table():
    table = feature_collection_to_table(FeatureCollection())

    assert len(table) == 0
    assert table.columns == []
