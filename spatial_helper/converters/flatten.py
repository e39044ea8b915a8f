# =============================================================================
# Flatten - FeatureCollection to DataTable
# =============================================================================

import logging

from ..models import DataTable, FeatureCollection, ValueType

__all__ = ["feature_collection_to_table"]

logger = logging.getLogger(__name__)


def feature_collection_to_table(feature_collection: FeatureCollection) -> DataTable:
    """
    Copy each feature's attribute row into a new DataTable.

    Columns are placeholders (``Column1`` .. ``ColumnN``, TEXT) sized from
    the first feature's row; the source schema is not carried over. An
    empty collection gives an empty table with no columns.

    Args:
        feature_collection: Source features

    Returns:
        DataTable with one row per feature, in feature order
    """
    table = DataTable()

    if feature_collection.is_empty:
        logger.info("Feature collection is empty; returning empty table")
        return table

    width = len(feature_collection.features[0].row)
    for i in range(width):
        table.add_column(f"Column{i + 1}", ValueType.TEXT)

    for feature in feature_collection:
        table.add_row(feature.row.values)

    return table
