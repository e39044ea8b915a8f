# =============================================================================
# Shapefile Header - Main File and dBase Header Metadata
# =============================================================================

from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional, Union

import shapefile
from pydantic import BaseModel, Field

from ..models import Bounds
from ..spatial_utils.shapefile_io import (
    open_shapefile,
    read_dbf_last_update,
    read_shp_file_length,
)

__all__ = ["ShapefileHeader", "get_shapefile_header_info"]


class ShapefileHeader(BaseModel):
    """
    Header metadata of a shapefile and its attribute file.

    Attributes:
        bounds: Bounding box from the .shp header
        shape_type: Shape type code (e.g. 1 point, 3 polyline, 5 polygon)
        shape_type_name: Shape type name (e.g. "POLYGON")
        file_length: .shp file length in 16-bit words, as stored
        num_fields: Attribute field count (excluding the deletion flag)
        num_records: Attribute record count
        last_update: Last-update date from the .dbf header
    """

    bounds: Bounds = Field(..., description="Bounding box from the .shp header")
    shape_type: int = Field(..., description="Shape type code")
    shape_type_name: str = Field(..., description="Shape type name")
    file_length: int = Field(..., ge=50, description=".shp file length in 16-bit words")
    num_fields: int = Field(..., ge=0, description="Attribute field count")
    num_records: int = Field(..., ge=0, description="Attribute record count")
    last_update: Optional[date] = Field(None, description="Last-update date from the .dbf header")

    def as_dict(self) -> Dict[str, Any]:
        """Header fields keyed by their conventional header names."""
        return {
            "Bounds": self.bounds,
            "ShapeType": self.shape_type,
            "FileLength": self.file_length,
            "NumFields": self.num_fields,
            "NumRecords": self.num_records,
            "LastUpdate": self.last_update,
        }


def get_shapefile_header_info(shapefile_path: Union[str, Path]) -> ShapefileHeader:
    """
    Read header metadata from a shapefile and its .dbf.

    Errors opening or reading the files propagate to the caller.

    Args:
        shapefile_path: Path to the .shp file

    Returns:
        ShapefileHeader with bounds, shape type, file length, field count,
        record count and last-update date
    """
    with open_shapefile(shapefile_path) as reader:
        num_fields = len([f for f in reader.fields if f[0] != "DeletionFlag"])
        header = ShapefileHeader(
            bounds=Bounds.from_sequence(reader.bbox),
            shape_type=reader.shapeType,
            shape_type_name=shapefile.SHAPETYPE_LOOKUP.get(reader.shapeType, "UNKNOWN"),
            file_length=read_shp_file_length(shapefile_path),
            num_fields=num_fields,
            num_records=reader.numRecords,
            last_update=read_dbf_last_update(shapefile_path),
        )
    return header
