# =============================================================================
# Shapefile I/O Helpers
# =============================================================================
# Thin helpers around pyshp for the shapefile converters:
# - Companion file lookup (.shp / .dbf / .prj)
# - Attribute schema extraction
# - Main-file and dBase header fields pyshp does not expose
# - SRID detection from the .prj file
# =============================================================================

import logging
import struct
from datetime import date
from pathlib import Path
from typing import List, Optional, Union

import shapefile
from pyproj import CRS

from ..models.table import DataColumn
from .type_mapping import value_type_for_dbf_field

__all__ = [
    "companion_path",
    "open_shapefile",
    "dbf_columns",
    "read_shp_file_length",
    "read_dbf_last_update",
    "srid_from_prj",
]

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

SHP_FILE_CODE = 9994


def companion_path(shapefile_path: PathLike, extension: str) -> Path:
    """
    Locate a sibling file of a shapefile (``.dbf``, ``.prj``, ...).

    Both lower- and upper-case extensions are tried.

    Raises:
        FileNotFoundError: If no sibling with that extension exists
    """
    path = Path(shapefile_path)
    if path.suffix.lower() == ".shp":
        path = path.with_suffix("")

    for candidate in (extension.lower(), extension.upper()):
        sibling = path.with_name(path.name + candidate)
        if sibling.exists():
            return sibling
    raise FileNotFoundError(f"No {extension} file found for shapefile: {shapefile_path}")


def open_shapefile(shapefile_path: PathLike) -> shapefile.Reader:
    """
    Open a shapefile with pyshp.

    The returned reader should be used as a context manager so that the
    .shp/.shx/.dbf handles are closed on every path.
    """
    return shapefile.Reader(str(shapefile_path))


def dbf_columns(reader: shapefile.Reader) -> List[DataColumn]:
    """Attribute schema of a shapefile, excluding the dBase deletion flag."""
    columns = []
    for field in reader.fields:
        name, field_type, size, decimal = field[0], field[1], field[2], field[3]
        if name == "DeletionFlag":
            continue
        columns.append(
            DataColumn(
                name=name,
                value_type=value_type_for_dbf_field(str(field_type), int(size), int(decimal)),
            )
        )
    return columns


def read_shp_file_length(shapefile_path: PathLike) -> int:
    """
    Read the file length field of the .shp main header.

    The value is returned as stored: a count of 16-bit words.

    Raises:
        ValueError: If the file is not a shapefile main file
    """
    shp_path = companion_path(shapefile_path, ".shp")
    with open(shp_path, "rb") as f:
        header = f.read(28)

    if len(header) < 28:
        raise ValueError(f"Truncated shapefile header: {shp_path}")

    file_code = struct.unpack(">i", header[0:4])[0]
    if file_code != SHP_FILE_CODE:
        raise ValueError(f"Not a shapefile (file code {file_code}): {shp_path}")

    return struct.unpack(">i", header[24:28])[0]


def read_dbf_last_update(shapefile_path: PathLike) -> Optional[date]:
    """
    Read the last-update date from the .dbf header (bytes 1-3, YY MM DD).

    Years are stored as an offset from 1900. Returns None when the stored
    date is not a valid calendar date.
    """
    dbf_path = companion_path(shapefile_path, ".dbf")
    with open(dbf_path, "rb") as f:
        header = f.read(4)

    if len(header) < 4:
        raise ValueError(f"Truncated dBase header: {dbf_path}")

    year, month, day = header[1], header[2], header[3]
    try:
        return date(1900 + year, month, day)
    except ValueError:
        logger.warning(f"Invalid last-update date in {dbf_path}: {year}/{month}/{day}")
        return None


def srid_from_prj(shapefile_path: PathLike) -> int:
    """
    Identify the EPSG code of a shapefile's coordinate system from its .prj.

    Raises:
        FileNotFoundError: If there is no .prj file
        ValueError: If the projection cannot be matched to an EPSG code
    """
    prj_path = companion_path(shapefile_path, ".prj")
    wkt = prj_path.read_text(encoding="utf-8", errors="replace").strip()

    epsg = CRS.from_wkt(wkt).to_epsg()
    if epsg is None:
        raise ValueError(f"Could not identify an EPSG code for projection in {prj_path}")

    logger.debug(f"Detected SRID {epsg} from {prj_path}")
    return epsg
