"""
Shared pytest fixtures.

Provides the geometry service registration, generated shapefiles and mocked
database resources used across the unit tests.
"""

from datetime import date
from unittest.mock import MagicMock

import pytest
import shapefile
from pyproj import CRS

from spatial_helper import initialize_geometry_service, reset_geometry_service
from spatial_helper.models import DataColumn, DataTable, ValueType


# =============================================================================
# Geometry Service
# =============================================================================

@pytest.fixture(autouse=True)
def geometry_service():
    """Register the geometry service for every test, clearing it afterwards."""
    reset_geometry_service()
    service = initialize_geometry_service()
    yield service
    reset_geometry_service()


# =============================================================================
# Shapefile Fixtures
# =============================================================================

# Clockwise exteriors (shapefile convention)
SQUARE = [[115.0, -32.0], [115.0, -31.0], [116.0, -31.0], [116.0, -32.0], [115.0, -32.0]]
TRIANGLE = [[117.0, -33.0], [117.5, -32.0], [118.0, -33.0], [117.0, -33.0]]


@pytest.fixture
def polygon_shapefile(tmp_path):
    """Two-polygon shapefile with text, integer, decimal and date fields."""
    path = tmp_path / "suburbs.shp"
    with shapefile.Writer(str(path), shapeType=shapefile.POLYGON) as w:
        w.field("NAME", "C", size=20)
        w.field("POP", "N", size=8, decimal=0)
        w.field("AREA", "N", size=12, decimal=3)
        w.field("SURVEYED", "D")
        w.poly([SQUARE])
        w.record("Perth", 2100, 12.5, date(2020, 1, 2))
        w.poly([TRIANGLE])
        w.record("Bunbury", 75, 3.25, date(2021, 6, 30))
    return path


@pytest.fixture
def point_shapefile(tmp_path):
    """Three-point shapefile with a single text field."""
    path = tmp_path / "sites.shp"
    with shapefile.Writer(str(path), shapeType=shapefile.POINT) as w:
        w.field("SITE", "C", size=10)
        for i, (x, y) in enumerate([(115.5, -31.5), (116.0, -32.0), (117.25, -33.75)]):
            w.point(x, y)
            w.record(f"S{i}")
    return path


@pytest.fixture
def write_prj():
    """Write a .prj companion file in ESRI WKT for an EPSG code."""
    def _write(shapefile_path, epsg):
        prj = shapefile_path.with_suffix(".prj")
        prj.write_text(CRS.from_epsg(epsg).to_wkt("WKT1_ESRI"))
        return prj
    return _write


# =============================================================================
# Table Fixtures
# =============================================================================

@pytest.fixture
def attribute_table():
    """Three-column attribute table with two rows."""
    table = DataTable([
        DataColumn("name", ValueType.TEXT),
        DataColumn("pop", ValueType.INT32),
        DataColumn("area", ValueType.FLOAT),
    ])
    table.add_row(["Perth", 2100, 12.5])
    table.add_row(["Bunbury", 75, 3.25])
    return table


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture
def mock_db():
    """
    Mocked PostGISResource instance usable as a context manager.

    Patch the resource class in the module under test and set its
    ``return_value`` to this mock.
    """
    db = MagicMock()
    db.__enter__.return_value = db
    db.__exit__.return_value = None
    return db
