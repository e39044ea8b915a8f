"""Resources - Database Connections."""

from .postgis_resource import PostGISResource

__all__ = [
    "PostGISResource",
]
