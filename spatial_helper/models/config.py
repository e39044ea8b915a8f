# =============================================================================
# Configuration Models Module
# =============================================================================
# Provides Pydantic Settings models for library configuration:
# - PostGISSettings: Connection settings for the PostGIS database
# - GeometryServiceSettings: Process-wide geometry service options
# =============================================================================

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "PostGISSettings",
    "GeometryServiceSettings",
]


# =============================================================================
# PostGIS Settings
# =============================================================================

class PostGISSettings(BaseSettings):
    """
    Configuration for the PostGIS database read and written by the converters.

    Maps environment variables with prefix "POSTGRES_":
    - POSTGRES_HOST → host
    - POSTGRES_PORT → port
    - POSTGRES_USER → user
    - POSTGRES_PASSWORD → password
    - POSTGRES_DB → database

    Attributes:
        host: PostGIS host (default: "localhost")
        port: PostGIS port (default: 5432)
        user: PostgreSQL user
        password: PostgreSQL password
        database: Database name (default: "postgres")
    """

    host: str = Field("localhost", validation_alias="POSTGRES_HOST", description="PostGIS host")
    port: int = Field(5432, validation_alias="POSTGRES_PORT", description="PostGIS port")
    user: str = Field(..., validation_alias="POSTGRES_USER", description="PostgreSQL user")
    password: str = Field(..., validation_alias="POSTGRES_PASSWORD", description="PostgreSQL password")
    database: str = Field("postgres", validation_alias="POSTGRES_DB", description="Database name")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Ignore unrelated env vars from shared .env files
        populate_by_name=True,
    )

    @property
    def connection_string(self) -> str:
        """
        Build PostgreSQL connection URI.

        Format: postgresql://[user]:[password]@[host]:[port]/[database]

        Returns:
            PostgreSQL connection URI string
        """
        return (
            f"postgresql://{self.user}:{self.password}@"
            f"{self.host}:{self.port}/{self.database}"
        )


# =============================================================================
# Geometry Service Settings
# =============================================================================

class GeometryServiceSettings(BaseSettings):
    """
    Options for the process-wide geometry service.

    Maps environment variables with prefix "SPATIAL_":
    - SPATIAL_WKT_PRECISION → wkt_precision
    - SPATIAL_VALIDATE_GEOGRAPHY → validate_geography

    Attributes:
        wkt_precision: Decimal places for WKT output (None keeps full precision)
        validate_geography: Reject geography values outside lon/lat range
    """

    wkt_precision: Optional[int] = Field(
        None,
        ge=0,
        validation_alias="SPATIAL_WKT_PRECISION",
        description="Decimal places for WKT output (None keeps full precision)",
    )
    validate_geography: bool = Field(
        True,
        validation_alias="SPATIAL_VALIDATE_GEOGRAPHY",
        description="Reject geography values outside lon/lat range",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    @classmethod
    def defaults(cls) -> "GeometryServiceSettings":
        """
        Field defaults only, without reading environment variables or .env.

        Validating an empty mapping skips the settings sources that
        ``__init__`` consults.
        """
        return cls.model_validate({})
