# =============================================================================
# PostGIS Resource - Database Access for the Converters
# =============================================================================
# Owns one SQLAlchemy engine per conversion call. Used as a context manager
# so that pooled connections are released on every exit path.
# =============================================================================

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, Field, PrivateAttr
from sqlalchemy import Table, create_engine, inspect, text
from sqlalchemy.engine import Connection, Engine, make_url

from ..spatial_utils.identifiers import quote_identifier, validate_identifier

__all__ = ["PostGISResource"]

logger = logging.getLogger(__name__)


class PostGISResource(BaseModel):
    """
    Database access for spatial reads and writes.

    Wraps a SQLAlchemy engine created lazily from a connection string,
    optionally pointed at a different database on the same server.

    Attributes:
        connection_string: SQLAlchemy URL (e.g. "postgresql://user:pw@host:5432/db")
        database: Database name overriding the one in the URL (optional)

    Example:
        >>> with PostGISResource(connection_string=url, database="gis") as db:
        ...     if db.table_exists("parcels"):
        ...         db.drop_table("parcels")
        ... # Engine disposed here, even on exception
    """

    connection_string: str = Field(..., description="SQLAlchemy connection URL")
    database: Optional[str] = Field(None, description="Database name overriding the URL's database")

    # Private attributes for lazy engine initialization
    _engine: Optional[Engine] = PrivateAttr(default=None)

    def _get_connection_string(self) -> str:
        """
        Build the effective connection URL.

        Replaces the database component when ``database`` is set.

        Returns:
            Connection URL string (password included)
        """
        url = make_url(self.connection_string)
        if self.database:
            url = url.set(database=self.database)
        return url.render_as_string(hide_password=False)

    def get_engine(self) -> Engine:
        """
        Get or create the SQLAlchemy engine.

        Uses pre-ping validation so that stale pooled connections are
        replaced before use.

        Returns:
            Configured SQLAlchemy Engine instance
        """
        if self._engine is None:
            self._engine = create_engine(
                self._get_connection_string(),
                pool_pre_ping=True,  # Validate connection health before use
                echo=False,  # Set to True for SQL debugging
            )
        return self._engine

    def dispose(self) -> None:
        """Dispose of the engine and its pooled connections."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def __enter__(self) -> "PostGISResource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    @staticmethod
    def resolve_type_names(conn: Connection, type_oids: Iterable[int]) -> Dict[int, str]:
        """
        Resolve PostgreSQL type OIDs (``cursor.description`` type codes) to
        type names.

        Args:
            conn: Open connection
            type_oids: Type OIDs to resolve

        Returns:
            Mapping of OID to ``pg_type.typname``; unknown OIDs are absent
        """
        oids = sorted({oid for oid in type_oids if oid is not None})
        if not oids:
            return {}

        result = conn.execute(
            text("SELECT oid, typname FROM pg_catalog.pg_type WHERE oid = ANY(:oids)"),
            {"oids": oids},
        )
        names = {int(oid): typname for oid, typname in result.fetchall()}
        logger.debug(f"Resolved column types: {names}")
        return names

    def table_exists(self, table: str, schema: Optional[str] = None) -> bool:
        """
        Check if a table exists.

        Args:
            table: Table name
            schema: Schema name (default: search path)

        Returns:
            True if table exists, False otherwise
        """
        return bool(inspect(self.get_engine()).has_table(table, schema=schema))

    def get_column_names(self, table: str, schema: Optional[str] = None) -> List[str]:
        """Column names of an existing table, in ordinal order."""
        columns = inspect(self.get_engine()).get_columns(table, schema=schema)
        return [column["name"] for column in columns]

    # -------------------------------------------------------------------------
    # DDL / DML
    # -------------------------------------------------------------------------

    def drop_table(self, table: str, schema: Optional[str] = None) -> None:
        """
        Drop a table.

        Raises:
            ValueError: If an identifier is invalid
            Exception: If the DROP fails
        """
        validate_identifier(table, "table")
        qualified = quote_identifier(table)
        if schema:
            validate_identifier(schema, "schema")
            qualified = f"{quote_identifier(schema)}.{qualified}"

        with self.get_engine().begin() as conn:
            conn.execute(text(f"DROP TABLE {qualified}"))
        logger.info(f"Dropped table: {qualified}")

    def create_table(self, table: Table) -> None:
        """Create a table from its SQLAlchemy definition."""
        table.create(self.get_engine())
        logger.info(f"Created table: {table.fullname}")

    def bulk_insert(self, table: Table, records: List[Mapping[str, Any]]) -> int:
        """
        Append rows in a single transaction.

        Args:
            table: SQLAlchemy table definition
            records: Rows as dictionaries keyed by column name

        Returns:
            Number of rows written
        """
        if not records:
            return 0

        with self.get_engine().begin() as conn:
            conn.execute(table.insert(), records)
        logger.info(f"Inserted {len(records)} rows into {table.fullname}")
        return len(records)
