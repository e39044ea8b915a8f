# =============================================================================
# Conversion Result
# =============================================================================
# Carrier returned by operations that never raise past their call boundary.
# =============================================================================

from dataclasses import dataclass
from typing import Any, Optional

__all__ = ["ConversionResult"]


@dataclass
class ConversionResult:
    """
    Outcome of a catch-and-return conversion.

    ``value`` is always usable: on failure it holds whatever was built
    before the error (a partial table, a zero row count). ``error`` holds
    the captured exception, or None on success.

    Example:
        >>> result = shapefile_to_table("parcels.shp", 4326, "geog")
        >>> if not result.success:
        ...     logger.error(f"Conversion failed: {result.error}")
    """
    value: Any = None
    error: Optional[Exception] = None

    @property
    def success(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return ``value``, re-raising the captured error if there is one."""
        if self.error is not None:
            raise self.error
        return self.value
