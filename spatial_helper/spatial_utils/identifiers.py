# =============================================================================
# SQL Identifier Validation
# =============================================================================

import re
from typing import Optional

__all__ = ["validate_identifier", "quote_identifier"]

_IDENTIFIER_PATTERN = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')


def validate_identifier(identifier: Optional[str], name: str) -> str:
    """
    Validate that an identifier matches the PostgreSQL identifier allowlist.

    Args:
        identifier: Identifier to validate
        name: Name of the identifier (for error messages)

    Returns:
        The identifier, unchanged

    Raises:
        ValueError: If identifier doesn't match allowlist pattern
    """
    if not identifier or not _IDENTIFIER_PATTERN.match(identifier):
        raise ValueError(
            f"Invalid {name}: {identifier}. "
            f"Must match pattern: ^[A-Za-z_][A-Za-z0-9_]*$"
        )
    return identifier


def quote_identifier(identifier: str) -> str:
    """Double-quote an already validated identifier for raw SQL."""
    return f'"{identifier}"'
