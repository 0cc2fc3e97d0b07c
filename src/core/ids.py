"""Identifier parsing."""

from uuid import UUID


def parse_id(value: str | UUID) -> UUID | None:
    """Parse a path identifier, returning None when it is not a valid UUID."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(value)
    except (TypeError, ValueError):
        return None
