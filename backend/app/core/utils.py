"""
Utility functions for the application.
"""
from datetime import datetime, timezone
import uuid


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, matching what the DB stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Normalize an aware datetime to naive UTC; naive values are assumed UTC."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def generate_gallery_token() -> str:
    """
    Issue an opaque, URL-safe gallery token.

    UUID4 carries 122 random bits from the OS CSPRNG; the caller persists it
    as the gallery's public identifier.
    """
    return str(uuid.uuid4())
