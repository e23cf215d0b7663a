from datetime import UTC, datetime

from sqlalchemy import Column, DateTime


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every DateTime column stores."""
    return datetime.now(UTC).replace(tzinfo=None)


def created_at_column() -> Column:
    return Column(DateTime, nullable=False, default=utcnow)


def updated_at_column() -> Column:
    return Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
