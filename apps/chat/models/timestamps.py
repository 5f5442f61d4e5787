from datetime import datetime, timezone

from sqlalchemy import Column, DateTime
from sqlalchemy.types import TypeDecorator


def utcnow() -> datetime:
    """Timezone-aware UTC timestamp."""
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    TIMESTAMP WITH TIME ZONE that always loads as aware UTC.

    Naive values are taken to be UTC on the way in. SQLite keeps no offset,
    so values read back from it are tagged as UTC again.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


def utc_column(index: bool = False) -> Column:
    """New non-null UTC timestamp column (a Column cannot be shared between fields)."""
    return Column(UTCDateTime(), nullable=False, index=index)
