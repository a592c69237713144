from datetime import datetime, timezone
from typing import Optional


def parse_iso8601(value: str | None) -> Optional[datetime]:
    """
    Parse an ISO8601 timestamp from the API into a timezone-aware UTC datetime.

    API timestamps are always UTC (Z or +00:00).
    """
    if not value:
        return None

    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)

    return dt


def from_unix(value: int | float | None) -> Optional[datetime]:
    """Convert a unix timestamp (seconds) from a gateway payload to UTC."""
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc)
