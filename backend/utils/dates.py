# utils/dates.py
from datetime import datetime, timezone
from typing import Optional

from utils.errors import ValidationFailed


# Timestamps are stored as naive UTC so SQLite and PostgreSQL compare them the same way
def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_iso(value: Optional[str], field: str, end_of_day: bool = False) -> Optional[datetime]:
    if not value:
        return None
    raw = value.strip()
    # A bare YYYY-MM-DD upper bound covers the whole day
    if end_of_day and len(raw) == 10:
        raw += "T23:59:59.999999"
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationFailed(
            f"Bad datetime format: {value}",
            details=[{"field": field, "message": "must be an ISO 8601 date or datetime"}],
        )
    return to_naive_utc(parsed)
