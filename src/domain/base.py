from datetime import UTC, datetime


def utcnow() -> datetime:
    """Current time as naive UTC, the form stored in DateTime columns"""
    return datetime.now(UTC).replace(tzinfo=None)


def to_timestamp(moment: datetime) -> int:
    """Seconds since the epoch for a naive UTC datetime"""
    return int(moment.replace(tzinfo=UTC).timestamp())
