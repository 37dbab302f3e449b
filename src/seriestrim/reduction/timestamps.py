"""Conversion between sample timestamps and a linear millisecond axis."""

from datetime import UTC, datetime


def to_epoch_ms(timestamp: datetime | str | float) -> float:
    """
    Convert a timestamp to milliseconds since the Unix epoch.

    Naive datetimes are read as UTC so that conversion does not depend on
    the local timezone.

    Args:
        timestamp: datetime, ISO-8601 string, or epoch milliseconds

    Returns:
        Milliseconds since the epoch

    Raises:
        ValueError: If a string is not valid ISO-8601
        TypeError: If the timestamp type is not supported
    """
    if isinstance(timestamp, datetime):
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=UTC)
        return timestamp.timestamp() * 1000.0
    if isinstance(timestamp, str):
        return to_epoch_ms(datetime.fromisoformat(timestamp))
    if isinstance(timestamp, bool):
        raise TypeError("Boolean is not a valid timestamp")
    if isinstance(timestamp, int | float):
        return float(timestamp)
    raise TypeError(f"Unsupported timestamp type: {type(timestamp).__name__}")


def from_epoch_ms(epoch_ms: float, like: datetime | str | float) -> datetime | float:
    """
    Convert epoch milliseconds back to the timestamp kind of ``like``.

    Args:
        epoch_ms: Milliseconds since the epoch
        like: Example timestamp whose kind (aware/naive datetime or number)
            the result should match

    Returns:
        datetime when ``like`` is a datetime or string, otherwise float ms
    """
    if isinstance(like, str):
        like = datetime.fromisoformat(like)

    if isinstance(like, datetime):
        converted = datetime.fromtimestamp(epoch_ms / 1000.0, tz=UTC)
        if like.tzinfo is None:
            return converted.replace(tzinfo=None)
        return converted.astimezone(like.tzinfo)

    return float(epoch_ms)
