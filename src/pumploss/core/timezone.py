"""Time helpers: all stored times are UTC epoch seconds."""

from datetime import datetime
from typing import Union

import pytz
from dateutil import parser as date_parser

UTC = pytz.utc


def now_utc() -> datetime:
    """Return current time in UTC."""
    return datetime.now(UTC)


def now_epoch_seconds() -> float:
    """Return current time as epoch seconds."""
    return now_utc().timestamp()


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC."""
    if dt.tzinfo is None:
        # Block times without an offset are UTC
        return UTC.localize(dt)
    return dt.astimezone(UTC)


def from_epoch_seconds(value: Union[int, float]) -> datetime:
    """Return the UTC datetime for epoch seconds."""
    return datetime.fromtimestamp(value, UTC)


def parse_block_time(value: Union[int, float, str, datetime]) -> int:
    """
    Normalize a block timestamp to integer epoch seconds.

    Accepts epoch seconds (int/float or numeric string), an ISO-8601
    string, or a datetime. Naive values are treated as UTC.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid block time: {value!r}")
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, datetime):
        return int(to_utc(value).timestamp())

    text = str(value).strip()
    if not text:
        raise ValueError("Empty block time")
    try:
        return int(float(text))
    except ValueError:
        pass
    return int(to_utc(date_parser.parse(text)).timestamp())
