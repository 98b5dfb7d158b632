"""Conversions between service timestamps and Instant values.

The service reports message times as RFC 3339 strings in UTC
(``2015-03-04T12:34:56.123456789Z``). Some endpoints send the protobuf
form instead, a ``{"seconds": ..., "nanos": ...}`` pair. Both decode to
an :class:`Instant`; anything else decodes to ``None``.
"""

import calendar
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional

NANOS_PER_SECOND = 1_000_000_000

_CLOUD_TIME = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d{1,9}))?Z$"
)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Range datetime can represent, 0001-01-01T00:00:00Z to 9999-12-31T23:59:59Z
MIN_SECONDS = calendar.timegm((1, 1, 1, 0, 0, 0))
MAX_SECONDS = calendar.timegm((9999, 12, 31, 23, 59, 59))


def _format_seconds(value: datetime) -> str:
    # strftime does not zero-pad years below 1000 on every platform
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )


@dataclass(frozen=True, order=True)
class Instant:
    """A point on the UTC timeline with nanosecond precision"""

    seconds: int
    nanos: int = 0

    def __post_init__(self):
        if not 0 <= self.nanos < NANOS_PER_SECOND:
            raise ValueError(f"nanos out of range: {self.nanos}")

    @classmethod
    def from_millis(cls, millis: int) -> "Instant":
        seconds, remainder = divmod(int(millis), 1000)
        return cls(seconds, remainder * 1_000_000)

    @classmethod
    def from_datetime(cls, value: datetime) -> "Instant":
        """Naive datetimes are taken to be UTC."""
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        delta = value - _EPOCH
        seconds = delta.days * 86400 + delta.seconds
        return cls(seconds, delta.microseconds * 1000)

    @property
    def millis(self) -> int:
        return self.seconds * 1000 + self.nanos // 1_000_000

    def to_datetime(self) -> datetime:
        # datetime only carries microseconds
        return _EPOCH + timedelta(seconds=self.seconds, microseconds=self.nanos // 1000)

    def __str__(self) -> str:
        base = _format_seconds(self.to_datetime())
        return f"{base}.{self.nanos // 1_000_000:03d}Z"


def _parse_rfc3339(value: str) -> Optional[Instant]:
    match = _CLOUD_TIME.match(value.strip())
    if match is None:
        return None
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    fraction = match.group(7) or ""
    try:
        # validates the calendar fields (no Feb 30th, no hour 25)
        datetime(year, month, day, hour, minute, second)
    except ValueError:
        return None
    seconds = calendar.timegm((year, month, day, hour, minute, second))
    nanos = int(fraction.ljust(9, "0")) if fraction else 0
    return Instant(seconds, nanos)


def _parse_pair(value: Mapping[str, Any]) -> Optional[Instant]:
    if "seconds" not in value:
        return None
    try:
        seconds = int(value["seconds"])
        nanos = int(value.get("nanos", 0))
    except (TypeError, ValueError):
        return None
    if not 0 <= nanos < NANOS_PER_SECOND:
        return None
    if not MIN_SECONDS <= seconds <= MAX_SECONDS:
        return None
    return Instant(seconds, nanos)


def from_cloud_time(value: Any) -> Optional[Instant]:
    """Decode a wire timestamp, returning ``None`` when it is absent or unparseable."""
    if value is None:
        return None
    if isinstance(value, str):
        return _parse_rfc3339(value)
    if isinstance(value, Mapping):
        return _parse_pair(value)
    return None


def to_cloud_time(instant: Instant) -> str:
    """Encode an Instant in the service's RFC 3339 form.

    The fraction is written with 0, 3, 6 or 9 digits, whichever is the
    shortest exact representation.
    """
    base = _format_seconds(instant.to_datetime())
    nanos = instant.nanos
    if nanos == 0:
        return f"{base}Z"
    if nanos % 1_000_000 == 0:
        return f"{base}.{nanos // 1_000_000:03d}Z"
    if nanos % 1000 == 0:
        return f"{base}.{nanos // 1000:06d}Z"
    return f"{base}.{nanos:09d}Z"
