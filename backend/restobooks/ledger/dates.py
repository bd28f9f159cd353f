# Overview: Calendar-day and event-timestamp value types with boundary conversions.

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import date, datetime, timezone

from .errors import MalformedDateError

"""
Restobooks Time Semantics (authoritative)

Two date representations coexist and are never compared with each other:

- CalendarDate: a business day encoded as the integer YYYYMMDD. Sales and
  expenses are recorded against a CalendarDate and reports filter on it with
  plain integer comparison (valid because every bound and every entry share
  the encoding).
- EventTimestamp: an instant in nanoseconds since the Unix epoch (UTC). Petty
  cash and stock movements carry one; it is used for ordering and listing
  windows only, never for calendar bucketing.

Conversions between the two and the outside world go through the named
constructors below. Comparing a CalendarDate against an EventTimestamp raises
TypeError.
"""

_NANOS_PER_SECOND = 1_000_000_000
_NANOS_PER_MICRO = 1_000
_EPOCH = datetime(1970, 1, 1)


@dataclass(frozen=True, order=True)
class CalendarDate:
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise MalformedDateError(self.value, "expected an integer YYYYMMDD")
        year, rest = divmod(self.value, 10_000)
        month, day = divmod(rest, 100)
        try:
            date(year, month, day)
        except ValueError as exc:
            raise MalformedDateError(self.value, str(exc)) from None

    @classmethod
    def from_date(cls, d: date) -> "CalendarDate":
        return cls(d.year * 10_000 + d.month * 100 + d.day)

    @classmethod
    def today(cls) -> "CalendarDate":
        return cls.from_date(date.today())

    @classmethod
    def parse(cls, value) -> "CalendarDate":
        """
        Accepts:
        - CalendarDate -> returned as-is
        - int YYYYMMDD
        - date / datetime -> its calendar day
        - str "YYYYMMDD" or "YYYY-MM-DD" (surrounding whitespace ignored)

        Anything else raises MalformedDateError.
        """
        if isinstance(value, CalendarDate):
            return value
        if isinstance(value, datetime):
            return cls.from_date(value.date())
        if isinstance(value, date):
            return cls.from_date(value)
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value)
        if isinstance(value, str):
            s = value.strip()
            if len(s) == 8 and s.isdigit():
                return cls(int(s))
            if len(s) == 10 and s[4] == "-" and s[7] == "-":
                try:
                    return cls.from_date(date.fromisoformat(s))
                except ValueError as exc:
                    raise MalformedDateError(value, str(exc)) from None
            raise MalformedDateError(value, "expected YYYYMMDD or YYYY-MM-DD")
        raise MalformedDateError(value)

    @property
    def year(self) -> int:
        return self.value // 10_000

    @property
    def month(self) -> int:
        return (self.value // 100) % 100

    @property
    def day(self) -> int:
        return self.value % 100

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def isoformat(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def display(self) -> str:
        """DD/MM/YYYY, the format the ledger screens show."""
        return f"{self.day:02d}/{self.month:02d}/{self.year:04d}"

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, order=True)
class EventTimestamp:
    nanos: int

    def __post_init__(self):
        if isinstance(self.nanos, bool) or not isinstance(self.nanos, int):
            raise TypeError("EventTimestamp requires integer nanoseconds")

    @classmethod
    def now(cls) -> "EventTimestamp":
        return cls(time.time_ns())

    @classmethod
    def from_datetime(cls, dt: datetime) -> "EventTimestamp":
        """Naive datetimes are treated as UTC (house canonical time)."""
        if dt.tzinfo is not None:
            dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
        delta = dt - _EPOCH
        micros = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
        return cls(micros * _NANOS_PER_MICRO)

    def to_datetime(self) -> datetime:
        """UTC-naive datetime, truncated to microseconds."""
        seconds, rem = divmod(self.nanos, _NANOS_PER_SECOND)
        return datetime.fromtimestamp(seconds, tz=timezone.utc).replace(
            tzinfo=None, microsecond=rem // _NANOS_PER_MICRO
        )

    def to_utc_z(self) -> str:
        return self.to_datetime().isoformat() + "Z"

    def __int__(self) -> int:
        return self.nanos


def coerce_date_bound(value) -> CalendarDate | None:
    """None or blank -> None (unbounded); otherwise CalendarDate.parse."""
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return CalendarDate.parse(value)
