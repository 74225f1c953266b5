"""Event synthesis: turn catalog rows into concrete calendar events.

Every event is anchored to a single reference instant ``now`` (Unix epoch
seconds) captured once per run, so the relative offsets inside one document
stay consistent with each other.
"""
from __future__ import annotations

import math
import time
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Callable, Optional, Union
from uuid import uuid4

import pytz
from icalendar import vDDDTypes

UTC = pytz.utc
PRODUCT = "zj-cal"

MINUTE = 60
DAY = 86400
HOUR = 3600


class ClockError(RuntimeError):
    """The system clock could not provide a usable reference instant."""


class EventKind(Enum):
    TIMED = ("test", MINUTE, HOUR)
    TIMED_UTC = ("utc", MINUTE, HOUR)
    ALL_DAY = ("allday", DAY, DAY)

    def __init__(self, tag: str, scale: int, duration: int):
        self.tag = tag
        self.scale = scale
        self.duration = duration


@dataclass(frozen=True)
class EventSpec:
    offset: int
    kind: EventKind
    summary: str
    location: Optional[str] = None


Stamp = Union[datetime, date]


@dataclass(frozen=True)
class EventRecord:
    uid: str
    kind: EventKind
    start: Stamp
    end: Stamp
    summary: str
    location: Optional[str] = None

    @property
    def all_day(self) -> bool:
        return self.kind is EventKind.ALL_DAY

    @property
    def start_text(self) -> str:
        return vDDDTypes(self.start).to_ical().decode()

    @property
    def end_text(self) -> str:
        return vDDDTypes(self.end).to_ical().decode()


def capture_now(clock: Callable[[], float] = time.time) -> int:
    """Read ``clock`` once and return whole epoch seconds.

    Raises :class:`ClockError` instead of falling back to a default when the
    clock fails or returns something that is not a valid instant.
    """
    try:
        value = clock()
    except Exception as exc:
        raise ClockError(f"cannot read the system clock: {exc}") from exc
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ClockError(f"clock returned a non-numeric instant: {value!r}")
    if not math.isfinite(value) or value < 0:
        raise ClockError(f"clock returned an invalid instant: {value!r}")
    return int(value)


def new_token() -> str:
    return uuid4().hex[:8]


def make_uid(kind: EventKind, offset: int, token: str, product: str = PRODUCT) -> str:
    return f"{kind.tag}-{offset}-{token}@{product}"


def synthesize(now: int, spec: EventSpec, token: str, product: str = PRODUCT) -> EventRecord:
    kind = spec.kind
    start_ts = now + spec.offset * kind.scale
    end_ts = start_ts + kind.duration

    if kind is EventKind.ALL_DAY:
        # date range, so the end is one calendar day later even across DST
        start = datetime.fromtimestamp(start_ts).date()
        end = start + timedelta(days=1)
    elif kind is EventKind.TIMED_UTC:
        start = datetime.fromtimestamp(start_ts, UTC)
        end = datetime.fromtimestamp(end_ts, UTC)
    else:
        start = datetime.fromtimestamp(start_ts)
        end = datetime.fromtimestamp(end_ts)

    return EventRecord(
        uid=make_uid(kind, spec.offset, token, product),
        kind=kind,
        start=start,
        end=end,
        summary=spec.summary,
        location=spec.location,
    )
