"""The fixture catalog: which events the test feed contains."""
from __future__ import annotations

from collections import Counter
from typing import Iterable, List, Tuple

from .events import EventKind, EventSpec

TIMED = EventKind.TIMED
TIMED_UTC = EventKind.TIMED_UTC
ALL_DAY = EventKind.ALL_DAY

# offsets in minutes
DEFAULT_EVENTS = (
    EventSpec(0, TIMED, "Team Standup"),
    EventSpec(5, TIMED, "Quick Sync"),
    EventSpec(15, TIMED, "Code Review"),
    EventSpec(30, TIMED, "1:1"),
    EventSpec(45, TIMED, "Sprint Planning"),
    EventSpec(60, TIMED, "Design Review"),
    EventSpec(90, TIMED, "Backlog Grooming"),
    EventSpec(120, TIMED, "Tech Debt Discussion"),
    EventSpec(180, TIMED, "Platform Team Sync"),
    EventSpec(240, TIMED, "Architecture Review"),
    EventSpec(360, TIMED, "Product Demo"),
    EventSpec(480, TIMED, "All Hands Meeting"),
    EventSpec(720, TIMED, "Quarterly Planning"),
    EventSpec(1080, TIMED, "Customer Call", "https://zoom.us/j/123"),
    EventSpec(1440, TIMED, "Board Meeting", "https://meet.google.com/abc"),
    EventSpec(2880, TIMED, "Conference Prep"),
    EventSpec(4320, TIMED, "Offsite Planning", "https://teams.microsoft.com/l/meetup"),
)

# negative offsets cover events that already started or already ended
UTC_EVENTS = (
    EventSpec(-90, TIMED_UTC, "Incident Retro (UTC)"),
    EventSpec(-30, TIMED_UTC, "Deploy Window (UTC)"),
    EventSpec(15, TIMED_UTC, "Code Review (UTC)"),
    EventSpec(300, TIMED_UTC, "Vendor Call (UTC)", "https://zoom.us/j/456"),
)

# offsets in days
ALL_DAY_EVENTS = (
    EventSpec(-1, ALL_DAY, "Release Freeze"),
    EventSpec(0, ALL_DAY, "Company Holiday"),
    EventSpec(1, ALL_DAY, "Team Offsite", "Lake House"),
    EventSpec(7, ALL_DAY, "Hackathon"),
)


class DuplicateEventError(ValueError):
    def __init__(self, duplicates: List[Tuple[EventKind, int]]):
        self.duplicates = duplicates
        pairs = ", ".join(f"{kind.name}@{offset}" for kind, offset in duplicates)
        super().__init__(f"catalog repeats (kind, offset) pairs, UIDs would collide: {pairs}")


def build_catalog(include_utc: bool = True, include_all_day: bool = True) -> List[EventSpec]:
    catalog = list(DEFAULT_EVENTS)
    if include_utc:
        catalog.extend(UTC_EVENTS)
    if include_all_day:
        catalog.extend(ALL_DAY_EVENTS)
    return catalog


def find_duplicates(catalog: Iterable[EventSpec]) -> List[Tuple[EventKind, int]]:
    counts = Counter((spec.kind, spec.offset) for spec in catalog)
    return [key for key, n in counts.items() if n > 1]


def check_unique(catalog: Iterable[EventSpec]) -> None:
    duplicates = find_duplicates(catalog)
    if duplicates:
        raise DuplicateEventError(duplicates)
