import logging
from pathlib import Path
from typing import List, Optional, Sequence

from icalendar import Calendar, Event

from .catalog import check_unique
from .events import PRODUCT, EventRecord, EventSpec, new_token, synthesize

log = logging.getLogger(__name__)


def prodid_for(product: str = PRODUCT) -> str:
    return f"-//{product}//Test Calendar//EN"


def build_events(now: int, catalog: Sequence[EventSpec], token: str,
                 product: str = PRODUCT) -> List[EventRecord]:
    # catalog order, not chronological
    return [synthesize(now, spec, token, product) for spec in catalog]


def build_ics(records: Sequence[EventRecord], product: str = PRODUCT) -> bytes:
    cal = Calendar()
    cal.add("version", "2.0")
    cal.add("prodid", prodid_for(product))
    for rec in records:
        ev = Event()
        ev.add("uid", rec.uid)
        ev.add("dtstart", rec.start)
        ev.add("dtend", rec.end)
        ev.add("summary", rec.summary)
        if rec.location:
            ev.add("location", rec.location)
        cal.add_component(ev)
    # insertion order is the wire order the plugin's parser expects
    return cal.to_ical(sorted=False)


def render(now: int, catalog: Sequence[EventSpec], token: Optional[str] = None,
           product: str = PRODUCT, check_duplicates: bool = True) -> bytes:
    if check_duplicates:
        check_unique(catalog)
    token = token or new_token()
    records = build_events(now, catalog, token, product)
    log.debug("rendering %d events (now=%d, token=%s)", len(records), now, token)
    return build_ics(records, product)


def write_calendar(path: Path, payload: bytes) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(payload)
    return path
