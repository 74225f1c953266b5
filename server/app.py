# server/app.py
import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import FileResponse, PlainTextResponse, Response

from feedgen.build_calendar import render
from feedgen.catalog import build_catalog
from feedgen.events import ClockError, capture_now
from feedgen.settings import Settings

log = logging.getLogger(__name__)

ICS_MEDIA_TYPE = "text/calendar"

app = FastAPI(title="zj-cal test feed")


@lru_cache()
def get_settings() -> Settings:
    return Settings.from_env()


# --------------------- routes ---------------------
@app.get("/", response_class=PlainTextResponse)
def root():
    return "zj-cal test feed server is running. Fetch /ics for a fresh feed."


@app.get("/health")
def health():
    return {"ok": True}


@app.get("/ics")
def ics(
    utc: bool = Query(True, description="Include timed UTC events"),
    all_day: bool = Query(True, description="Include all-day events"),
    token: Optional[str] = Query(None, description="Fixed UID token, random when omitted"),
):
    try:
        now = capture_now()
    except ClockError as e:
        log.error("cannot render feed: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
    payload = render(now, build_catalog(include_utc=utc, include_all_day=all_day), token=token)
    return Response(content=payload, media_type=ICS_MEDIA_TYPE)


@app.get("/{filename}")
def fixture(filename: str, settings: Settings = Depends(get_settings)):
    # only bare .ics names from the fixture directory
    name = Path(filename).name
    path = settings.fixture_dir / name
    if name != filename or path.suffix != ".ics" or not path.is_file():
        raise HTTPException(status_code=404, detail=f"no fixture named {filename!r}")
    log.info("serving %s", path)
    return FileResponse(path, media_type=ICS_MEDIA_TYPE)
