"""
Unit tests: event synthesis

Covers timestamp arithmetic, wire formatting per kind, UID construction and
reference-instant capture.
"""
import math
from datetime import date, datetime, timedelta, timezone

import pytest

from feedgen.events import (
    ClockError, EventKind, EventSpec, capture_now, make_uid, new_token, synthesize,
)

LOCAL_FMT = "%Y%m%dT%H%M%S"


class TestSynthesizeTimed:
    """Local (floating) timed events"""

    def test_zero_offset_starts_now(self, now, token):
        rec = synthesize(now, EventSpec(0, EventKind.TIMED, "Team Standup"), token)
        assert rec.start_text == datetime.fromtimestamp(now).strftime(LOCAL_FMT)
        assert rec.end_text == datetime.fromtimestamp(now + 3600).strftime(LOCAL_FMT)

    def test_offset_is_in_minutes(self, now, token):
        rec = synthesize(now, EventSpec(90, EventKind.TIMED, "Backlog Grooming"), token)
        assert rec.start == datetime.fromtimestamp(now + 90 * 60)

    def test_negative_offset_is_in_the_past(self, now, token):
        rec = synthesize(now, EventSpec(-30, EventKind.TIMED, "Already Started"), token)
        assert rec.start < datetime.fromtimestamp(now) < rec.end

    def test_no_zone_marker(self, now, token):
        rec = synthesize(now, EventSpec(5, EventKind.TIMED, "Quick Sync"), token)
        assert rec.start.tzinfo is None
        assert not rec.start_text.endswith("Z")
        assert not rec.end_text.endswith("Z")

    def test_duration_is_one_hour(self, now, token):
        rec = synthesize(now, EventSpec(45, EventKind.TIMED, "Sprint Planning"), token)
        assert rec.end - rec.start == timedelta(hours=1)

    def test_copies_summary_and_location(self, now, token):
        rec = synthesize(now, EventSpec(1080, EventKind.TIMED, "Customer Call", "https://zoom.us/j/123"), token)
        assert rec.summary == "Customer Call"
        assert rec.location == "https://zoom.us/j/123"


class TestSynthesizeUtc:
    """Timed events pinned to UTC"""

    def test_both_ends_carry_z(self, now, token):
        rec = synthesize(now, EventSpec(15, EventKind.TIMED_UTC, "Code Review (UTC)"), token)
        assert rec.start_text.endswith("Z")
        assert rec.end_text.endswith("Z")

    def test_utc_wall_clock(self, now, token):
        rec = synthesize(now, EventSpec(15, EventKind.TIMED_UTC, "Code Review (UTC)"), token)
        expected = datetime.fromtimestamp(now + 15 * 60, timezone.utc)
        assert rec.start_text == expected.strftime("%Y%m%dT%H%M%SZ")
        assert (rec.end - rec.start).total_seconds() == 3600


class TestSynthesizeAllDay:
    """Date-only events"""

    def test_offset_is_in_days(self, now, token):
        rec = synthesize(now, EventSpec(1, EventKind.ALL_DAY, "Team Offsite"), token)
        assert rec.start == datetime.fromtimestamp(now + 86400).date()
        assert rec.end == rec.start + timedelta(days=1)

    def test_dates_only(self, now, token):
        rec = synthesize(now, EventSpec(0, EventKind.ALL_DAY, "Company Holiday"), token)
        assert type(rec.start) is date and type(rec.end) is date
        assert rec.all_day
        assert len(rec.start_text) == 8 and rec.start_text.isdigit()
        assert "T" not in rec.end_text and "Z" not in rec.end_text


class TestUids:
    """UID construction"""

    def test_format(self, now):
        rec = synthesize(now, EventSpec(30, EventKind.TIMED, "1:1"), "abc")
        assert rec.uid == "test-30-abc@zj-cal"

    def test_kind_tags_keep_namespaces_apart(self, now, token):
        uids = {synthesize(now, EventSpec(0, kind, "x"), token).uid for kind in EventKind}
        assert len(uids) == len(EventKind)

    def test_distinct_offsets_give_distinct_uids(self, now, token):
        specs = [EventSpec(off, EventKind.TIMED, "x") for off in (-5, 0, 5, 60, 4320)]
        uids = [synthesize(now, s, token).uid for s in specs]
        assert len(set(uids)) == len(uids)

    def test_custom_product(self):
        assert make_uid(EventKind.ALL_DAY, -1, "tok", "acme") == "allday--1-tok@acme"

    def test_new_token_varies(self):
        assert new_token() != new_token()
        assert len(new_token()) == 8


class TestCaptureNow:
    """Reading the reference instant"""

    def test_truncates_to_seconds(self):
        assert capture_now(lambda: 1760000000.75) == 1760000000

    def test_reads_clock_once(self):
        calls = []

        def clock():
            calls.append(1)
            return 42

        capture_now(clock)
        assert len(calls) == 1

    @pytest.mark.parametrize("value", [None, "now", math.nan, math.inf, -1, True])
    def test_rejects_invalid_instants(self, value):
        with pytest.raises(ClockError):
            capture_now(lambda: value)

    def test_wraps_clock_failure(self):
        def broken():
            raise OSError("clock unavailable")

        with pytest.raises(ClockError, match="clock unavailable"):
            capture_now(broken)
