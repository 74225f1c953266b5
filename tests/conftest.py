import pytest

# 2025-10-09T08:53:20Z, well away from any DST switch
FROZEN_NOW = 1760000000
TOKEN = "t0k3n"


@pytest.fixture
def now():
    return FROZEN_NOW


@pytest.fixture
def token():
    return TOKEN


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep developer .env files and ZJ_CAL_* variables out of the tests."""
    monkeypatch.chdir(tmp_path)
    for name in ("ZJ_CAL_ICS_URL", "ZJ_CAL_TEST_PORT", "ZJ_CAL_TEST_ICS", "ZJ_CAL_ROOT",
                 "ZJ_CAL_DEBUG_ICS", "LOG_LEVEL"):
        # setenv first so teardown also removes values loaded from .env files
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def event_blocks(payload: bytes):
    """Split a rendered document into per-event lists of lines."""
    blocks, current = [], None
    for line in payload.decode("utf-8").splitlines():
        if line == "BEGIN:VEVENT":
            current = []
        elif line == "END:VEVENT":
            blocks.append(current)
            current = None
        elif current is not None:
            current.append(line)
    return blocks


def field(block, name):
    for line in block:
        key, _, value = line.partition(":")
        if key.split(";")[0] == name:
            return key, value
    return None
