"""Environment-driven settings for the dev tooling."""
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

DEFAULT_TEST_PORT = 8088
DEFAULT_OUTPUT = "/tmp/zj-cal-test.ics"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


def _level(val: str, default: str = DEFAULT_LOG_LEVEL) -> str:
    # canonical name, so WARN and FATAL also work for uvicorn
    level = logging.getLevelName(val.strip().upper()) if val else None
    if not isinstance(level, int):
        return default
    name = logging.getLevelName(level)
    return name if name in LOG_LEVELS else default


@dataclass
class Settings:
    ics_url: str = ""
    test_port: int = DEFAULT_TEST_PORT
    output_path: Path = Path(DEFAULT_OUTPUT)
    root: Path = field(default_factory=Path.cwd)
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def fixture_dir(self) -> Path:
        return self.output_path.parent

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """Build settings from the environment, after loading ``.env`` if present."""
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True), override=False)
        return cls(
            ics_url=os.getenv("ZJ_CAL_ICS_URL", ""),
            test_port=_int(os.getenv("ZJ_CAL_TEST_PORT", ""), DEFAULT_TEST_PORT),
            output_path=Path(os.getenv("ZJ_CAL_TEST_ICS") or DEFAULT_OUTPUT),
            root=Path(os.getenv("ZJ_CAL_ROOT") or Path.cwd()),
            log_level=_level(os.getenv("LOG_LEVEL", "")),
        )
