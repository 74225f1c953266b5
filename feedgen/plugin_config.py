"""Assemble the plugin launch configuration and the zellij command line."""
from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional, Sequence

FIXTURE_NAME = "zj-cal-test.ics"
WASM_TARGET = "wasm32-wasip1"

_ICS_URL_RE = re.compile(r"ics_url=[^,]*")


def local_feed_url(port: int) -> str:
    return f"http://localhost:{port}/{FIXTURE_NAME}"


def build_config(ics_url: str, extra: Optional[str] = None) -> str:
    """Comma-separated ``key=value`` string for ``zellij plugin -c``.

    ``extra`` is appended verbatim; nothing is parsed or validated.
    """
    config = f"ics_url={ics_url}"
    if extra:
        config = f"{config},{extra}"
    return config


def redact(config: str) -> str:
    """Hide the feed URL, which usually embeds a private calendar token."""
    return _ICS_URL_RE.sub("ics_url=[REDACTED]", config)


def plugin_path(root: Path, profile: str = "debug") -> str:
    return f"file:{Path(root) / 'target' / WASM_TARGET / profile / 'zj-cal.wasm'}"


def plugin_command(config: str, path: str, extra_args: Sequence[str] = ()) -> List[str]:
    return ["zellij", "plugin", "-s", "-c", config, *extra_args, "--", path]


def display_command(config: str, path: str, extra_args: Sequence[str] = ()) -> str:
    parts = ["zellij plugin -s -c", f'"{redact(config)}"']
    parts.extend(extra_args)
    parts.extend(["--", f'"{path}"'])
    return " ".join(parts)
