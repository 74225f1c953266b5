"""Follow the zellij log and highlight the plugin's lines."""
from __future__ import annotations

import os
import time
from pathlib import Path
from typing import Callable, Iterable, Iterator, TextIO

from .colors import highlight_levels
from .events import PRODUCT


def default_log_path() -> Path:
    tmp = os.environ.get("TMPDIR") or "/tmp"
    return Path(tmp) / f"zellij-{os.getuid()}" / "zellij-log" / "zellij.log"


def follow(path: Path, poll_interval: float = 0.25,
           sleep: Callable[[float], None] = time.sleep) -> Iterator[str]:
    """Yield lines appended to ``path`` after the call, forever.

    Starts at the current end of file, so earlier content is never replayed.
    Only stops when the consumer stops iterating.
    """
    with open(path, "r", encoding="utf-8", errors="replace") as fh:
        fh.seek(0, os.SEEK_END)
        pending = ""
        while True:
            chunk = fh.readline()
            if not chunk:
                sleep(poll_interval)
                continue
            pending += chunk
            if pending.endswith("\n"):
                yield pending
                pending = ""


def filter_lines(lines: Iterable[str], tag: str = PRODUCT, show_all: bool = False) -> Iterator[str]:
    for line in lines:
        if show_all or tag in line:
            yield line


def stream(lines: Iterable[str], out: TextIO, tag: str = PRODUCT, show_all: bool = False) -> int:
    """Write matching lines to ``out`` with colored levels; returns the count."""
    written = 0
    for line in filter_lines(lines, tag, show_all):
        out.write(highlight_levels(line))
        out.flush()
        written += 1
    return written
