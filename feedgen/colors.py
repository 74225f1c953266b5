"""ANSI color helpers for terminal output.

Everything here is a plain string transform, usable both for status lines
(``cyan("Serving:", bold=True)``) and for rewriting streamed log lines
(:func:`highlight_levels`).
"""
from __future__ import annotations

import re

RST = 0
BLD = 1

BLK = 30
RED = 31
GRN = 32
YLW = 33
BLU = 34
MAG = 35
CYN = 36
WHT = 37
GRY = 90

BRED = 91
BGRN = 92
BYLW = 93
BBLU = 94
BMAG = 95
BCYN = 96
BWHT = 97


def esc(code: int) -> str:
    """Raw escape sequence for ``code``."""
    return f"\033[{code}m"


RESET = esc(RST)


def color(text: str, code: int, bold: bool = False) -> str:
    prefix = "1;" if bold else ""
    return f"\033[{prefix}{code}m{text}{RESET}"


def bold(text: str) -> str:
    return color(text, BLD)


def black(text: str, bold: bool = False) -> str:
    return color(text, BLK, bold)


def red(text: str, bold: bool = False) -> str:
    return color(text, RED, bold)


def green(text: str, bold: bool = False) -> str:
    return color(text, GRN, bold)


def yellow(text: str, bold: bool = False) -> str:
    return color(text, YLW, bold)


def blue(text: str, bold: bool = False) -> str:
    return color(text, BLU, bold)


def magenta(text: str, bold: bool = False) -> str:
    return color(text, MAG, bold)


def cyan(text: str, bold: bool = False) -> str:
    return color(text, CYN, bold)


def white(text: str, bold: bool = False) -> str:
    return color(text, WHT, bold)


def gray(text: str, bold: bool = False) -> str:
    return color(text, GRY, bold)


def bred(text: str, bold: bool = False) -> str:
    return color(text, BRED, bold)


def bgreen(text: str, bold: bool = False) -> str:
    return color(text, BGRN, bold)


def byellow(text: str, bold: bool = False) -> str:
    return color(text, BYLW, bold)


def bblue(text: str, bold: bool = False) -> str:
    return color(text, BBLU, bold)


def bmagenta(text: str, bold: bool = False) -> str:
    return color(text, BMAG, bold)


def bcyan(text: str, bold: bool = False) -> str:
    return color(text, BCYN, bold)


def bwhite(text: str, bold: bool = False) -> str:
    return color(text, BWHT, bold)


LEVEL_CODES = {
    "ERROR": RED,
    "WARN": YLW,
    "INFO": GRN,
    "DEBUG": CYN,
}
_LEVEL_RE = re.compile("|".join(LEVEL_CODES))


def highlight_levels(line: str) -> str:
    """Wrap every log-level keyword in ``line`` with its color."""
    return _LEVEL_RE.sub(lambda m: f"{esc(LEVEL_CODES[m.group(0)])}{m.group(0)}{RESET}", line)
