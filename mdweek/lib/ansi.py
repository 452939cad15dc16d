"""Terminal styling for the week view.

Styles are named for what they mark on screen rather than by hue. Each role
is importable as a function (``from mdweek.lib.ansi import done``) and reads
the active palette at call time, so switching to PLAIN affects output that is
already wired up.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass, fields

_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*m")


@dataclass(frozen=True)
class Palette:
    done: str = "\033[38;5;114m"
    overrun: str = "\033[38;5;209m"
    today: str = "\033[38;5;220m"
    heading: str = "\033[38;5;252m"
    accent: str = "\033[38;5;117m"
    quiet: str = "\033[38;5;245m"
    faint: str = "\033[90m"
    # bars for actual minutes, next to the default-colored estimate bars
    actual: str = "\033[38;5;103m"
    bold: str = "\033[1m"
    dim: str = "\033[2m"
    reset: str = "\033[0m"


COLOR = Palette()
PLAIN = Palette(**{f.name: "" for f in fields(Palette)})

_ROLES = frozenset(f.name for f in fields(Palette)) - {"reset"}
_palette: Palette = COLOR


def use(palette: Palette) -> None:
    global _palette
    _palette = palette


def active() -> Palette:
    return _palette


def paint(role: str, text: str) -> str:
    if role not in _ROLES:
        raise ValueError(f"unknown style role: {role}")
    return f"{getattr(_palette, role)}{text}{_palette.reset}"


def __getattr__(name: str) -> Callable[[str], str]:
    if name not in _ROLES:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    def styled(text: str) -> str:
        return paint(name, text)

    styled.__name__ = name
    return styled


def strip(text: str) -> str:
    return _ESCAPE_RE.sub("", text)
