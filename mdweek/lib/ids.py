"""Stable task identifiers embedded in checklist lines.

The canonical token is an HTML comment placed last on the line:

    - [ ] Buy milk <!-- tid:ab12cd34 -->

Older files carry a bracket tag instead (``{#t:ab12cd34}``). Both are read;
only the comment form is ever written, and loading a file upgrades every
task line that lacks it.
"""

import re
import secrets
from collections.abc import Sequence

from mdweek.core.models import Task

__all__ = [
    "ensure_id_on_line",
    "extract_id",
    "generate_id",
    "has_canonical_id",
    "id_token",
    "line_has_id",
    "migrate_lines",
    "strip_id_token",
]

_HEX = r"[a-fA-F0-9]{6,32}"
_CANONICAL_RE = re.compile(rf"<!--\s*tid:({_HEX})\s*-->\s*$")
_LEGACY_RE = re.compile(rf"\{{#t:({_HEX})\}}\s*$")
_CANONICAL_STRIP_RE = re.compile(rf"\s*<!--\s*tid:{_HEX}\s*-->\s*$")
_LEGACY_STRIP_RE = re.compile(rf"\s*\{{#t:{_HEX}\}}\s*$")


def generate_id() -> str:
    return secrets.token_hex(4)


def id_token(task_id: str) -> str:
    return f"<!-- tid:{task_id} -->"


def extract_id(text: str) -> str | None:
    m = _CANONICAL_RE.search(text) or _LEGACY_RE.search(text)
    return m.group(1) if m else None


def has_canonical_id(text: str) -> bool:
    return _CANONICAL_RE.search(text) is not None


def strip_id_token(text: str) -> str:
    text = _CANONICAL_STRIP_RE.sub("", text)
    return _LEGACY_STRIP_RE.sub("", text).strip()


def ensure_id_on_line(line: str, task_id: str) -> str:
    """Replace whatever id token the line has with the canonical one. Keeps indentation."""
    indent = line[: len(line) - len(line.lstrip())]
    return f"{indent}{strip_id_token(line)} {id_token(task_id)}".rstrip()


def line_has_id(line: str, task_id: str) -> bool:
    tid = re.escape(task_id)
    return bool(
        re.search(rf"<!--\s*tid:{tid}\s*-->", line) or re.search(rf"\{{#t:{tid}\}}", line)
    )


def migrate_lines(lines: list[str], tasks: Sequence[Task]) -> bool:
    """Upgrade task lines without a canonical id in place. Returns True if any changed.

    A line is only rewritten if it still looks like a task line, so a stale
    line_index never stamps an id onto unrelated text.
    """
    from .codec import match_task_line

    changed = False
    for task in tasks:
        if task.has_id:
            continue
        if not 0 <= task.line_index < len(lines):
            continue
        original = lines[task.line_index]
        if match_task_line(original) is None:
            continue
        eol = "\r" if original.endswith("\r") else ""
        lines[task.line_index] = ensure_id_on_line(original, task.id) + eol
        changed = True
    return changed
