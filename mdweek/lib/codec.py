"""Parse and build markdown checklist lines.

A task line is ``- [ ] text`` (``x``/``X`` for done) optionally followed by
metadata and an id token, always written in this order:

    - [ ] Buy milk ⏳est:30 ⌛act:45 ✍️reason:ran late <!-- tid:ab12cd34 -->

The scanner below works on whitespace-delimited words rather than regexes so
the token rules stay explicit: est/act are single words, the reason runs to
the end of the line.
"""

from typing import NamedTuple

from mdweek.core.errors import ReconciliationError, ValidationError
from mdweek.core.models import Task, TaskMeta

from .ids import extract_id, generate_id, has_canonical_id, id_token, strip_id_token

__all__ = [
    "ACT_MARKER",
    "EST_MARKER",
    "REASON_MARKER",
    "ParsedMeta",
    "TaskLine",
    "build_task_line",
    "match_task_line",
    "parse_line",
    "parse_meta",
    "parse_minutes",
    "parse_tasks",
    "toggle_mark",
]

EST_MARKER = "⏳est:"
ACT_MARKER = "⌛act:"
REASON_MARKER = "✍️reason:"

# Plain markers are accepted on read; the emoji forms are what gets written.
_EST_MARKERS = (EST_MARKER, "est:")
_ACT_MARKERS = (ACT_MARKER, "act:")
_REASON_MARKERS = (REASON_MARKER, "✍reason:", "reason:")
_MARKS = (" ", "x", "X")


class TaskLine(NamedTuple):
    head: str
    mark: str
    tail: str
    rest: str

    @property
    def done(self) -> bool:
        return self.mark.lower() == "x"


class ParsedMeta(NamedTuple):
    est_min: int | None
    act_min: int | None
    reason: str
    cleaned_text: str


def _skip_space(line: str, i: int) -> int:
    while i < len(line) and line[i].isspace():
        i += 1
    return i


def match_task_line(line: str) -> TaskLine | None:
    """Recognize ``<ws>-<ws>[m]<ws+>rest``. Returns None for anything else."""
    i = _skip_space(line, 0)
    if i >= len(line) or line[i] != "-":
        return None
    i = _skip_space(line, i + 1)
    if line[i : i + 1] != "[" or line[i + 2 : i + 3] != "]":
        return None
    mark = line[i + 1]
    if mark not in _MARKS:
        return None
    j = _skip_space(line, i + 3)
    if j == i + 3:
        return None
    return TaskLine(head=line[: i + 1], mark=mark, tail=line[i + 2 :], rest=line[j:].strip())


def _runs(text: str) -> list[str]:
    """Split into alternating whitespace and non-whitespace runs, losslessly."""
    runs: list[str] = []
    start = 0
    for i in range(1, len(text) + 1):
        if i == len(text) or text[i].isspace() != text[start].isspace():
            runs.append(text[start:i])
            start = i
    return runs


def _to_minutes(raw: str) -> int | None:
    if raw.isascii() and raw.isdigit():
        return int(raw)
    return None


def _marker_value(word: str, markers: tuple[str, ...]) -> str | None:
    for marker in markers:
        if word.startswith(marker) and len(word) > len(marker):
            return word[len(marker) :]
    return None


def _take_minutes(text: str, markers: tuple[str, ...]) -> tuple[int | None, str]:
    """Pull every ``<marker><value>`` word out of text; the first one sets the value."""
    value: int | None = None
    seen = False
    out: list[str] = []
    for run in _runs(text):
        raw = _marker_value(run, markers)
        if raw is None:
            out.append(run)
            continue
        if not seen:
            seen = True
            value = _to_minutes(raw)
        out.append(" ")
    return value, "".join(out)


def _find_reason(text: str) -> tuple[int, int] | None:
    for i in range(len(text)):
        if i and not text[i - 1].isspace():
            continue
        for marker in _REASON_MARKERS:
            if text.startswith(marker, i):
                return i, i + len(marker)
    return None


def parse_meta(text: str) -> ParsedMeta:
    cleaned = strip_id_token(text)

    # The reason runs to end of line, so est/act words inside it stay in it.
    reason = ""
    found = _find_reason(cleaned)
    if found:
        start, body = found
        reason = cleaned[body:].strip()
        cleaned = cleaned[:start]

    est_min, cleaned = _take_minutes(cleaned, _EST_MARKERS)
    act_min, cleaned = _take_minutes(cleaned, _ACT_MARKERS)

    return ParsedMeta(est_min, act_min, reason, " ".join(cleaned.split()))


def parse_line(line: str, line_index: int) -> Task | None:
    m = match_task_line(line)
    if m is None:
        return None
    existing = extract_id(m.rest)
    parsed = parse_meta(m.rest)
    return Task(
        id=existing or generate_id(),
        line_index=line_index,
        text=parsed.cleaned_text,
        done=m.done,
        has_id=has_canonical_id(m.rest),
        est_min=parsed.est_min,
        act_min=parsed.act_min,
        reason=parsed.reason,
    )


def parse_tasks(markdown: str) -> list[Task]:
    tasks = []
    for i, line in enumerate(markdown.split("\n")):
        task = parse_line(line, i)
        if task is not None:
            tasks.append(task)
    return tasks


def build_task_line(done: bool, text: str, meta: TaskMeta, task_id: str) -> str:
    parts = ["- [x]" if done else "- [ ]"]
    base = parse_meta(text).cleaned_text
    if base:
        parts.append(base)
    if meta.est_min is not None:
        parts.append(f"{EST_MARKER}{meta.est_min}")
    if meta.act_min is not None:
        parts.append(f"{ACT_MARKER}{meta.act_min}")
    reason = meta.reason.strip()
    if reason:
        parts.append(f"{REASON_MARKER}{reason}")
    parts.append(id_token(task_id))
    return " ".join(parts).rstrip()


def toggle_mark(line: str) -> str:
    """Flip the checkbox, leaving every other character of the line alone."""
    m = match_task_line(line)
    if m is None:
        raise ReconciliationError("selected line is not a task anymore")
    return f"{m.head}{' ' if m.done else 'x'}{m.tail}"


def parse_minutes(raw: str | int | None, field: str = "value") -> int | None:
    """Parse a minutes draft: blank -> None, digits -> int, anything else is invalid."""
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ValidationError(f"{field} must be a non-negative integer.")
    if isinstance(raw, int):
        if raw < 0:
            raise ValidationError(f"{field} must be a non-negative integer.")
        return raw
    value = raw.strip()
    if not value:
        return None
    minutes = _to_minutes(value)
    if minutes is None:
        raise ValidationError(f"{field} must be a non-negative integer.")
    return minutes
