"""Week Store: one markdown file per day, read and patched line by line.

Every mutation re-reads the day file, finds the target line by its id token,
patches that single line, writes the file back and reloads the whole week.
Nothing is patched in memory; the displayed state always comes from disk.
"""

import hashlib
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from types import ModuleType

from .core.errors import (
    BusyError,
    ReconciliationError,
    StateError,
    TaskNotFoundError,
    ValidationError,
)
from .core.models import Day, Task, TaskMeta, Week
from .lib import fs as default_fs
from .lib.codec import (
    build_task_line,
    match_task_line,
    parse_meta,
    parse_minutes,
    parse_tasks,
    toggle_mark,
)
from .lib.dates import to_ymd, week_dates, week_start
from .lib.ids import generate_id, id_token, line_has_id, migrate_lines
from .lib.log import log

__all__ = [
    "DAY_TEMPLATE",
    "WeekStore",
    "content_hash",
    "find_insert_index",
    "find_task",
]

DAY_TEMPLATE = "## Todo\n\n"
TODO_HEADING = "## todo"
FILE_EXT = ".md"

LoadListener = Callable[[dict[str, str]], None]


def content_hash(text: str) -> str:
    return hashlib.sha256(text.encode()).hexdigest()[:16]


def find_insert_index(lines: list[str]) -> int:
    """Line index just past the first '## Todo' heading and its blank lines, else EOF."""
    for i, line in enumerate(lines):
        if line.strip().lower() == TODO_HEADING:
            at = i + 1
            while at < len(lines) and not lines[at].strip():
                at += 1
            return at
    return len(lines)


def _indent(line: str) -> str:
    return line[: len(line) - len(line.lstrip())]


def _eol(line: str) -> str:
    return "\r" if line.endswith("\r") else ""


class WeekStore:
    def __init__(
        self,
        root: Path,
        fs: ModuleType | None = None,
        on_load: LoadListener | None = None,
    ):
        self.root = root
        self.fs = fs or default_fs
        self.week: Week | None = None
        self._busy = False
        self._listeners: list[LoadListener] = []
        if on_load is not None:
            self._listeners.append(on_load)

    @property
    def busy(self) -> bool:
        return self._busy

    def subscribe(self, listener: LoadListener) -> None:
        """Call listener with {ymd: content_hash} after every successful load."""
        self._listeners.append(listener)

    @contextmanager
    def _mutation(self, action: str) -> Iterator[None]:
        if self._busy:
            raise BusyError(action)
        self._busy = True
        try:
            yield
        finally:
            self._busy = False

    def day_path(self, ymd: str) -> Path:
        return self.root / f"{ymd}{FILE_EXT}"

    def day(self, d: date) -> Day:
        """A Day for d, taken from the loaded week when possible."""
        ymd = to_ymd(d)
        if self.week is not None:
            loaded = self.week.day(ymd)
            if loaded is not None:
                return loaded
        path = self.day_path(ymd)
        return Day(date=d, ymd=ymd, file_path=path, missing=not self.fs.exists(path))

    # ── load ────────────────────────────────────────────────────────────────

    def _load_day(self, d: date, hashes: dict[str, str]) -> Day:
        ymd = to_ymd(d)
        path = self.day_path(ymd)
        if not self.fs.exists(path):
            return Day(date=d, ymd=ymd, file_path=path, missing=True)

        md = self.fs.read(path)
        tasks = parse_tasks(md)
        lines = md.split("\n")
        if migrate_lines(lines, tasks):
            md = "\n".join(lines)
            self.fs.write(path, md)
            migrated = sum(1 for t in tasks if not t.has_id)
            log(f"[migrate] {ymd}: stamped {migrated} task id(s)")
            tasks = parse_tasks(md)
        hashes[ymd] = content_hash(md)
        return Day(date=d, ymd=ymd, file_path=path, tasks=tasks, missing=False)

    def load_week(self, anchor: date) -> Week:
        hashes: dict[str, str] = {}
        days = [self._load_day(d, hashes) for d in week_dates(anchor)]
        week = Week(start=week_start(anchor), days=days)
        self.week = week
        for listener in self._listeners:
            listener(dict(hashes))
        return week

    def reload(self) -> Week:
        if self.week is None:
            raise StateError("no week loaded yet")
        return self.load_week(self.week.start)

    # ── helpers ─────────────────────────────────────────────────────────────

    def _read_lines(self, day: Day) -> list[str]:
        return self.fs.read(day.file_path).split("\n")

    def _write_lines(self, day: Day, lines: list[str]) -> None:
        self.fs.write(day.file_path, "\n".join(lines))

    @staticmethod
    def locate(lines: list[str], task_id: str, ymd: str | None = None) -> int:
        for i, line in enumerate(lines):
            if line_has_id(line, task_id):
                return i
        raise TaskNotFoundError(task_id, ymd)

    def _locate_or_log(self, day: Day, lines: list[str], task_id: str) -> int:
        try:
            return self.locate(lines, task_id, day.ymd)
        except ReconciliationError:
            log(f"[reconcile] {day.ymd}: task {task_id} not found")
            raise

    # ── mutations ───────────────────────────────────────────────────────────

    def toggle(self, day: Day, task_id: str) -> None:
        with self._mutation("toggle"):
            lines = self._read_lines(day)
            idx = self._locate_or_log(day, lines, task_id)
            lines[idx] = toggle_mark(lines[idx])
            self._write_lines(day, lines)
            log(f"[toggle] {day.ymd}: {task_id}")
            self.load_week(day.date)

    def add(self, day: Day, text: str) -> str:
        text = text.strip()
        if not text:
            raise ValidationError("task text cannot be empty")
        with self._mutation("add"):
            if not self.fs.exists(day.file_path):
                self.fs.write(day.file_path, DAY_TEMPLATE)
                log(f"[create] {day.ymd}")
            lines = self._read_lines(day)
            task_id = generate_id()
            lines.insert(find_insert_index(lines), f"- [ ] {text} {id_token(task_id)}")
            self._write_lines(day, lines)
            log(f"[add] {day.ymd}: {task_id}")
            self.load_week(day.date)
        return task_id

    def save_meta(
        self,
        day: Day,
        task_id: str,
        est: str | int | None,
        act: str | int | None,
        reason: str = "",
    ) -> None:
        est_min = parse_minutes(est, "est")
        act_min = parse_minutes(act, "act")
        reason = reason.strip()
        if est_min is not None and act_min is not None and act_min > est_min and not reason:
            raise ValidationError("reason is required when act is greater than est.")

        with self._mutation("save"):
            lines = self._read_lines(day)
            idx = self._locate_or_log(day, lines, task_id)
            line = lines[idx]
            m = match_task_line(line)
            if m is None:
                raise ReconciliationError("selected line is not a task anymore")
            meta = TaskMeta(est_min=est_min, act_min=act_min, reason=reason)
            text = parse_meta(m.rest).cleaned_text
            lines[idx] = _indent(line) + build_task_line(m.done, text, meta, task_id) + _eol(line)
            self._write_lines(day, lines)
            log(f"[meta] {day.ymd}: {task_id} est={est_min} act={act_min}")
            self.load_week(day.date)

    def delete(self, day: Day, task_id: str) -> None:
        with self._mutation("delete"):
            lines = self._read_lines(day)
            idx = self._locate_or_log(day, lines, task_id)
            del lines[idx]
            self._write_lines(day, lines)
            log(f"[delete] {day.ymd}: {task_id}")
            self.load_week(day.date)

    def create_day(self, day: Day) -> None:
        with self._mutation("create"):
            if self.fs.exists(day.file_path):
                raise StateError(f"{day.file_path.name} already exists")
            self.fs.write(day.file_path, DAY_TEMPLATE)
            log(f"[create] {day.ymd}")
            self.load_week(day.date)


def find_task(week: Week, task_id: str) -> tuple[Day, Task] | None:
    return next(((d, t) for d, t in week.tasks() if t.id == task_id), None)
