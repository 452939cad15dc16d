import signal
import sys
import threading
from collections.abc import Callable
from datetime import date

from fncli import cli

from . import config
from .core.errors import NotConfiguredError, ReconciliationError, ValidationError
from .core.models import Day, Task, Week
from .lib import clock
from .lib.dates import parse_day, shift_weeks
from .lib.errors import echo, exit_error
from .lib.render import (
    render_completion_chart,
    render_est_act_chart,
    render_summary,
    render_task_row,
    render_week,
)
from .lib.resolve import find_task
from .stats import compute_week_stats
from .store import WeekStore
from .watcher import ChangeWatcher

__all__ = ["open_store", "render_full", "resolve_anchor"]


def open_store() -> WeekStore:
    root = config.get_todo_dir()
    if root is None:
        raise NotConfiguredError
    return WeekStore(root)


def resolve_anchor(at: str | None = None, offset: int = 0) -> date:
    anchor = clock.today()
    if at:
        parsed = parse_day(at)
        if parsed is None:
            raise ValidationError(f"unrecognized date '{at}'")
        anchor = parsed
    return shift_weeks(anchor, offset)


def _resolve_day(store: WeekStore, ref: str, anchor: date) -> Day:
    d = parse_day(ref, anchor)
    if d is None:
        raise ValidationError(f"unrecognized day '{ref}'")
    store.load_week(d)
    return store.day(d)


def _resolve_task(store: WeekStore, ref: list[str], anchor: date) -> tuple[Day, Task]:
    query = " ".join(ref)
    week = store.load_week(anchor)
    found = find_task(query, week.tasks())
    if found is None:
        raise ValidationError(f"no task matching '{query}' in week of {week.start.isoformat()}")
    return found


def _charts(week: Week) -> list[str]:
    stats = compute_week_stats(week.days)
    lines = render_summary(stats, week)
    lines.append("")
    lines.extend(render_completion_chart(stats.per_day))
    lines.append("")
    lines.extend(render_est_act_chart(stats.per_day))
    return lines


def render_full(week: Week) -> str:
    stats = compute_week_stats(week.days)
    return "\n".join([*_charts(week), "", render_week(week, stats)])


def _reconciled(store: WeekStore, anchor: date, action: Callable[[], None]) -> None:
    """Run a mutation; on a reconciliation miss show the reloaded week and fail."""
    try:
        action()
    except ReconciliationError as e:
        print(render_full(store.load_week(anchor)))
        exit_error(f"{e}. reloaded from disk.")


def _show_task(store: WeekStore, task_id: str, verb: str) -> None:
    week = store.week
    entry = next(((d, t) for d, t in week.tasks() if t.id == task_id), None) if week else None
    if entry is None:
        echo(verb)
        return
    day, task = entry
    echo(f"{verb} {day.label.lower()}:")
    echo(render_task_row(task))


@cli("mdweek")
def show(at: str | None = None, offset: int = 0) -> None:
    """Week grid with summary and charts"""
    store = open_store()
    print(render_full(store.load_week(resolve_anchor(at, offset))))


@cli("mdweek")
def week(at: str | None = None, offset: int = 0) -> None:
    """Week grid only (--offset -1 for last week)"""
    store = open_store()
    loaded = store.load_week(resolve_anchor(at, offset))
    print(render_week(loaded, compute_week_stats(loaded.days)))


@cli("mdweek")
def stats(at: str | None = None, offset: int = 0) -> None:
    """Weekly summary and charts"""
    store = open_store()
    print("\n".join(_charts(store.load_week(resolve_anchor(at, offset)))))


@cli("mdweek", flags={"text": []})
def add(day: str, text: list[str], at: str | None = None) -> None:
    """Add a task to a day: `mdweek add wed "write report"`"""
    store = open_store()
    target = _resolve_day(store, day, resolve_anchor(at))
    task_id = store.add(target, " ".join(text))
    _show_task(store, task_id, "added")


@cli("mdweek", flags={"ref": []})
def check(ref: list[str], at: str | None = None) -> None:
    """Toggle a task done/undone by id prefix or text"""
    store = open_store()
    anchor = resolve_anchor(at)
    day, task = _resolve_task(store, ref, anchor)
    _reconciled(store, anchor, lambda: store.toggle(day, task.id))
    _show_task(store, task.id, "toggled")


@cli("mdweek", flags={"ref": []})
def rm(ref: list[str], at: str | None = None) -> None:
    """Delete a task by id prefix or text"""
    store = open_store()
    anchor = resolve_anchor(at)
    day, task = _resolve_task(store, ref, anchor)
    _reconciled(store, anchor, lambda: store.delete(day, task.id))
    echo(f"removed: {task.text}")


@cli(
    "mdweek",
    flags={
        "ref": [],
        "est": ["-e", "--est"],
        "act": ["-a", "--act"],
        "reason": ["-r", "--reason"],
    },
)
def meta(
    ref: list[str],
    est: str | None = None,
    act: str | None = None,
    reason: str | None = None,
    at: str | None = None,
) -> None:
    """Set estimate/actual minutes and overrun reason (omitted fields are kept, "" clears)"""
    store = open_store()
    anchor = resolve_anchor(at)
    day, task = _resolve_task(store, ref, anchor)
    new_est = task.est_min if est is None else est
    new_act = task.act_min if act is None else act
    new_reason = task.reason if reason is None else reason
    _reconciled(
        store, anchor, lambda: store.save_meta(day, task.id, new_est, new_act, new_reason)
    )
    _show_task(store, task.id, "saved")


@cli("mdweek")
def create(day: str, at: str | None = None) -> None:
    """Create the file for a missing day"""
    store = open_store()
    target = _resolve_day(store, day, resolve_anchor(at))
    store.create_day(target)
    echo(f"created: {target.file_path}")


@cli("mdweek")
def watch(at: str | None = None, interval: float = 0.0) -> None:
    """Show the week and redraw whenever a day file changes on disk"""
    store = open_store()

    def redraw(loaded: Week) -> None:
        sys.stdout.write("\033[2J\033[H")
        print(render_full(loaded))
        sys.stdout.flush()

    watcher = ChangeWatcher(store, on_reload=redraw)
    redraw(store.load_week(resolve_anchor(at)))

    stop = threading.Event()

    def handle_signal(signum, frame):
        stop.set()

    signal.signal(signal.SIGTERM, handle_signal)
    signal.signal(signal.SIGINT, handle_signal)
    watcher.run(stop, interval or None)
