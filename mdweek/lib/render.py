from collections.abc import Sequence

from mdweek.core.models import Day, DayStats, Task, Week, WeekStats
from mdweek.stats import format_min

from . import clock
from .ansi import accent, actual, bold, dim, done, faint, heading, overrun, quiet, today

__all__ = [
    "render_completion_chart",
    "render_day",
    "render_est_act_chart",
    "render_summary",
    "render_task_row",
    "render_week",
]

BAR_WIDTH = 30
_FULL = "█"
_EMPTY = "░"


def _bar(value: int, max_value: int, width: int = BAR_WIDTH) -> str:
    if max_value <= 0:
        return ""
    filled = min(width, max(0, (value * width * 2 + max_value) // (max_value * 2)))
    return _FULL * filled


def _fmt_meta(task: Task) -> str:
    parts = []
    if task.est_min is not None:
        parts.append(quiet(f"est {format_min(task.est_min)}"))
    if task.act_min is not None:
        act = f"act {format_min(task.act_min)}"
        parts.append(overrun(act) if task.overrun else quiet(act))
    if task.reason:
        parts.append(dim(f"✍ {task.reason}"))
    return " " + " ".join(parts) if parts else ""


def render_task_row(task: Task, indent: str = "  ") -> str:
    id_str = f" {faint(f'[{task.id[:8]}]')}"
    if task.done:
        return f"{indent}{done('✓')} {quiet(task.text)}{_fmt_meta(task)}{id_str}"
    return f"{indent}□ {task.text}{_fmt_meta(task)}{id_str}"


def render_day(day: Day, stats: DayStats) -> list[str]:
    is_today = day.date == clock.today()
    label = f"{day.label} {day.date.strftime('%d/%m')}"
    title = bold(today(label)) if is_today else bold(heading(label))
    if day.missing:
        hint = f"mdweek create {day.label.lower()}"
        return [f"\n{title}  {dim('no file')} {faint('· ' + hint)}"]

    counts = f"{stats.done}/{stats.total}"
    pct = done(f"{stats.pct}%") if stats.total and stats.pct == 100 else f"{stats.pct}%"
    minutes = ""
    if stats.est_sum or stats.act_sum:
        est, act = format_min(stats.est_sum), format_min(stats.act_sum)
        minutes = f"  {faint('est')} {est} {faint('act')} {act}"
    lines = [f"\n{title}  {counts} {pct}{minutes}"]
    if not day.tasks:
        lines.append(f"  {quiet('nothing yet.')}")
        return lines
    lines.extend(render_task_row(t) for t in day.tasks)
    return lines


def render_week(week: Week, stats: WeekStats) -> str:
    title = bold(heading("WEEK OF " + week.start.isoformat()))
    header = f"{title} {faint('→ ' + week.end.isoformat())}"
    lines = [header]
    for day, day_stat in zip(week.days, stats.per_day, strict=True):
        lines.extend(render_day(day, day_stat))
    return "\n".join(lines)


def render_summary(stats: WeekStats, week: Week) -> list[str]:
    lines = [f"{bold(heading('WEEKLY SUMMARY'))}  {bold(accent(str(stats.week_pct) + '%'))}"]
    lines.append(faint(f"{week.start.isoformat()} ~ {week.end.isoformat()}"))
    overruns = str(stats.overruns_total)
    lines.append(
        f"{bold(str(stats.done_tasks))} / {stats.total_tasks} done  "
        f"{bold(format_min(stats.est_total))} est  "
        f"{bold(format_min(stats.act_total))} act  "
        f"{bold(overrun(overruns) if stats.overruns_total else overruns)} overruns"
    )
    return lines


def render_completion_chart(per_day: Sequence[DayStats], width: int = BAR_WIDTH) -> list[str]:
    lines = [bold("Completion % (Mon–Sun)")]
    for s in per_day:
        bar = _bar(s.pct, 100, width)
        pad = _EMPTY * (width - len(bar))
        lines.append(f"  {s.label} {bar}{faint(pad)} {s.pct}%")
    return lines


def render_est_act_chart(per_day: Sequence[DayStats], width: int = BAR_WIDTH) -> list[str]:
    max_val = max([1, *(s.est_sum for s in per_day), *(s.act_sum for s in per_day)])
    lines = [f"{bold('Planned vs Actual minutes')}  {_FULL} est  {actual(_FULL)} act"]
    for s in per_day:
        est_bar = _bar(s.est_sum, max_val, width)
        act_bar = _bar(s.act_sum, max_val, width)
        lines.append(f"  {s.label} {est_bar} {faint(format_min(s.est_sum))}")
        lines.append(f"      {actual(act_bar)} {faint(format_min(s.act_sum))}")
    return lines
