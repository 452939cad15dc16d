from collections.abc import Iterable, Sequence

from .core.models import Day, DayStats, WeekStats

__all__ = ["compute_week_stats", "day_stats", "format_min", "percent"]


def percent(done: int, total: int) -> int:
    """Whole percent, halves rounded up."""
    if total == 0:
        return 0
    return (done * 200 + total) // (2 * total)


def _sum_minutes(values: Iterable[int | None]) -> int:
    return sum(v for v in values if v is not None)


def day_stats(day: Day) -> DayStats:
    total = len(day.tasks)
    done = sum(1 for t in day.tasks if t.done)
    return DayStats(
        ymd=day.ymd,
        label=day.label,
        total=total,
        done=done,
        pct=percent(done, total),
        est_sum=_sum_minutes(t.est_min for t in day.tasks),
        act_sum=_sum_minutes(t.act_min for t in day.tasks),
        overruns=sum(1 for t in day.tasks if t.overrun),
    )


def compute_week_stats(days: Sequence[Day]) -> WeekStats:
    per_day = [day_stats(d) for d in days]
    total = sum(s.total for s in per_day)
    done = sum(s.done for s in per_day)
    return WeekStats(
        per_day=per_day,
        total_tasks=total,
        done_tasks=done,
        week_pct=percent(done, total),
        est_total=sum(s.est_sum for s in per_day),
        act_total=sum(s.act_sum for s in per_day),
        overruns_total=sum(s.overruns for s in per_day),
    )


def format_min(minutes: int) -> str:
    """Format minutes as '45m', '2h', '1h 30m'. Non-positive is '0m'."""
    if minutes <= 0:
        return "0m"
    h, m = divmod(minutes, 60)
    if h == 0:
        return f"{m}m"
    if m == 0:
        return f"{h}h"
    return f"{h}h {m}m"
