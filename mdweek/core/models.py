import dataclasses
from datetime import date, timedelta
from pathlib import Path

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


@dataclasses.dataclass(frozen=True)
class TaskMeta:
    est_min: int | None = None
    act_min: int | None = None
    reason: str = ""


@dataclasses.dataclass(frozen=True)
class Task:
    id: str
    line_index: int
    text: str
    done: bool
    has_id: bool
    est_min: int | None = None
    act_min: int | None = None
    reason: str = ""

    @property
    def meta(self) -> TaskMeta:
        return TaskMeta(est_min=self.est_min, act_min=self.act_min, reason=self.reason)

    @property
    def overrun(self) -> bool:
        return self.est_min is not None and self.act_min is not None and self.act_min > self.est_min


@dataclasses.dataclass(frozen=True)
class Day:
    date: date
    ymd: str
    file_path: Path
    tasks: list[Task] = dataclasses.field(default_factory=list, hash=False)
    missing: bool = False

    @property
    def label(self) -> str:
        return WEEKDAY_LABELS[self.date.weekday()]


@dataclasses.dataclass(frozen=True)
class Week:
    start: date
    days: list[Day] = dataclasses.field(default_factory=list, hash=False)

    @property
    def end(self) -> date:
        return self.start + timedelta(days=6)

    def day(self, ymd: str) -> Day | None:
        return next((d for d in self.days if d.ymd == ymd), None)

    def tasks(self) -> list[tuple[Day, Task]]:
        return [(d, t) for d in self.days for t in d.tasks]


@dataclasses.dataclass(frozen=True)
class DayStats:
    ymd: str
    label: str
    total: int = 0
    done: int = 0
    pct: int = 0
    est_sum: int = 0
    act_sum: int = 0
    overruns: int = 0


@dataclasses.dataclass(frozen=True)
class WeekStats:
    per_day: list[DayStats] = dataclasses.field(default_factory=list, hash=False)
    total_tasks: int = 0
    done_tasks: int = 0
    week_pct: int = 0
    est_total: int = 0
    act_total: int = 0
    overruns_total: int = 0
