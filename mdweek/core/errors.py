class MdweekError(Exception):
    pass


class ValidationError(MdweekError):
    pass


class ReconciliationError(MdweekError):
    pass


class TaskNotFoundError(ReconciliationError):
    def __init__(self, task_id: str, ymd: str | None = None):
        self.task_id = task_id
        self.ymd = ymd
        where = f" in {ymd}" if ymd else ""
        super().__init__(
            f"could not find task {task_id}{where} (the file may have been edited elsewhere)"
        )


class StorageError(MdweekError):
    pass


class StateError(MdweekError):
    pass


class BusyError(StateError):
    def __init__(self, action: str = ""):
        note = f" ({action})" if action else ""
        super().__init__(f"another change is still being written{note}")


class PolicyError(MdweekError):
    pass


class NotConfiguredError(MdweekError):
    def __init__(self):
        super().__init__("no todo folder chosen yet, run `mdweek dir set <path>`")


class AmbiguousError(MdweekError):
    def __init__(self, ref: str, count: int = 0, sample: list[str] | None = None):
        self.ref = ref
        self.count = count
        self.sample = sample or []
        count_note = f" ({count})" if count else ""
        note = f": {', '.join(self.sample)}" if self.sample else ""
        super().__init__(f"ambiguous ref '{ref}' matches multiple tasks{count_note}{note}")
