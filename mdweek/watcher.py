import threading
from collections.abc import Callable

from . import config
from .core.errors import MdweekError
from .core.models import Week
from .lib import clock
from .lib.log import log
from .store import WeekStore, content_hash

__all__ = ["ChangeWatcher"]


class ChangeWatcher:
    """Poll the loaded week's files and reload when another program edits one.

    The hash map is owned here and replaced wholesale after every load. Polls
    do nothing while the store is busy or while an input holds focus; a blur
    only re-arms polling after a short debounce so focus hopping between
    fields never lets a reload slip in.
    """

    def __init__(
        self,
        store: WeekStore,
        debounce: float | None = None,
        on_reload: Callable[[Week], None] | None = None,
        monotonic: Callable[[], float] = clock.monotonic,
    ):
        self.store = store
        self.debounce = config.get_focus_debounce() if debounce is None else debounce
        self.on_reload = on_reload
        self._monotonic = monotonic
        self._hashes: dict[str, str] = {}
        self._focused = False
        self._release_at: float | None = None
        store.subscribe(self.record)

    @property
    def hashes(self) -> dict[str, str]:
        return dict(self._hashes)

    def record(self, hashes: dict[str, str]) -> None:
        self._hashes = dict(hashes)

    # ── focus ───────────────────────────────────────────────────────────────

    def focus(self) -> None:
        self._release_at = None
        self._focused = True

    def blur(self) -> None:
        self._release_at = self._monotonic() + self.debounce

    @property
    def editing(self) -> bool:
        if self._focused and self._release_at is not None and self._monotonic() >= self._release_at:
            self._focused = False
            self._release_at = None
        return self._focused

    @property
    def suppressed(self) -> bool:
        return self.store.busy or self.editing

    # ── polling ─────────────────────────────────────────────────────────────

    def _changed(self, ymd: str, text: str) -> bool:
        prev = self._hashes.get(ymd)
        return prev is not None and content_hash(text) != prev

    def poll(self, week: Week | None = None) -> bool:
        """One tick. Returns True if an external change triggered a reload."""
        week = week or self.store.week
        if week is None or self.suppressed:
            return False
        for day in week.days:
            if day.missing:
                continue
            try:
                text = self.store.fs.read(day.file_path)
            except MdweekError as e:
                log(f"[watch] {day.ymd}: read failed: {e}")
                continue
            if self._changed(day.ymd, text):
                log(f"[watch] {day.ymd}: external change, reloading")
                reloaded = self.store.load_week(week.start)
                if self.on_reload is not None:
                    self.on_reload(reloaded)
                return True
        return False

    def run(self, stop: threading.Event, interval: float | None = None) -> None:
        interval = config.get_poll_interval() if interval is None else interval
        log(f"[watch] started, polling every {interval}s")
        while not stop.is_set():
            try:
                self.poll()
            except MdweekError as e:
                log(f"[watch] poll error: {e}")
            stop.wait(interval)
        log("[watch] stopped")
