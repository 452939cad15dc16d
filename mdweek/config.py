from pathlib import Path

import yaml

MDWEEK_DIR = Path.home() / ".mdweek"
CONFIG_PATH = MDWEEK_DIR / "config.yaml"
LOG_FILE = MDWEEK_DIR / "mdweek.log"

DEFAULT_POLL_INTERVAL = 3.0
DEFAULT_FOCUS_DEBOUNCE = 0.25


class Config:
    """Process-wide settings read once from ~/.mdweek/config.yaml.

    A missing, unreadable or non-mapping file means "no settings"; the
    first set() writes a fresh one.
    """

    _instance: "Config | None" = None
    path: Path
    _data: dict[str, object]

    def __new__(cls) -> "Config":
        if cls._instance is None:
            inst = super().__new__(cls)
            inst.path = CONFIG_PATH
            inst._data = inst._read()
            cls._instance = inst
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        cls._instance = None

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError):
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(self._data, f, default_flow_style=False, allow_unicode=True)

    def get(self, key: str, default: object = None) -> object:
        return self._data.get(key, default)

    def set(self, key: str, value: object) -> None:
        self._data[key] = value
        self._write()


def get_todo_dir() -> Path | None:
    """Folder holding the YYYY-MM-DD.md files. None until one is chosen."""
    val = Config().get("todo_dir")
    return Path(str(val)) if val else None


def set_todo_dir(path: Path) -> None:
    Config().set("todo_dir", str(path))


def _positive_float(key: str, default: float) -> float:
    val = Config().get(key)
    if isinstance(val, bool) or not isinstance(val, (int, float, str)):
        return default
    try:
        parsed = float(val)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def get_poll_interval() -> float:
    """Seconds between change-detection polls."""
    return _positive_float("poll_interval", DEFAULT_POLL_INTERVAL)


def get_focus_debounce() -> float:
    """Seconds a blur waits before re-arming the watcher."""
    return _positive_float("focus_debounce", DEFAULT_FOCUS_DEBOUNCE)
