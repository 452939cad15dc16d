import time

from mdweek import config

__all__ = ["log"]


def log(msg: str) -> None:
    config.MDWEEK_DIR.mkdir(parents=True, exist_ok=True)
    timestamp = time.strftime("%Y-%m-%d %H:%M:%S")
    entry = f"{timestamp} {msg}\n"
    with config.LOG_FILE.open("a", encoding="utf-8") as f:
        f.write(entry)
