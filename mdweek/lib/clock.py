import time
from datetime import date, datetime

__all__ = ["monotonic", "now", "today"]


def now() -> datetime:
    return datetime.now()


def today() -> date:
    return now().date()


def monotonic() -> float:
    return time.monotonic()
