from datetime import date
from pathlib import Path

import pytest

from mdweek.core.errors import AmbiguousError
from mdweek.core.models import Day, Task
from mdweek.lib.resolve import find_task


def _pool(*items: tuple[str, str]):
    day = Day(date=date(2026, 10, 12), ymd="2026-10-12", file_path=Path("x.md"))
    return [
        (day, Task(id=tid, line_index=i, text=text, done=False, has_id=True))
        for i, (tid, text) in enumerate(items)
    ]


def test_id_prefix():
    pool = _pool(("ab12cd34", "write report"), ("ff000000", "call bank"))
    assert find_task("ab12", pool)[1].text == "write report"


def test_ambiguous_id_prefix():
    pool = _pool(("ab120000", "one"), ("ab121111", "two"))
    with pytest.raises(AmbiguousError):
        find_task("ab12", pool)


def test_substring():
    pool = _pool(("11111111", "write report"), ("22222222", "call bank"))
    assert find_task("bank", pool)[1].id == "22222222"


def test_exact_text_beats_substring():
    pool = _pool(("11111111", "gym"), ("22222222", "gym bag"))
    assert find_task("gym", pool)[1].id == "11111111"


def test_ambiguous_substring():
    pool = _pool(("11111111", "email joe"), ("22222222", "email ann"))
    with pytest.raises(AmbiguousError, match="email"):
        find_task("email", pool)


def test_fuzzy():
    pool = _pool(("11111111", "write report"))
    assert find_task("wrte report", pool)[1].id == "11111111"


def test_no_match():
    assert find_task("zzz", _pool(("11111111", "a"))) is None
    assert find_task("a", []) is None
