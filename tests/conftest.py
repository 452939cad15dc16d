import contextlib
import dataclasses
import io
from datetime import date, datetime
from pathlib import Path

import fncli
import pytest

from mdweek import config
from mdweek.config import Config
from mdweek.core.errors import MdweekError
from mdweek.lib import clock

# Wednesday
TODAY = date(2026, 10, 14)

_discovered = False


@dataclasses.dataclass
class CLIResult:
    exit_code: int
    stdout: str
    stderr: str


class FnCLIRunner:
    """Run `mdweek ...` in-process, capturing output the way cli.main reports it."""

    def invoke(self, args: list[str]) -> CLIResult:
        global _discovered
        if not _discovered:
            fncli.autodiscover(Path(config.__file__).parent, "mdweek")
            _discovered = True

        out, err = io.StringIO(), io.StringIO()
        code = 0
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            try:
                code = fncli.dispatch(["mdweek", *args]) or 0
            except MdweekError as e:
                err.write(f"{e}\n")
                code = 1
            except SystemExit as e:
                code = e.code if isinstance(e.code, int) else 1
        return CLIResult(exit_code=code, stdout=out.getvalue(), stderr=err.getvalue())


@pytest.fixture(autouse=True)
def tmp_mdweek_dir(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    state = home / ".mdweek"
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    monkeypatch.setattr(config, "MDWEEK_DIR", state)
    monkeypatch.setattr(config, "CONFIG_PATH", state / "config.yaml")
    monkeypatch.setattr(config, "LOG_FILE", state / "mdweek.log")
    Config.reset()
    yield state
    Config.reset()


@pytest.fixture(autouse=True)
def fixed_today(monkeypatch):
    monkeypatch.setattr(clock, "now", lambda: datetime.combine(TODAY, datetime.min.time()))
    return TODAY


@pytest.fixture
def todo_dir(tmp_mdweek_dir):
    folder = tmp_mdweek_dir.parent / "notes" / "daily"
    folder.mkdir(parents=True)
    config.set_todo_dir(folder)
    return folder


@pytest.fixture
def write_day(todo_dir):
    def _write(ymd: str, text: str) -> Path:
        path = todo_dir / f"{ymd}.md"
        path.write_text(text, encoding="utf-8", newline="")
        return path

    return _write


def read_day(path: Path) -> str:
    with path.open(encoding="utf-8", newline="") as f:
        return f.read()
