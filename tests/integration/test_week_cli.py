from mdweek import config
from mdweek.lib.ansi import strip
from tests.conftest import FnCLIRunner, read_day

runner = FnCLIRunner()

MON = "2026-10-12"
WED = "2026-10-14"


def test_not_configured():
    result = runner.invoke(["show"])
    assert result.exit_code == 1
    assert "mdweek dir set" in result.stderr


def test_dir_set_and_show(tmp_mdweek_dir):
    folder = tmp_mdweek_dir.parent / "daily"
    folder.mkdir()

    result = runner.invoke(["dir", "set", str(folder)])
    assert result.exit_code == 0
    assert config.get_todo_dir() == folder.resolve()

    result = runner.invoke(["dir", "show"])
    assert result.exit_code == 0
    assert str(folder.resolve()) in result.stdout


def test_dir_set_outside_home_fails(tmp_path):
    outside = tmp_path / "outside"
    outside.mkdir()
    result = runner.invoke(["dir", "set", str(outside)])
    assert result.exit_code == 1
    assert "inside your home directory" in result.stderr
    assert config.get_todo_dir() is None


def test_show_renders_week_and_charts(write_day):
    write_day(WED, "## Todo\n\n- [x] ship ⏳est:30 ⌛act:45 ✍️reason:review <!-- tid:ab12cd34 -->\n")
    result = runner.invoke(["show"])
    out = strip(result.stdout)
    assert result.exit_code == 0
    assert "WEEK OF 2026-10-12" in out
    assert "WEEKLY SUMMARY  100%" in out
    assert "Completion %" in out
    assert "Planned vs Actual minutes" in out
    assert "✓ ship est 30m act 45m ✍ review [ab12cd34]" in out
    assert "no file" in out


def test_week_offset(todo_dir):
    result = runner.invoke(["week", "--at", "2026-10-07"])
    assert result.exit_code == 0
    assert "WEEK OF 2026-10-05" in strip(result.stdout)


def test_add_check_meta_rm(write_day):
    path = write_day(WED, "## Todo\n\n- [ ] old <!-- tid:aaaaaaaa -->\n")

    result = runner.invoke(["add", "wed", "write", "report"])
    assert result.exit_code == 0
    assert "added wed:" in strip(result.stdout)
    lines = read_day(path).split("\n")
    assert lines[2].startswith("- [ ] write report <!-- tid:")

    result = runner.invoke(["check", "write", "report"])
    assert result.exit_code == 0
    assert read_day(path).split("\n")[2].startswith("- [x] write report")

    result = runner.invoke(["meta", "write report", "--est", "30", "--act", "20"])
    assert result.exit_code == 0
    assert "⏳est:30 ⌛act:20" in read_day(path)

    result = runner.invoke(["meta", "write report", "--act", "45", "--reason", "scope grew"])
    assert result.exit_code == 0
    assert "- [x] write report ⏳est:30 ⌛act:45 ✍️reason:scope grew <!-- tid:" in read_day(path)

    result = runner.invoke(["rm", "aaaaaaaa"])
    assert result.exit_code == 0
    assert "removed: old" in result.stdout
    assert "old" not in read_day(path)


def test_meta_overrun_without_reason_fails(write_day):
    path = write_day(WED, "- [ ] r <!-- tid:aaaaaaaa -->\n")
    result = runner.invoke(["meta", "aaaa", "--est", "10", "--act", "20"])
    assert result.exit_code == 1
    assert "reason is required" in result.stderr
    assert read_day(path) == "- [ ] r <!-- tid:aaaaaaaa -->\n"


def test_meta_rejects_non_integer(write_day):
    write_day(WED, "- [ ] r <!-- tid:aaaaaaaa -->\n")
    result = runner.invoke(["meta", "aaaa", "--est", "1.5"])
    assert result.exit_code == 1
    assert "non-negative integer" in result.stderr


def test_unknown_task(todo_dir):
    result = runner.invoke(["check", "nothing", "here"])
    assert result.exit_code == 1
    assert "no task matching" in result.stderr


def test_create_missing_day(todo_dir):
    result = runner.invoke(["create", "mon"])
    assert result.exit_code == 0
    assert read_day(todo_dir / f"{MON}.md") == "## Todo\n\n"

    result = runner.invoke(["create", "mon"])
    assert result.exit_code == 1


def test_add_rejects_unknown_day(todo_dir):
    result = runner.invoke(["add", "someday", "x"])
    assert result.exit_code == 1
    assert "unrecognized day" in result.stderr


def test_stats_only(write_day):
    write_day(WED, "- [ ] a <!-- tid:aaaaaaaa -->\n- [x] b <!-- tid:bbbbbbbb -->\n")
    out = strip(runner.invoke(["stats"]).stdout)
    assert "WEEKLY SUMMARY  50%" in out
    assert "1 / 2 done" in out
    assert "WEEK OF" not in out


def test_meta_short_flags(write_day):
    path = write_day(WED, "- [ ] r <!-- tid:aaaaaaaa -->\n")
    result = runner.invoke(["meta", "aaaa", "-e", "10", "-a", "20", "-r", "slow review"])
    assert result.exit_code == 0
    assert read_day(path) == (
        "- [ ] r ⏳est:10 ⌛act:20 ✍️reason:slow review <!-- tid:aaaaaaaa -->\n"
    )


def test_non_utf8_day_file_reports_error(todo_dir):
    (todo_dir / "2026-10-13.md").write_bytes(b"- [ ] caf\xe9 <!-- tid:ab12cd34 -->")
    result = runner.invoke(["show"])
    assert result.exit_code == 1
    assert "not UTF-8" in result.stderr
