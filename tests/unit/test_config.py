from pathlib import Path

from mdweek import config
from mdweek.config import Config


def test_todo_dir_unset_by_default():
    assert config.get_todo_dir() is None


def test_todo_dir_persists_across_reload(tmp_path):
    folder = tmp_path / "home" / "notes"
    config.set_todo_dir(folder)
    Config.reset()
    assert config.get_todo_dir() == folder
    assert "todo_dir" in config.CONFIG_PATH.read_text()


def test_malformed_yaml_treated_as_empty():
    config.CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    config.CONFIG_PATH.write_text("todo_dir: [unclosed\n")
    Config.reset()
    assert config.get_todo_dir() is None
    assert config.get_poll_interval() == config.DEFAULT_POLL_INTERVAL


def test_non_mapping_yaml_treated_as_empty():
    config.CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    config.CONFIG_PATH.write_text("- just\n- a list\n")
    Config.reset()
    assert config.get_todo_dir() is None


def test_float_settings_default_and_override():
    assert config.get_poll_interval() == 3.0
    assert config.get_focus_debounce() == 0.25
    Config().set("poll_interval", "1.5")
    Config().set("focus_debounce", 2)
    assert config.get_poll_interval() == 1.5
    assert config.get_focus_debounce() == 2.0


def test_bad_float_settings_fall_back():
    Config().set("poll_interval", "soon")
    Config().set("focus_debounce", -1)
    assert config.get_poll_interval() == config.DEFAULT_POLL_INTERVAL
    assert config.get_focus_debounce() == config.DEFAULT_FOCUS_DEBOUNCE


def test_get_todo_dir_returns_path():
    config.set_todo_dir(Path("/tmp/x"))
    assert isinstance(config.get_todo_dir(), Path)
