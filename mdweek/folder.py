from pathlib import Path

from fncli import cli

from . import config
from .core.errors import PolicyError
from .lib.errors import echo
from .lib.log import log

__all__ = ["choose_folder", "normalize_folder"]


def normalize_folder(raw: str) -> Path:
    value = raw.strip()
    if not value:
        raise PolicyError("no folder selected")
    stripped = value.rstrip("/") or "/"
    return Path(stripped).expanduser().resolve()


def choose_folder(raw: str, home: Path | None = None) -> Path:
    """Validate and persist the todo folder. Only folders inside home are allowed.

    Nothing is persisted when the selection is rejected.
    """
    home = (home or Path.home()).resolve()
    folder = normalize_folder(raw)
    if folder != home and home not in folder.parents:
        raise PolicyError(
            f"Please choose a folder inside your home directory.\n"
            f"Selected: {raw.strip()}\n\n"
            f"Tip: pick something like {home}/notes/todo"
        )
    if not folder.is_dir():
        raise PolicyError(f"not a directory: {folder}")
    config.set_todo_dir(folder)
    log(f"[config] todo_dir = {folder}")
    return folder


@cli("mdweek dir", name="show", default=True)
def show() -> None:
    """Show the todo folder"""
    folder = config.get_todo_dir()
    if folder is None:
        echo("no folder chosen, run `mdweek dir set <path>`")
        return
    echo(str(folder))


@cli("mdweek dir", name="set")
def set_dir(path: str) -> None:
    """Choose the folder holding YYYY-MM-DD.md files (must be inside $HOME)"""
    echo(f"todo folder: {choose_folder(path)}")
