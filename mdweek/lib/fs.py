"""Filesystem access for day files.

All three operations raise StorageError on failure; read also does so for
a file that is not valid UTF-8. Files are read and written with newline=""
so line endings survive a read-modify-write untouched.
"""

from pathlib import Path

from mdweek.core.errors import StorageError

__all__ = ["exists", "read", "write"]


def exists(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError as e:
        raise StorageError(f"cannot stat {path}: {e.strerror or e}") from e


def read(path: Path) -> str:
    try:
        with path.open(encoding="utf-8", newline="") as f:
            return f.read()
    except OSError as e:
        raise StorageError(f"cannot read {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise StorageError(f"cannot read {path}: not UTF-8 ({e.reason} at byte {e.start})") from e


def write(path: Path, text: str) -> None:
    try:
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(text)
    except OSError as e:
        raise StorageError(f"cannot write {path}: {e.strerror or e}") from e
