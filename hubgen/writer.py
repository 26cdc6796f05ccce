"""Persist generated source with backup-then-replace semantics."""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

from .logging import get_logger

BACKUP_SUFFIX = ".bak"

_LOGGER = get_logger("writer")


def backup_path_for(path: Path) -> Path:
    return path.with_name(path.name + BACKUP_SUFFIX)


def write_output(path: Path, text: str) -> Path:
    """Atomically replace ``path`` with ``text``.

    An existing file is copied aside first and restored if the replacement
    fails; the copy is removed once the new content is in place.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    backup = backup_path_for(path)
    had_original = path.exists()
    if had_original:
        _LOGGER.debug("Backing up %s to %s", path, backup)
        backup.unlink(missing_ok=True)
        shutil.copy2(path, backup)

    fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            handle.write(text)
        _LOGGER.debug("Writing source to %s", path)
        os.replace(temp_name, path)
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        if had_original and backup.exists():
            _LOGGER.warning("Write to %s failed; restoring previous version", path)
            os.replace(backup, path)
        raise

    if had_original:
        backup.unlink(missing_ok=True)
    return path


__all__ = ["BACKUP_SUFFIX", "backup_path_for", "write_output"]
