"""Write source files over the destination."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Sequence

from ._types import ChangeReport, FileEntry, PathEntry
from .config import FILE_MODE
from .exceptions import IOFailure


def _existing_mode(full: str) -> int | None:
    """Permission bits of *full*, or ``None`` if it does not exist."""
    try:
        st = os.stat(full)
    except (FileNotFoundError, NotADirectoryError):
        return None
    except OSError as exc:
        raise IOFailure("stat", full, exc) from exc
    return stat.S_IMODE(st.st_mode)


def copy_file(src: str, dst: str, mode: int | None = None) -> None:
    """Replace *dst* with the bytes of *src*.

    When *mode* is given the file is new and gets exactly that mode.
    Overwritten files keep their permission bits untouched, so a file
    the caller may write but does not own can still be upgraded.  The
    whole file is read into memory.  Nothing is rolled back on failure.
    """
    try:
        data = Path(src).read_bytes()
    except OSError as exc:
        raise IOFailure("read", src, exc) from exc
    try:
        Path(dst).write_bytes(data)
    except OSError as exc:
        raise IOFailure("write", dst, exc) from exc
    if mode is not None:
        try:
            os.chmod(dst, mode)
        except OSError as exc:
            raise IOFailure("chmod", dst, exc) from exc


def copy_all(
    entries: Sequence[PathEntry],
    source_root: str,
    dest_root: str,
    *,
    dry_run: bool = False,
) -> ChangeReport:
    """Copy every non-directory entry from *source_root* onto *dest_root*.

    Files already in the destination keep their current permission bits;
    new files get ``0644``.  Parent directories must already exist (run
    :func:`~dirupgrade.dirs.reconcile` first).  Files present only in
    the destination are never touched.

    With *dry_run*, files are classified into the report but nothing is
    read or written.

    Raises:
        IOFailure: On the first read, write, chmod or stat error.
    """
    changes = ChangeReport()
    for entry in entries:
        if entry.is_dir:
            continue
        dst = os.path.join(dest_root, *entry.parts)
        existing = _existing_mode(dst)
        if existing is None:
            changes.add.append(FileEntry(entry.path, FILE_MODE))
            new_mode = FILE_MODE
        else:
            changes.update.append(FileEntry(entry.path, existing))
            new_mode = None
        if not dry_run:
            copy_file(os.path.join(source_root, *entry.parts), dst, new_mode)
    return changes
