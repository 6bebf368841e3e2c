"""Mirror the source directory structure into the destination."""

from __future__ import annotations

import os
from typing import Sequence

from ._types import PathEntry, ReconcileResult
from .config import DIR_MODE
from .coverage import dest_exists
from .exceptions import IOFailure


def _is_under(path: str, prefix: str | None) -> bool:
    """True if *path* lies strictly inside *prefix*, compared per segment.

    ``wp-contents/x`` is not under ``wp-content``.
    """
    if not prefix:
        return False
    return path.startswith(prefix + "/")


def reconcile(
    entries: Sequence[PathEntry],
    dest_root: str,
    auto_create: bool,
    *,
    dry_run: bool = False,
) -> ReconcileResult:
    """Ensure every source directory exists under *dest_root*.

    Directories are visited in enumeration order, so parents are handled
    before their children.  A missing directory is created with mode
    ``0755`` when *auto_create* is set; otherwise it is recorded in
    :attr:`ReconcileResult.missing` and the walk carries on so every
    independent missing branch gets reported.  Directories below a
    missing one are not stat'ed again.

    With *dry_run*, directories that would be created are recorded in
    :attr:`ReconcileResult.created` but left alone, and their subtrees
    are skipped like missing ones.

    Raises:
        IOFailure: If a stat fails for a reason other than absence, or a
            directory cannot be created.
    """
    result = ReconcileResult()
    missing_prefix: str | None = None

    for entry in entries:
        if not entry.is_dir:
            continue
        if _is_under(entry.path, missing_prefix):
            continue
        full = os.path.join(dest_root, *entry.parts)
        if dest_exists(full):
            continue

        if not auto_create:
            missing_prefix = entry.path
            result.missing.append(entry.path)
            continue

        result.created.append(entry.path)
        if dry_run:
            missing_prefix = entry.path
            continue
        try:
            os.mkdir(full, DIR_MODE)
            os.chmod(full, DIR_MODE)
        except OSError as exc:
            raise IOFailure("mkdir", full, exc) from exc

    return result
