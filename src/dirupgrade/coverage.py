"""Sanity check that the destination is a prior version of the source."""

from __future__ import annotations

import os
from typing import Sequence

from ._types import CoverageCounters, PathEntry
from .exceptions import CoverageError, EmptySourceError, IOFailure


def dest_exists(full: str) -> bool:
    """Return ``True`` if a stat of *full* succeeds.

    Absence is a normal answer; any other stat error is an
    :class:`IOFailure`.
    """
    try:
        os.stat(full)
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError as exc:
        raise IOFailure("stat", full, exc) from exc
    return True


def measure_coverage(entries: Sequence[PathEntry], dest_root: str) -> CoverageCounters:
    """Count the source files and how many of them exist under *dest_root*."""
    counters = CoverageCounters()
    for entry in entries:
        if entry.is_dir:
            continue
        counters.total += 1
        if dest_exists(os.path.join(dest_root, *entry.parts)):
            counters.existing += 1
    return counters


def check_coverage(counters: CoverageCounters, min_fraction: float, *, source_root: str = "") -> None:
    """Abort unless enough of the source already exists in the destination.

    Raises:
        EmptySourceError: If there were no source files at all.
        CoverageError: If ``counters.fraction`` is strictly below
            *min_fraction*.
    """
    if counters.total == 0:
        raise EmptySourceError(source_root)
    if counters.fraction < min_fraction:
        raise CoverageError(counters, min_fraction)
