"""Marker-file checks that a root looks like a real installation."""

from __future__ import annotations

import os
from typing import Iterable

from .config import RunConfig
from .exceptions import ConfigError


def validate(root: str, markers: Iterable[str]) -> bool:
    """Return ``True`` if every marker exists under *root*.

    A marker may be any kind of entry; symlinks must resolve.  Stat
    errors of any kind count as "not present".  Absolute markers are
    taken relative to *root*.  No markers is trivially valid.
    """
    for marker in markers:
        try:
            os.stat(os.path.join(root, marker.lstrip("/" + os.sep)))
        except OSError:
            return False
    return True


def check_roots(config: RunConfig) -> None:
    """Validate both roots of *config*, reporting every problem at once.

    Raises :class:`ConfigError` listing each root that is not a
    directory or lacks a required marker.
    """
    problems: list[str] = []
    for label, root in (("base source", config.source_root),
                        ("destination", config.dest_root)):
        if not os.path.isdir(root):
            problems.append(f"The {label} directory {root} does not exist or is not a directory.")
        elif not validate(root, config.required_markers):
            problems.append(
                f"The {label} directory {root} does not appear to be valid "
                f"(missing required files)."
            )
    if problems:
        raise ConfigError(problems)
