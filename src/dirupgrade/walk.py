"""Source tree enumeration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from ._types import PathEntry
from .exceptions import IOFailure

if TYPE_CHECKING:
    from ._exclude import ExcludeFilter


def is_hidden(rel_path: str) -> bool:
    """True for paths whose first segment is a dotfile or dot-directory.

    Only the top level is checked: a nested ``wp-content/.htaccess``
    belongs to the distribution and is upgraded like any other file.
    """
    return rel_path.startswith(".")


def enumerate_source(source_root: str, exclude: ExcludeFilter | None = None) -> list[PathEntry]:
    """Return every non-hidden entry under *source_root*, depth-first.

    Entries within a directory are visited in lexicographic order and a
    directory is emitted before anything it contains.  The root itself
    is not emitted.  Top-level hidden entries (name starting with ``.``)
    are skipped, and a hidden directory's subtree with it, so no emitted
    path has a dot in its first segment.  Nested dotfiles are kept.
    Entries matched by *exclude* are pruned the same way.

    Symlinks are not followed: they are reported as non-directory
    entries whatever they point to.

    Raises:
        IOFailure: If any directory cannot be listed or any entry
            cannot be stat'ed.
    """
    result: list[PathEntry] = []
    _walk_dir(source_root, "", exclude, result)
    return result


def _walk_dir(abs_dir: str, rel_dir: str, exclude, result: list[PathEntry]) -> None:
    try:
        with os.scandir(abs_dir) as it:
            children = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        raise IOFailure("walk", abs_dir, exc) from exc

    for child in children:
        rel = f"{rel_dir}/{child.name}" if rel_dir else child.name
        if is_hidden(rel):
            continue
        try:
            entry = PathEntry.from_stat(rel, child.stat(follow_symlinks=False))
        except OSError as exc:
            raise IOFailure("stat", child.path, exc) from exc
        if exclude is not None and exclude.is_excluded(rel, is_dir=entry.is_dir):
            continue
        result.append(entry)
        if entry.is_dir:
            _walk_dir(child.path, rel, exclude, result)
