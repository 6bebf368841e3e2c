"""Run configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .exceptions import ConfigError

if TYPE_CHECKING:
    from ._exclude import ExcludeFilter

DEFAULT_MIN_FRACTION = 0.60
DIR_MODE = 0o755
FILE_MODE = 0o644


def clean_root(raw: str) -> str:
    """Normalize a root directory argument.

    Collapses repeated separators, resolves ``.`` and ``..`` lexically
    and strips any trailing separator.  ``"src/"`` becomes ``"src"``.
    """
    if not raw:
        raise ConfigError("Directory path must not be empty")
    return os.path.normpath(raw)


def parse_required_files(raw: str | None) -> tuple[str, ...]:
    """Split a comma-separated marker list, dropping blank items.

    Markers are always relative to a root, so leading separators are
    stripped: ``/wp-activate.php`` means ``wp-activate.php``.
    """
    if not raw:
        return ()
    markers = (_relative(p.strip()) for p in raw.split(","))
    return tuple(m for m in markers if m)


def _relative(path: str) -> str:
    return path.lstrip("/" + os.sep)


@dataclass
class RunConfig:
    """Everything one upgrade run needs.

    Attributes:
        source_root: Pristine distribution to copy from.
        dest_root: Existing installation to upgrade in place.
        required_markers: Relative paths that must exist under both roots.
        min_existing_fraction: Lowest acceptable share of source files
            already present in the destination (0.0 to 1.0).
        auto_create_missing_dirs: Create absent destination directories
            instead of reporting them and aborting.
        dry_run: Report what would change without touching the destination.
        exclude: Optional filter of source paths to leave out.
    """
    source_root: str
    dest_root: str
    required_markers: tuple[str, ...] = ()
    min_existing_fraction: float = DEFAULT_MIN_FRACTION
    auto_create_missing_dirs: bool = True
    dry_run: bool = False
    exclude: ExcludeFilter | None = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.min_existing_fraction <= 1.0:
            raise ConfigError(
                f"Minimum fraction must be between 0 and 1, "
                f"got {self.min_existing_fraction}"
            )
        self.source_root = clean_root(self.source_root)
        self.dest_root = clean_root(self.dest_root)
        self.required_markers = tuple(self.required_markers)
