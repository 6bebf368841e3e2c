"""Data structures shared by the upgrade stages."""

from __future__ import annotations

import stat
from dataclasses import dataclass, field


@dataclass(frozen=True)
class PathEntry:
    """One entry of the source enumeration.

    Attributes:
        path: Path relative to the source root, forward-slash separated.
            Never empty, never absolute, no ``.`` or ``..`` segments.
        is_dir: ``True`` for real directories.  Symlinks are never
            directories here, whatever they point to.
        mode: Permission bits of the source entry (``stat.S_IMODE``).
    """
    path: str
    is_dir: bool
    mode: int

    @classmethod
    def from_stat(cls, path: str, st) -> PathEntry:
        """Create a PathEntry from an ``lstat`` result."""
        return cls(path, stat.S_ISDIR(st.st_mode), stat.S_IMODE(st.st_mode))

    @property
    def parts(self) -> tuple[str, ...]:
        return tuple(self.path.split("/"))


@dataclass
class CoverageCounters:
    """How many source files already exist in the destination.

    Only non-directory entries are counted; ``existing <= total``.
    """
    total: int = 0
    existing: int = 0

    @property
    def fraction(self) -> float:
        """``existing / total``, or ``0.0`` for an empty source."""
        if self.total == 0:
            return 0.0
        return self.existing / self.total


@dataclass
class ReconcileResult:
    """Outcome of mirroring source directories into the destination.

    Attributes:
        missing: Top-most destination directories found absent and not
            created.  Subdirectories of these are not listed.
        created: Directories created (or, in a dry run, that would be).
    """
    missing: list[str] = field(default_factory=list)
    created: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.missing


@dataclass
class FileEntry:
    """A written file and the permission bits it was written with."""
    path: str
    mode: int


@dataclass
class ChangeReport:
    """Files the copier wrote, split by whether they already existed.

    Attributes:
        add: Files new to the destination (written with mode ``0644``).
        update: Files that were overwritten in place, keeping their mode.
    """
    add: list[FileEntry] = field(default_factory=list)
    update: list[FileEntry] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.add) + len(self.update)

    def actions(self) -> list[tuple[str, str]]:
        """Return ``(prefix, path)`` pairs sorted by path.

        The prefix is ``+`` for added files and ``~`` for updated ones.
        """
        result = [("+", e.path) for e in self.add]
        result.extend(("~", e.path) for e in self.update)
        result.sort(key=lambda a: a[1])
        return result


@dataclass
class UpgradeResult:
    """Everything a finished run observed and did."""
    entries: int
    reconcile: ReconcileResult
    coverage: CoverageCounters
    changes: ChangeReport
    dry_run: bool = False
