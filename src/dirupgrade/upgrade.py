"""Run a complete overlay upgrade."""

from __future__ import annotations

from typing import Callable

from ._types import UpgradeResult
from .config import RunConfig
from .copier import copy_all
from .coverage import check_coverage, measure_coverage
from .exceptions import StructuralError
from .dirs import reconcile
from .markers import check_roots
from .walk import enumerate_source


def run_upgrade(config: RunConfig, *, status: Callable[[str], None] | None = None) -> UpgradeResult:
    """Copy ``config.source_root`` over ``config.dest_root``.

    Stages run strictly in order: marker validation of both roots,
    source enumeration, directory reconciliation, the coverage gate, and
    finally the copy.  The enumeration is complete before the
    destination is touched.  The first failing stage raises its
    :class:`~dirupgrade.exceptions.UpgradeError`; directories created or
    files copied before that point are left in place.

    *status*, if given, is called with a short progress message after
    each stage.
    """
    def note(msg: str) -> None:
        if status is not None:
            status(msg)

    check_roots(config)

    entries = enumerate_source(config.source_root, exclude=config.exclude)
    note(f"Found {len(entries)} entries in {config.source_root}")

    rec = reconcile(entries, config.dest_root, config.auto_create_missing_dirs,
                    dry_run=config.dry_run)
    if not rec.ok:
        raise StructuralError(rec.missing)
    if rec.created:
        note(f"{'Would create' if config.dry_run else 'Created'} "
             f"{len(rec.created)} missing directories")

    counters = measure_coverage(entries, config.dest_root)
    check_coverage(counters, config.min_existing_fraction, source_root=config.source_root)
    note(f"{counters.existing} of {counters.total} files already in "
         f"{config.dest_root} ({counters.fraction * 100.0:.2f}%)")

    changes = copy_all(entries, config.source_root, config.dest_root,
                       dry_run=config.dry_run)

    return UpgradeResult(
        entries=len(entries),
        reconcile=rec,
        coverage=counters,
        changes=changes,
        dry_run=config.dry_run,
    )
