"""dirupgrade: overlay a pristine distribution onto an existing installation.

Copies every non-hidden file of a source tree onto a destination tree,
creating missing directories and keeping the permission bits of files
that already exist.  Nothing is ever deleted from the destination.
"""

from ._exclude import ExcludeFilter
from ._types import (
    ChangeReport,
    CoverageCounters,
    FileEntry,
    PathEntry,
    ReconcileResult,
    UpgradeResult,
)
from .config import RunConfig, clean_root, parse_required_files
from .copier import copy_all
from .coverage import check_coverage, measure_coverage
from .exceptions import (
    ConfigError,
    CoverageError,
    EmptySourceError,
    IOFailure,
    StructuralError,
    UpgradeError,
)
from .dirs import reconcile
from .upgrade import run_upgrade
from .markers import check_roots, validate
from .walk import enumerate_source

__version__ = "0.1.0"

__all__ = [
    # Types
    "ChangeReport", "CoverageCounters", "ExcludeFilter", "FileEntry",
    "PathEntry", "ReconcileResult", "RunConfig", "UpgradeResult",
    # Exceptions
    "ConfigError", "CoverageError", "EmptySourceError", "IOFailure",
    "StructuralError", "UpgradeError",
    # Stages
    "validate", "check_roots", "enumerate_source", "reconcile",
    "measure_coverage", "check_coverage", "copy_all", "run_upgrade",
    # Helpers
    "clean_root", "parse_required_files",
]
