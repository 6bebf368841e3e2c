"""Exceptions for dirupgrade.

Every terminal condition of a run is an :class:`UpgradeError` subclass.
The ``exit_code`` class attribute is the process exit status the CLI
uses for it.
"""

from __future__ import annotations


class UpgradeError(Exception):
    """Base class for errors that abort an upgrade run."""
    exit_code = 1


class ConfigError(UpgradeError):
    """Invalid arguments, or a root that fails the marker-file check.

    Attributes:
        messages: One human-readable line per problem found.
    """
    exit_code = 1

    def __init__(self, messages: str | list[str]) -> None:
        if isinstance(messages, str):
            messages = [messages]
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))


class StructuralError(UpgradeError):
    """Destination directories are missing and auto-create is off.

    Attributes:
        missing: Relative paths of the top-most missing directories.
    """
    exit_code = 2

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(
            f"{len(self.missing)} destination director"
            f"{'y is' if len(self.missing) == 1 else 'ies are'} missing"
        )


class EmptySourceError(UpgradeError):
    """The source enumeration contains no files."""
    exit_code = 3

    def __init__(self, source_root: str) -> None:
        self.source_root = source_root
        super().__init__(f"Number of files in source directory {source_root} is zero")


class CoverageError(UpgradeError):
    """Too few source files already exist in the destination.

    Attributes:
        counters: The :class:`~dirupgrade.CoverageCounters` measured.
        threshold: The minimum fraction that was required.
    """
    exit_code = 4

    def __init__(self, counters, threshold: float) -> None:
        self.counters = counters
        self.threshold = threshold
        super().__init__(
            f"Percentage of files that exist in dest directory "
            f"{counters.fraction * 100.0:.2f}% is less than minimum "
            f"{threshold * 100.0:.2f}%"
        )


class IOFailure(UpgradeError):
    """An unexpected filesystem error during walk, stat, mkdir, read or write.

    The originating :class:`OSError` is chained as ``__cause__``.
    """
    exit_code = 5

    def __init__(self, operation: str, path: str, error: OSError) -> None:
        self.operation = operation
        self.path = path
        self.error = error
        reason = error.strerror or str(error)
        super().__init__(f"{operation} {path}: {reason}")
