"""
Error types raised by the ledger and its persistence layer.
"""


class TrackerError(Exception):
    """Base exception for the hours tracker."""

    pass


class WeekNotFoundError(TrackerError, KeyError):
    """Raised when an operation targets a week id that is not in the ledger."""

    def __init__(self, week_id: str):
        self.week_id = week_id
        super().__init__(f"Week '{week_id}' not found")

    def __str__(self) -> str:
        return self.args[0]


class SnapshotImportError(TrackerError, ValueError):
    """
    Raised when imported or stored data cannot be turned into weeks.

    Attributes:
        details: Human readable description of what was wrong
    """

    def __init__(self, message: str, details: str = ""):
        self.details = details
        super().__init__(f"{message}: {details}" if details else message)


class StorageError(TrackerError):
    """Raised when the key-value backend fails to read or write."""

    def __init__(self, operation: str, original_error: Exception):
        self.operation = operation
        self.original_error = original_error
        super().__init__(f"Storage {operation} failed: {original_error}")


class LedgerNotLoadedError(TrackerError):
    """Raised when the service is used before load() was awaited."""

    pass
