"""Custom exceptions for folder consolidator."""


class ConsolidatorError(Exception):
    """Base exception for folder consolidator errors."""
    pass


class ConfigurationError(ConsolidatorError):
    """Raised when the run configuration is invalid."""
    pass


class ScanError(ConsolidatorError):
    """Raised when the target directory itself cannot be enumerated."""
    pass


class FileOperationError(ConsolidatorError):
    """Raised when a single file operation fails."""
    pass


class TargetUnavailableError(FileOperationError):
    """Raised when the target root becomes inaccessible during a run."""
    pass
