"""Custom exceptions for lockgraph."""


class LockgraphError(Exception):
    """Base exception for all lockgraph operations."""


class ConfigurationError(LockgraphError):
    """Raised when configuration validation fails."""


class FileProcessingError(LockgraphError):
    """Raised when file operations fail."""


class ParseError(LockgraphError):
    """Raised when a lock file cannot be parsed."""
