"""
Tolog exception hierarchy.

All tolog exceptions inherit from TologError, making it easy for consumers
to catch library-level errors while still distinguishing specific failure modes.
"""


class TologError(Exception):
    """Base exception class for all tolog errors."""


class ConfigurationError(TologError):
    """Raised for configuration errors (missing keys, invalid values)."""


class FileIOError(TologError):
    """Raised for file I/O errors."""


class JournalDirectoryError(FileIOError):
    """Raised when the journal directory cannot be created or accessed."""
