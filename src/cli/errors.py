"""Typed exception hierarchy for CLI-related errors.

All exceptions inherit from CLIError, itself a StorageError, so the CLI
reports them the same way as storage failures.
"""

from src.xwiki_client.errors import StorageError


class CLIError(StorageError):
    """Base exception for all CLI-related errors."""
    pass


class InputError(CLIError):
    """Raised when document data given on the command line is unusable."""

    def __init__(self, message: str):
        super().__init__(message)
