"""Typed exception hierarchy for XWiki storage errors.

This module defines all custom exceptions used by the XWiki client library
and the storage adapter built on top of it. All exceptions inherit from the
StorageError base class for easy catching and include descriptive messages
with context to help with debugging.
"""

from typing import Optional


class StorageError(Exception):
    """Base exception for all xwiki-storage errors.

    Use this to catch any application-level error from the storage adapter.
    Every failure delivered to a command's error continuation is a StorageError.
    """
    pass


class XWikiError(StorageError):
    """Base exception for all errors reported by the remote XWiki instance."""
    pass


class PageNotFoundError(XWikiError):
    """Raised when a requested page or attachment does not exist."""

    def __init__(self, resource: str):
        super().__init__(f"Resource {resource} not found")
        self.resource = resource


class APIUnreachableError(XWikiError):
    """Raised when the XWiki REST API is not available or unreachable."""

    def __init__(self, endpoint: str, detail: Optional[str] = None):
        message = f"API is not available at {endpoint}"
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.endpoint = endpoint
        self.detail = detail


class APIAccessError(XWikiError):
    """Raised when an XWiki REST call fails for any other reason.

    The transport's own error message is kept verbatim in ``detail``.
    """

    def __init__(
        self,
        message: str = "XWiki API failure",
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class MetadataParseError(StorageError):
    """Raised when page content is not a JSON object and strict parsing is on."""

    def __init__(self, doc_id: str, reason: str):
        super().__init__(f"Document {doc_id} doesn't contain valid JSON: {reason}")
        self.doc_id = doc_id
        self.reason = reason


class ParameterError(StorageError):
    """Base exception for invalid command parameters."""
    pass


class MissingParameterError(ParameterError):
    """Raised when a required command parameter is absent."""

    def __init__(self, message: str):
        super().__init__(message)


class InvalidParameterError(ParameterError):
    """Raised when a command parameter has the wrong type or value."""

    def __init__(self, field: str, message: str):
        super().__init__(f"Invalid parameter '{field}': {message}")
        self.field = field


class InvalidDocumentIdError(ParameterError):
    """Raised when a document ID cannot be mapped to a space and a page."""

    def __init__(self, doc_id: str):
        super().__init__(
            f"Invalid document ID '{doc_id}': expected '<space>.<page>'"
        )
        self.doc_id = doc_id


class OperationNotImplementedError(StorageError):
    """Raised for storage verbs the backend does not provide."""

    def __init__(self, operation: str):
        super().__init__(f"{operation} not implemented")
        self.operation = operation


class UnknownOperationError(StorageError):
    """Raised when a command names a verb that no storage defines."""

    def __init__(self, operation: str):
        super().__init__(f"Unknown storage operation '{operation}'")
        self.operation = operation


class CommandAlreadySettledError(StorageError):
    """Raised when a command's continuations are invoked more than once."""

    def __init__(self):
        super().__init__("Command has already been settled")


class ConfigError(StorageError):
    """Raised when settings or a storage description are invalid."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field


class FilesystemError(StorageError):
    """Raised when reading a configuration file fails."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason
