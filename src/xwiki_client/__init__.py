"""XWiki client library for the storage adapter.

This package provides Python abstractions over the XWiki REST API: document
ID resolution, metadata encoding, and typed errors for failed calls.
"""

from .errors import (
    StorageError,
    XWikiError,
    PageNotFoundError,
    APIUnreachableError,
    APIAccessError,
    MetadataParseError,
    ParameterError,
    MissingParameterError,
    InvalidParameterError,
    InvalidDocumentIdError,
    OperationNotImplementedError,
    UnknownOperationError,
    CommandAlreadySettledError,
    ConfigError,
    FilesystemError,
)

__all__ = [
    "StorageError",
    "XWikiError",
    "PageNotFoundError",
    "APIUnreachableError",
    "APIAccessError",
    "MetadataParseError",
    "ParameterError",
    "MissingParameterError",
    "InvalidParameterError",
    "InvalidDocumentIdError",
    "OperationNotImplementedError",
    "UnknownOperationError",
    "CommandAlreadySettledError",
    "ConfigError",
    "FilesystemError",
]
