"""Generic document storage driven by command continuations.

This package provides the storage abstraction (typed requests and
responses, Command continuations, the Storage base class and the type
registry) together with the XWiki-backed storage.
"""

from .base import Storage
from .command import Command
from .config_loader import StorageConfigLoader
from .models import (
    AllDocsRequest,
    AllDocsResponse,
    AttachmentRequest,
    AttachmentResponse,
    CreatedResponse,
    DocumentRequest,
    DocumentResponse,
    ListResult,
    ListRow,
    NoContentResponse,
    PostRequest,
    PutRequest,
)
from .registry import StorageRegistry, build_default_registry
from .xwiki_storage import XWikiStorage

__all__ = [
    "Storage",
    "Command",
    "StorageConfigLoader",
    "StorageRegistry",
    "build_default_registry",
    "XWikiStorage",
    "AllDocsRequest",
    "AllDocsResponse",
    "AttachmentRequest",
    "AttachmentResponse",
    "CreatedResponse",
    "DocumentRequest",
    "DocumentResponse",
    "ListResult",
    "ListRow",
    "NoContentResponse",
    "PostRequest",
    "PutRequest",
]
