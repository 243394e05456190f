"""Request and response models for storage commands.

This module defines the typed structures exchanged between the host and a
storage. Requests are built from the host's raw ``params``/``options``
mappings and validated at that boundary; responses convert back to the
generic result shape with ``to_dict()``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from src.xwiki_client.errors import InvalidParameterError, MissingParameterError
from src.xwiki_client.metadata import ID_FIELD, strip_id

NO_CONTENT = 204

_EMPTY: Mapping[str, Any] = {}


def _optional_str(mapping: Mapping[str, Any], key: str) -> Optional[str]:
    """Read an optional string field; empty strings count as absent."""
    value = mapping.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidParameterError(key, f"must be a string, got {type(value).__name__}")
    return value or None


def _flag(mapping: Mapping[str, Any], key: str) -> bool:
    value = mapping.get(key, False)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise InvalidParameterError(key, f"must be a boolean, got {type(value).__name__}")
    return value


def _mapping(value: Optional[Mapping[str, Any]], name: str) -> Mapping[str, Any]:
    """Return the host argument as a mapping; None counts as empty."""
    if value is None:
        return _EMPTY
    if not isinstance(value, Mapping):
        raise InvalidParameterError(name, f"must be a mapping, got {type(value).__name__}")
    return value


def require_id(doc_id: Optional[str]) -> str:
    """Return the document ID or fail the way every verb reports a missing one."""
    if not doc_id:
        raise MissingParameterError("Document ID not specified")
    return doc_id


@dataclass(frozen=True)
class AllDocsRequest:
    """Arguments of all_docs: which space to list and whether to fetch content."""
    space: Optional[str] = None
    include_docs: bool = False

    @classmethod
    def from_params(cls, params: Optional[Mapping[str, Any]], options: Optional[Mapping[str, Any]]) -> "AllDocsRequest":
        params = _mapping(params, 'params')
        options = _mapping(options, 'options')
        return cls(
            space=_optional_str(options, 'space') or _optional_str(params, 'space'),
            include_docs=_flag(options, 'include_docs'),
        )


@dataclass(frozen=True)
class DocumentRequest:
    """Arguments of verbs addressing a single document (get, remove, check, repair)."""
    id: Optional[str] = None

    @classmethod
    def from_params(cls, params: Optional[Mapping[str, Any]], options: Optional[Mapping[str, Any]]) -> "DocumentRequest":
        return cls(id=_optional_str(_mapping(params, 'params'), ID_FIELD))


@dataclass(frozen=True)
class PostRequest:
    """Arguments of post: metadata for a new document and its target space."""
    metadata: Dict[str, Any] = field(default_factory=dict)
    space: Optional[str] = None

    @classmethod
    def from_params(cls, params: Optional[Mapping[str, Any]], options: Optional[Mapping[str, Any]]) -> "PostRequest":
        return cls(
            metadata=strip_id(dict(_mapping(params, 'params'))),
            space=_optional_str(_mapping(options, 'options'), 'space'),
        )


@dataclass(frozen=True)
class PutRequest:
    """Arguments of put: the document to replace and its new metadata."""
    id: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_params(cls, params: Optional[Mapping[str, Any]], options: Optional[Mapping[str, Any]]) -> "PutRequest":
        params = _mapping(params, 'params')
        return cls(
            id=_optional_str(params, ID_FIELD),
            metadata=strip_id(dict(params)),
        )


@dataclass(frozen=True)
class AttachmentRequest:
    """Arguments of attachment verbs; blob is only set for uploads."""
    id: Optional[str] = None
    attachment: Optional[str] = None
    blob: Optional[bytes] = None

    @classmethod
    def from_params(cls, params: Optional[Mapping[str, Any]], options: Optional[Mapping[str, Any]]) -> "AttachmentRequest":
        params = _mapping(params, 'params')
        blob = params.get('_blob')
        if blob is not None:
            if not isinstance(blob, (bytes, bytearray)):
                raise InvalidParameterError('_blob', f"must be bytes, got {type(blob).__name__}")
            blob = bytes(blob)
        return cls(
            id=_optional_str(params, ID_FIELD),
            attachment=_optional_str(params, '_attachment'),
            blob=blob,
        )

    def require_attachment(self) -> str:
        if not self.attachment:
            raise MissingParameterError("Attachment name not specified")
        return self.attachment

    def require_blob(self) -> bytes:
        if self.blob is None:
            raise MissingParameterError("Attachment data not specified")
        return self.blob


StorageRequest = Union[AllDocsRequest, DocumentRequest, PostRequest, PutRequest, AttachmentRequest]


@dataclass
class ListRow:
    """One document in a listing; doc is only filled when content was requested."""
    id: str
    value: Dict[str, Any] = field(default_factory=dict)
    doc: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        row: Dict[str, Any] = {'id': self.id, 'value': dict(self.value)}
        if self.doc is not None:
            row['doc'] = self.doc
        return row


@dataclass
class ListResult:
    """Rows of a listing in the order the wiki returned them."""
    rows: List[ListRow] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        return len(self.rows)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'rows': [row.to_dict() for row in self.rows],
            'total_rows': self.total_rows,
        }


@dataclass
class AllDocsResponse:
    data: ListResult

    def to_dict(self) -> Dict[str, Any]:
        return {'data': self.data.to_dict()}


@dataclass
class DocumentResponse:
    data: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {'data': self.data}


@dataclass
class CreatedResponse:
    id: str

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id}


@dataclass
class NoContentResponse:
    status: int = NO_CONTENT

    def to_dict(self) -> Dict[str, Any]:
        return {'status': self.status}


@dataclass
class AttachmentResponse:
    data: bytes

    def to_dict(self) -> Dict[str, Any]:
        return {'data': self.data}


StorageResponse = Union[AllDocsResponse, DocumentResponse, CreatedResponse, NoContentResponse, AttachmentResponse]
