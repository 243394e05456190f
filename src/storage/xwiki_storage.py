"""Storage backend keeping documents as pages of an XWiki instance.

Documents map to pages through their ID (``<space>.<page>``), document
metadata is the page content serialized as JSON, and attachments are the
page's attachments. Listing with content fans out one page fetch per row
on a thread pool and merges the results back by row position.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Mapping, Optional, Union

from src.xwiki_client.api_wrapper import XWikiAPI
from src.xwiki_client.errors import ConfigError, MetadataParseError
from src.xwiki_client.metadata import ID_FIELD, ParseFailure, decode_metadata, encode_metadata
from src.xwiki_client.references import (
    AttachmentReference,
    DocumentReference,
    generate_document_id,
)
from src.xwiki_client.settings import (
    DEFAULT_SPACE,
    DEFAULT_TIMEOUT,
    DEFAULT_WIKI,
    XWikiSettings,
    normalize_url,
    parse_flag,
    parse_timeout,
)

from .base import Storage
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
    require_id,
)

logger = logging.getLogger(__name__)

# Maximum parallel threads for fetching documents of a listing
MAX_WORKERS = 10


class XWikiStorage(Storage):
    """Storage backed by the XWiki REST API.

    Example:
        >>> storage = XWikiStorage(XWikiSettings(url="http://localhost:8080"))
        >>> command = Command()
        >>> storage.execute("post", command, {"title": "Hello"}, {"space": "Blog"})
        >>> command.result().id
        'Blog.6f1c...'
    """

    type_name = 'xwiki'

    def __init__(self, settings: XWikiSettings, api: Optional[XWikiAPI] = None):
        """Initialize the storage.

        Args:
            settings: XWiki connection settings
            api: Optional API wrapper (built from settings when omitted)
        """
        self.settings = settings
        self.api = api or XWikiAPI(settings)

    @classmethod
    def from_description(cls, description: Mapping[str, Any]) -> "XWikiStorage":
        """Build a storage from a registry description.

        Recognised keys: ``xwikiUrl`` (required), ``wiki``, ``space``,
        ``timeout``, ``strictMetadata``.

        Raises:
            ConfigError: If xwikiUrl is missing or a value is malformed
        """
        url = description.get('xwikiUrl')
        if not isinstance(url, str) or not url.strip():
            raise ConfigError("xwikiUrl is required", 'xwikiUrl')

        wiki = description.get('wiki', DEFAULT_WIKI)
        if not isinstance(wiki, str) or not wiki:
            raise ConfigError("must be a non-empty string", 'wiki')

        space = description.get('space', DEFAULT_SPACE)
        if not isinstance(space, str) or not space:
            raise ConfigError("must be a non-empty string", 'space')

        return cls(XWikiSettings(
            url=normalize_url(url),
            wiki=wiki,
            default_space=space,
            timeout=parse_timeout(description.get('timeout', DEFAULT_TIMEOUT)),
            strict_metadata=parse_flag(description.get('strictMetadata', False), 'strictMetadata'),
        ))

    def fetch_metadata(self, doc_id: str) -> Dict[str, Any]:
        """Read a document's metadata from its page content.

        Content that is not a JSON object is treated as empty metadata and
        logged, unless the storage is configured with strict_metadata.
        The returned mapping always carries the document ID under ``_id``.

        Raises:
            InvalidDocumentIdError: If the ID has no space/page separator
            MetadataParseError: If the content is not a JSON object (strict only)
            XWikiError: If the REST call fails
        """
        reference = DocumentReference.from_id(doc_id)
        outcome = decode_metadata(self.api.get_page_content(reference))

        if isinstance(outcome, ParseFailure):
            if self.settings.strict_metadata:
                raise MetadataParseError(doc_id, outcome.reason)
            logger.warning(f"Document {doc_id} doesn't contain valid JSON ({outcome.reason}), using empty metadata")
            outcome = {}

        outcome[ID_FIELD] = doc_id
        return outcome

    def store_metadata(
        self,
        doc_id: str,
        metadata: Dict[str, Any],
        is_create: bool,
    ) -> Union[CreatedResponse, NoContentResponse]:
        """Write metadata as a document's page content.

        Args:
            doc_id: Document ID
            metadata: Metadata to serialize (``_id`` is not stored)
            is_create: True for post, which answers with the new ID

        Returns:
            CreatedResponse for creations, NoContentResponse for updates
        """
        reference = DocumentReference.from_id(doc_id)
        self.api.put_page_content(reference, encode_metadata(metadata))
        logger.info(f"Stored document {doc_id}")

        if is_create:
            return CreatedResponse(id=doc_id)
        return NoContentResponse()

    def fetch_attachment(self, doc_id: str, name: str) -> bytes:
        return self.api.get_attachment(AttachmentReference.from_id(doc_id, name))

    def store_attachment(self, doc_id: str, name: str, blob: bytes) -> None:
        self.api.put_attachment(AttachmentReference.from_id(doc_id, name), blob)
        logger.info(f"Stored attachment {name} ({len(blob)} bytes) on {doc_id}")

    def remove_document(self, doc_id: str) -> None:
        self.api.delete_page(DocumentReference.from_id(doc_id))
        logger.info(f"Removed document {doc_id}")

    def list_documents(self, space: Optional[str] = None) -> ListResult:
        """List the documents of a space without their metadata."""
        space = space or self.settings.default_space
        rows = [ListRow(id=name) for name in self.api.list_pages(space)]
        logger.info(f"Listed {len(rows)} documents in space {space}")
        return ListResult(rows=rows)

    def list_documents_with_content(self, space: Optional[str] = None) -> ListResult:
        """List the documents of a space and fetch the metadata of each one.

        Fetches run in parallel (max 10 concurrent threads). All of them
        settle before the merge, which assigns results by row position. If
        any fetch failed the first failure in row order is raised and no rows
        are returned.
        """
        result = self.list_documents(space)
        if not result.rows:
            return result

        with ThreadPoolExecutor(max_workers=min(MAX_WORKERS, len(result.rows))) as executor:
            futures = [executor.submit(self.fetch_metadata, row.id) for row in result.rows]

        for row, future in zip(result.rows, futures):
            row.doc = future.result()

        return result

    def do_all_docs(self, request: AllDocsRequest) -> AllDocsResponse:
        if request.include_docs:
            return AllDocsResponse(data=self.list_documents_with_content(request.space))
        return AllDocsResponse(data=self.list_documents(request.space))

    def do_get(self, request: DocumentRequest) -> DocumentResponse:
        return DocumentResponse(data=self.fetch_metadata(require_id(request.id)))

    def do_get_attachment(self, request: AttachmentRequest) -> AttachmentResponse:
        doc_id = require_id(request.id)
        return AttachmentResponse(data=self.fetch_attachment(doc_id, request.require_attachment()))

    def do_post(self, request: PostRequest) -> CreatedResponse:
        doc_id = generate_document_id(request.space or self.settings.default_space)
        return self.store_metadata(doc_id, request.metadata, is_create=True)

    def do_put(self, request: PutRequest) -> NoContentResponse:
        return self.store_metadata(require_id(request.id), request.metadata, is_create=False)

    def do_put_attachment(self, request: AttachmentRequest) -> NoContentResponse:
        doc_id = require_id(request.id)
        self.store_attachment(doc_id, request.require_attachment(), request.require_blob())
        return NoContentResponse()

    def do_remove(self, request: DocumentRequest) -> NoContentResponse:
        self.remove_document(require_id(request.id))
        return NoContentResponse()
