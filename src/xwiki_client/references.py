"""Mapping between document IDs and XWiki space/page references.

A document ID has the form ``<space>.<page>`` and is split at the first
separator only, so ``Blog.2024.Intro`` lives in space ``Blog`` as page
``2024.Intro``. Separators inside space names cannot be escaped; such IDs
resolve to the wrong space.
"""

import uuid
from typing import NamedTuple

from .errors import InvalidDocumentIdError

SEPARATOR = '.'


class DocumentReference(NamedTuple):
    """Location of a document page in XWiki."""
    space: str
    page: str

    @classmethod
    def from_id(cls, doc_id: str) -> "DocumentReference":
        """Resolve a document ID into its space and page.

        Args:
            doc_id: Document ID such as "Blog.Hello"

        Returns:
            DocumentReference with the text before the first separator as
            space and everything after it as page

        Raises:
            InvalidDocumentIdError: If the ID has no separator or an empty part
        """
        space, separator, page = doc_id.partition(SEPARATOR)
        if not separator or not space or not page:
            raise InvalidDocumentIdError(doc_id)
        return cls(space=space, page=page)

    def to_id(self) -> str:
        return f"{self.space}{SEPARATOR}{self.page}"


class AttachmentReference(NamedTuple):
    """Location of a named attachment on a document page."""
    document: DocumentReference
    name: str

    @classmethod
    def from_id(cls, doc_id: str, name: str) -> "AttachmentReference":
        return cls(document=DocumentReference.from_id(doc_id), name=name)


def generate_document_id(space: str) -> str:
    """Build a fresh document ID in the given space."""
    return f"{space}{SEPARATOR}{uuid.uuid4()}"
