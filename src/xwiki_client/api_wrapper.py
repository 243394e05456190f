"""API wrapper for the XWiki REST API.

This module wraps a requests session pointed at an XWiki instance and
provides error translation from HTTP exceptions to our typed exception
hierarchy. Responses in XML are read with BeautifulSoup.
"""

import logging
from typing import List, Optional
from urllib.parse import quote

import requests
from bs4 import BeautifulSoup
from requests.exceptions import ConnectionError, RequestException, Timeout

from .errors import APIAccessError, APIUnreachableError, PageNotFoundError
from .references import AttachmentReference, DocumentReference
from .settings import XWikiSettings

logger = logging.getLogger(__name__)

XML_HEADERS = {'Accept': 'application/xml'}
PAGE_CONTENT_HEADERS = {'Content-Type': 'text/plain; charset=utf-8'}


class XWikiAPI:
    """Thin wrapper over the XWiki REST resources used by the storage adapter.

    This class:
    1. Builds wiki/space/page/attachment resource URLs
    2. Issues GET/PUT/DELETE requests with the configured timeout
    3. Extracts page names and page content from XML envelopes
    4. Translates HTTP errors to typed exceptions

    Example:
        >>> api = XWikiAPI(XWikiSettings(url="http://localhost:8080"))
        >>> api.list_pages("Blog")
        ['Blog.Hello', 'Blog.WebHome']
    """

    def __init__(self, settings: XWikiSettings, session: Optional[requests.Session] = None):
        """Initialize the API wrapper.

        Args:
            settings: XWiki connection settings
            session: Optional requests session (created lazily when omitted)
        """
        self._settings = settings
        self._session = session

    @property
    def settings(self) -> XWikiSettings:
        return self._settings

    def _get_session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def pages_url(self, space: str) -> str:
        """URL of the page collection of a space."""
        return (
            f"{self._settings.url}/xwiki/rest/wikis/{quote(self._settings.wiki, safe='')}"
            f"/spaces/{quote(space, safe='')}/pages"
        )

    def page_url(self, reference: DocumentReference) -> str:
        """URL of a single page resource."""
        return f"{self.pages_url(reference.space)}/{quote(reference.page, safe='')}"

    def attachment_url(self, reference: AttachmentReference) -> str:
        """URL of an attachment on a page."""
        return f"{self.page_url(reference.document)}/attachments/{quote(reference.name, safe='')}"

    def _translate_error(self, exception: RequestException, operation: str, resource: str) -> Exception:
        """Translate a requests exception to a typed XWiki exception.

        Args:
            exception: The original exception raised by requests
            operation: Description of the operation that failed (for logging)
            resource: Identifier of the resource the operation targeted

        Returns:
            Exception: Translated exception (one of our typed exceptions)
        """
        if isinstance(exception, (Timeout, ConnectionError)):
            return APIUnreachableError(endpoint=self._settings.url, detail=str(exception))

        response = getattr(exception, 'response', None)
        status_code = getattr(response, 'status_code', None)

        if status_code == 404:
            return PageNotFoundError(resource)

        logger.error(f"API operation failed: {operation} - {exception}")
        return APIAccessError(
            f"XWiki API failure during {operation}",
            status_code=status_code,
            detail=str(exception),
        )

    def _request(self, method: str, url: str, operation: str, resource: str, **kwargs) -> requests.Response:
        logger.debug(f"{method} {url}")
        try:
            response = self._get_session().request(
                method,
                url,
                timeout=self._settings.timeout,
                **kwargs
            )
            response.raise_for_status()
        except RequestException as e:
            raise self._translate_error(e, operation, resource) from e
        return response

    def list_pages(self, space: str) -> List[str]:
        """List the full names of all pages in a space.

        Args:
            space: The space name

        Returns:
            Page full names ("Space.Page") in the order XWiki returns them

        Raises:
            PageNotFoundError: If the space doesn't exist
            APIUnreachableError: If the API is unreachable
            APIAccessError: If the request fails otherwise
        """
        response = self._request(
            'GET',
            self.pages_url(space),
            f"list_pages({space})",
            space,
            headers=XML_HEADERS,
        )
        soup = BeautifulSoup(response.content, 'xml')
        return [element.get_text() for element in soup.find_all('fullName')]

    def get_page_content(self, reference: DocumentReference) -> Optional[str]:
        """Fetch the text of a page's content element.

        Args:
            reference: The page to read

        Returns:
            Content text, or None when the page envelope has no content element

        Raises:
            PageNotFoundError: If the page doesn't exist
            APIUnreachableError: If the API is unreachable
            APIAccessError: If the request fails otherwise
        """
        doc_id = reference.to_id()
        response = self._request(
            'GET',
            self.page_url(reference),
            f"get_page({doc_id})",
            doc_id,
            headers=XML_HEADERS,
        )
        soup = BeautifulSoup(response.content, 'xml')
        content = soup.find('content')
        if content is None:
            return None
        return content.get_text()

    def put_page_content(self, reference: DocumentReference, content: str) -> None:
        """Create or replace a page's content with plain text.

        Raises:
            APIUnreachableError: If the API is unreachable
            APIAccessError: If the request fails
        """
        doc_id = reference.to_id()
        self._request(
            'PUT',
            self.page_url(reference),
            f"put_page({doc_id})",
            doc_id,
            data=content.encode('utf-8'),
            headers=PAGE_CONTENT_HEADERS,
        )

    def delete_page(self, reference: DocumentReference) -> None:
        """Delete a page.

        Raises:
            PageNotFoundError: If the page doesn't exist
            APIUnreachableError: If the API is unreachable
            APIAccessError: If the request fails otherwise
        """
        doc_id = reference.to_id()
        self._request(
            'DELETE',
            self.page_url(reference),
            f"delete_page({doc_id})",
            doc_id,
        )

    def get_attachment(self, reference: AttachmentReference) -> bytes:
        """Download an attachment's bytes.

        Raises:
            PageNotFoundError: If the page or attachment doesn't exist
            APIUnreachableError: If the API is unreachable
            APIAccessError: If the request fails otherwise
        """
        resource = f"{reference.document.to_id()}@{reference.name}"
        response = self._request(
            'GET',
            self.attachment_url(reference),
            f"get_attachment({resource})",
            resource,
        )
        return response.content

    def put_attachment(self, reference: AttachmentReference, blob: bytes) -> None:
        """Upload bytes as an attachment, replacing any previous one.

        Raises:
            PageNotFoundError: If the page doesn't exist
            APIUnreachableError: If the API is unreachable
            APIAccessError: If the request fails otherwise
        """
        resource = f"{reference.document.to_id()}@{reference.name}"
        self._request(
            'PUT',
            self.attachment_url(reference),
            f"put_attachment({resource})",
            resource,
            data=blob,
        )
