"""In-memory stand-in for an XWiki REST endpoint.

FakeXWikiSession implements the part of requests.Session used by XWikiAPI
(``request(method, url, ...)``) and answers like XWiki does for the space,
page and attachment resources. Every request is recorded in ``calls``.
"""

import threading
from typing import Dict, List, Optional, Set, Tuple
from urllib.parse import unquote

import requests

from tests.fixtures.xwiki_responses import BASE_URL, make_response, page_xml, pages_xml


class FakeXWikiSession:
    """Fake requests session holding pages and attachments in dictionaries.

    Attributes:
        pages: (space, page) -> raw page content
        attachments: (space, page, name) -> attachment bytes
        calls: (method, url) of every request, in order
        failing: Document IDs whose page GET answers 500
        unreachable: When True every request raises ConnectionError
    """

    def __init__(self, base_url: str = BASE_URL, wiki: str = "xwiki"):
        self.base_url = base_url
        self.wiki = wiki
        self.pages: Dict[Tuple[str, str], str] = {}
        self.attachments: Dict[Tuple[str, str, str], bytes] = {}
        self.calls: List[Tuple[str, str]] = []
        self.failing: Set[str] = set()
        self.unreachable = False
        self._lock = threading.Lock()

    def add_page(self, doc_id: str, content: str) -> None:
        space, _, page = doc_id.partition(".")
        self.pages[(space, page)] = content

    def _parse(self, url: str) -> Tuple[str, Optional[str], Optional[str]]:
        assert url.startswith(self.base_url), url
        segments = [unquote(s) for s in url[len(self.base_url):].strip("/").split("/")]
        assert segments[:5] == ["xwiki", "rest", "wikis", self.wiki, "spaces"], url
        assert segments[6] == "pages", url
        space = segments[5]
        page = segments[7] if len(segments) > 7 else None
        attachment = segments[9] if len(segments) > 9 else None
        return space, page, attachment

    def request(self, method: str, url: str, timeout=None, headers=None, data=None) -> requests.Response:
        with self._lock:
            self.calls.append((method, url))

        if self.unreachable:
            raise requests.exceptions.ConnectionError(f"Failed to connect to {url}")

        space, page, attachment = self._parse(url)

        if page is None:
            names = sorted(f"{s}.{p}" for (s, p) in self.pages if s == space)
            return make_response(200, pages_xml(names, self.wiki), url)

        key = (space, page)
        if attachment is not None:
            return self._attachment(method, url, key, attachment, data)

        if method == "GET":
            if f"{space}.{page}" in self.failing:
                return make_response(500, b"Internal error", url)
            if key not in self.pages:
                return make_response(404, b"", url)
            return make_response(200, page_xml(f"{space}.{page}", self.pages[key], self.wiki), url)

        if method == "PUT":
            created = key not in self.pages
            self.pages[key] = data.decode("utf-8")
            return make_response(201 if created else 202, b"", url)

        if method == "DELETE":
            if key not in self.pages:
                return make_response(404, b"", url)
            del self.pages[key]
            for attachment_key in [k for k in self.attachments if k[:2] == key]:
                del self.attachments[attachment_key]
            return make_response(204, b"", url)

        return make_response(405, b"", url)

    def _attachment(self, method, url, key, name, data) -> requests.Response:
        if key not in self.pages:
            return make_response(404, b"", url)

        attachment_key = (key[0], key[1], name)
        if method == "GET":
            if attachment_key not in self.attachments:
                return make_response(404, b"", url)
            return make_response(200, self.attachments[attachment_key], url)

        if method == "PUT":
            created = attachment_key not in self.attachments
            self.attachments[attachment_key] = data
            return make_response(201 if created else 202, b"", url)

        return make_response(405, b"", url)
