"""Test fixtures for XWiki storage tests.

This module provides sample XWiki REST responses (page listings and page
resources) and a helper building real requests.Response objects.
"""

from .xwiki_responses import BASE_URL, make_response, page_xml, pages_xml

__all__ = [
    "BASE_URL",
    "make_response",
    "page_xml",
    "pages_xml",
]
