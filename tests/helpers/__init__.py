"""Test helper modules for XWiki storage testing.

This package provides:
- fake_xwiki: an in-memory XWiki REST endpoint usable as a requests session
"""

from .fake_xwiki import FakeXWikiSession

__all__ = [
    'FakeXWikiSession',
]
