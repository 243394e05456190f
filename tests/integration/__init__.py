"""Integration tests for the XWiki storage.

These tests drive the storage verbs through the full client stack
(XWikiAPI, requests responses, XML parsing) against FakeXWikiSession, an
in-memory XWiki REST endpoint. No network access is needed.
"""
