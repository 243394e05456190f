"""Command-line interface for XWiki-backed document storage.

This package provides the `xwiki-storage` CLI tool that runs the generic
storage verbs (list, get, post, put, remove, attachments) against an XWiki
instance and prints the responses as JSON.
"""

from .models import ExitCode, CLIState
from .errors import CLIError, InputError

__all__ = [
    'ExitCode',
    'CLIState',
    'CLIError',
    'InputError',
]
