"""Data models for CLI operations."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): General error (config issues, invalid input, remote failure)
    - NOT_FOUND (2): The document, space or attachment does not exist
    - NETWORK_ERROR (4): Network connectivity or API availability issues
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    NOT_FOUND = 2
    NETWORK_ERROR = 4


@dataclass
class CLIState:
    """Options shared by every subcommand, set by the app callback.

    Attributes:
        config_path: YAML storage description (None to use XWIKI_* environment settings)
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        no_color: Disable colored output
    """
    config_path: Optional[str] = None
    verbosity: int = 0
    no_color: bool = False
