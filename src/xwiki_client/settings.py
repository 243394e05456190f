"""Settings module for locating the XWiki REST endpoint.

This module loads XWiki connection settings from environment variables
using python-dotenv. It validates that the base URL is present and that
optional values are well formed.
"""

import os
from typing import NamedTuple, Optional

from dotenv import load_dotenv

from .errors import ConfigError

DEFAULT_WIKI = 'xwiki'
DEFAULT_SPACE = 'JIO'
DEFAULT_TIMEOUT = 30.0

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}
_FALSE_VALUES = {'0', 'false', 'no', 'off', ''}


class XWikiSettings(NamedTuple):
    """XWiki connection settings."""
    url: str
    wiki: str = DEFAULT_WIKI
    default_space: str = DEFAULT_SPACE
    timeout: float = DEFAULT_TIMEOUT
    strict_metadata: bool = False


def normalize_url(url: str) -> str:
    """Strip whitespace and trailing slashes from a base URL."""
    return url.strip().rstrip('/')


def parse_timeout(value, config_field: str = 'timeout') -> float:
    """Parse a positive timeout in seconds.

    Raises:
        ConfigError: If the value is not a positive number
    """
    if isinstance(value, bool):
        raise ConfigError(f"must be a number of seconds, got {value!r}", config_field)
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"must be a number of seconds, got {value!r}", config_field)
    if timeout <= 0:
        raise ConfigError(f"must be positive, got {timeout}", config_field)
    return timeout


def parse_flag(value, config_field: str) -> bool:
    """Parse a boolean flag given as a bool or a string such as 'true'/'0'.

    Raises:
        ConfigError: If the value is not recognisable as a boolean
    """
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigError(f"must be a boolean, got {value!r}", config_field)


class SettingsLoader:
    """Loads and validates XWiki settings from environment variables.

    Settings are loaded from a .env file using python-dotenv.

    Environment variables:
        XWIKI_URL: Base URL of the XWiki instance (required, e.g. http://localhost:8080)
        XWIKI_WIKI: Wiki name in REST paths (default: xwiki)
        XWIKI_DEFAULT_SPACE: Space used when a command names none (default: JIO)
        XWIKI_TIMEOUT: Transport timeout in seconds (default: 30)
        XWIKI_STRICT_METADATA: Fail instead of returning {} for non-JSON pages

    Raises:
        ConfigError: If XWIKI_URL is missing or a value is malformed

    Example:
        >>> loader = SettingsLoader()
        >>> settings = loader.get_settings()
        >>> print(f"Using {settings.url}")
    """

    def __init__(self, dotenv_path: Optional[str] = None):
        """Initialize the loader by loading environment variables from a .env file."""
        load_dotenv(dotenv_path)

    def get_settings(self) -> XWikiSettings:
        """Get XWiki settings from environment variables.

        Returns:
            XWikiSettings: Validated connection settings

        Raises:
            ConfigError: If XWIKI_URL is missing or a value is malformed
        """
        url = os.getenv('XWIKI_URL')
        if not url or not url.strip():
            raise ConfigError("XWIKI_URL is not set", 'XWIKI_URL')

        wiki = os.getenv('XWIKI_WIKI') or DEFAULT_WIKI
        default_space = os.getenv('XWIKI_DEFAULT_SPACE') or DEFAULT_SPACE

        timeout_value = os.getenv('XWIKI_TIMEOUT')
        timeout = DEFAULT_TIMEOUT
        if timeout_value:
            timeout = parse_timeout(timeout_value, 'XWIKI_TIMEOUT')

        strict_value = os.getenv('XWIKI_STRICT_METADATA')
        strict_metadata = False
        if strict_value is not None:
            strict_metadata = parse_flag(strict_value, 'XWIKI_STRICT_METADATA')

        return XWikiSettings(
            url=normalize_url(url),
            wiki=wiki,
            default_space=default_space,
            timeout=timeout,
            strict_metadata=strict_metadata,
        )
