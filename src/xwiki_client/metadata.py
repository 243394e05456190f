"""JSON codec for document metadata stored as page content.

Decoding never raises: content that is not a JSON object yields a
ParseFailure so the caller decides between the lenient policy (treat it as
empty metadata) and the strict one (fail the operation).
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .errors import InvalidParameterError

ID_FIELD = '_id'


@dataclass(frozen=True)
class ParseFailure:
    """Outcome of decoding page content that holds no JSON object.

    Attributes:
        reason: Human readable cause (syntax error, wrong JSON type, no content)
    """
    reason: str


def decode_metadata(content: Optional[str]) -> Union[Dict[str, Any], ParseFailure]:
    """Decode page content into a metadata mapping.

    Args:
        content: Text of the page's content element (None when absent)

    Returns:
        The decoded dict, or a ParseFailure describing why it is unusable
    """
    if content is None:
        return ParseFailure("page has no content element")

    try:
        value = json.loads(content)
    except ValueError as e:
        return ParseFailure(str(e))

    if not isinstance(value, dict):
        return ParseFailure(f"expected a JSON object, got {type(value).__name__}")

    return value


def encode_metadata(metadata: Dict[str, Any]) -> str:
    """Serialize metadata for storage, leaving out the injected ID field.

    Raises:
        InvalidParameterError: If the metadata cannot be represented as JSON
    """
    try:
        return json.dumps(strip_id(metadata))
    except (TypeError, ValueError) as e:
        raise InvalidParameterError('metadata', f"is not JSON serializable: {e}") from e


def strip_id(metadata: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of metadata without the ID field."""
    return {key: value for key, value in metadata.items() if key != ID_FIELD}
