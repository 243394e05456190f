"""Unit tests for xwiki_client.metadata module."""

import json

import pytest

from src.xwiki_client.errors import InvalidParameterError
from src.xwiki_client.metadata import (
    ParseFailure,
    decode_metadata,
    encode_metadata,
    strip_id,
)


class TestDecodeMetadata:
    """Test cases for decode_metadata."""

    def test_decodes_json_object(self):
        """A JSON object decodes to a dict."""
        assert decode_metadata('{"title": "Hello", "tags": ["a"]}') == {"title": "Hello", "tags": ["a"]}

    def test_invalid_json_is_parse_failure(self):
        """Malformed JSON yields a ParseFailure instead of raising."""
        outcome = decode_metadata("= Heading =\nwiki text")
        assert isinstance(outcome, ParseFailure)
        assert outcome.reason

    def test_non_object_json_is_parse_failure(self):
        """JSON that is not an object yields a ParseFailure."""
        outcome = decode_metadata("[1, 2, 3]")
        assert isinstance(outcome, ParseFailure)
        assert "list" in outcome.reason

    def test_missing_content_is_parse_failure(self):
        """An absent content element yields a ParseFailure."""
        assert isinstance(decode_metadata(None), ParseFailure)

    def test_empty_content_is_parse_failure(self):
        """An empty page body yields a ParseFailure."""
        assert isinstance(decode_metadata(""), ParseFailure)


class TestEncodeMetadata:
    """Test cases for encode_metadata and strip_id."""

    def test_encodes_json(self):
        """Metadata is serialized as JSON."""
        assert json.loads(encode_metadata({"title": "Hello"})) == {"title": "Hello"}

    def test_drops_id_field(self):
        """The injected _id field is not stored."""
        assert json.loads(encode_metadata({"_id": "Blog.Hello", "title": "Hello"})) == {"title": "Hello"}

    def test_strip_id_returns_copy(self):
        """strip_id leaves the original mapping untouched."""
        metadata = {"_id": "Blog.Hello", "title": "Hello"}
        assert strip_id(metadata) == {"title": "Hello"}
        assert metadata["_id"] == "Blog.Hello"

    def test_encoded_metadata_decodes_back(self):
        """Stored metadata decodes to the same mapping."""
        metadata = {"title": "Hello", "count": 3, "nested": {"ok": True}}
        assert decode_metadata(encode_metadata(metadata)) == metadata

    @pytest.mark.parametrize("value", [object(), {1, 2}, b"bytes"])
    def test_unserializable_value_is_invalid_parameter(self, value):
        """Values JSON cannot represent fail as a parameter error."""
        with pytest.raises(InvalidParameterError) as exc_info:
            encode_metadata({"title": "Hello", "when": value})

        assert exc_info.value.field == "metadata"
        assert isinstance(exc_info.value.__cause__, TypeError)

    def test_circular_metadata_is_invalid_parameter(self):
        metadata = {"title": "Hello"}
        metadata["self"] = metadata

        with pytest.raises(InvalidParameterError):
            encode_metadata(metadata)
