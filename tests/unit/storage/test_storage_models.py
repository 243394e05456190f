"""Unit tests for storage.models module."""

import pytest

from src.storage.models import (
    AllDocsRequest,
    AllDocsResponse,
    AttachmentRequest,
    AttachmentResponse,
    CreatedResponse,
    DocumentRequest,
    DocumentResponse,
    ListResult,
    ListRow,
    NoContentResponse,
    PostRequest,
    PutRequest,
    require_id,
)
from src.xwiki_client.errors import InvalidParameterError, MissingParameterError


class TestAllDocsRequest:
    """Test cases for AllDocsRequest.from_params."""

    def test_defaults(self):
        assert AllDocsRequest.from_params(None, None) == AllDocsRequest(space=None, include_docs=False)

    def test_reads_options(self):
        request = AllDocsRequest.from_params({}, {"space": "Blog", "include_docs": True})
        assert request == AllDocsRequest(space="Blog", include_docs=True)

    def test_space_falls_back_to_params(self):
        """The space may also be given in params."""
        assert AllDocsRequest.from_params({"space": "Docs"}, {}).space == "Docs"

    def test_options_space_wins_over_params(self):
        assert AllDocsRequest.from_params({"space": "Docs"}, {"space": "Blog"}).space == "Blog"

    def test_rejects_non_boolean_include_docs(self):
        with pytest.raises(InvalidParameterError) as exc_info:
            AllDocsRequest.from_params({}, {"include_docs": "yes"})
        assert exc_info.value.field == "include_docs"


class TestDocumentRequests:
    """Test cases for DocumentRequest, PutRequest and PostRequest."""

    def test_document_request_reads_id(self):
        assert DocumentRequest.from_params({"_id": "Blog.Hello"}, None).id == "Blog.Hello"

    def test_empty_id_counts_as_missing(self):
        assert DocumentRequest.from_params({"_id": ""}, None).id is None

    def test_rejects_non_string_id(self):
        with pytest.raises(InvalidParameterError) as exc_info:
            DocumentRequest.from_params({"_id": 42}, None)
        assert exc_info.value.field == "_id"

    def test_put_request_separates_id_from_metadata(self):
        """The _id is addressing, not content."""
        request = PutRequest.from_params({"_id": "Blog.Hello", "title": "Hello"}, {})
        assert request.id == "Blog.Hello"
        assert request.metadata == {"title": "Hello"}

    def test_put_request_does_not_mutate_params(self):
        params = {"_id": "Blog.Hello", "title": "Hello"}
        PutRequest.from_params(params, {})
        assert params == {"_id": "Blog.Hello", "title": "Hello"}

    def test_post_request_reads_space_from_options(self):
        request = PostRequest.from_params({"title": "Hello"}, {"space": "Blog"})
        assert request == PostRequest(metadata={"title": "Hello"}, space="Blog")

    def test_post_request_drops_id(self):
        assert PostRequest.from_params({"_id": "X.Y", "title": "Hello"}, None).metadata == {"title": "Hello"}


class TestAttachmentRequest:
    """Test cases for AttachmentRequest."""

    def test_reads_all_fields(self):
        request = AttachmentRequest.from_params(
            {"_id": "Blog.Hello", "_attachment": "a.txt", "_blob": bytearray(b"abc")}, None
        )
        assert request == AttachmentRequest(id="Blog.Hello", attachment="a.txt", blob=b"abc")

    def test_rejects_non_bytes_blob(self):
        with pytest.raises(InvalidParameterError):
            AttachmentRequest.from_params({"_id": "Blog.Hello", "_attachment": "a.txt", "_blob": "abc"}, None)

    def test_require_attachment(self):
        with pytest.raises(MissingParameterError) as exc_info:
            AttachmentRequest(id="Blog.Hello").require_attachment()
        assert str(exc_info.value) == "Attachment name not specified"

    def test_require_blob_accepts_empty_bytes(self):
        assert AttachmentRequest(id="Blog.Hello", attachment="a", blob=b"").require_blob() == b""

    def test_require_blob(self):
        with pytest.raises(MissingParameterError):
            AttachmentRequest(id="Blog.Hello", attachment="a").require_blob()


class TestHostArguments:
    """params and options must be mappings (or None) for every request type."""

    @pytest.mark.parametrize("request_type", [
        AllDocsRequest, DocumentRequest, PostRequest, PutRequest, AttachmentRequest,
    ])
    @pytest.mark.parametrize("params", [["not", "a", "mapping"], "Blog.Hello", 42])
    def test_rejects_non_mapping_params(self, request_type, params):
        with pytest.raises(InvalidParameterError) as exc_info:
            request_type.from_params(params, None)
        assert exc_info.value.field == "params"

    @pytest.mark.parametrize("request_type", [AllDocsRequest, PostRequest])
    def test_rejects_non_mapping_options(self, request_type):
        with pytest.raises(InvalidParameterError) as exc_info:
            request_type.from_params({}, ["include_docs"])
        assert exc_info.value.field == "options"

    def test_empty_list_params_rejected(self):
        """Falsy non-mappings are not mistaken for missing arguments."""
        with pytest.raises(InvalidParameterError):
            PutRequest.from_params([], None)


class TestRequireId:
    """Test cases for require_id."""

    def test_returns_id(self):
        assert require_id("Blog.Hello") == "Blog.Hello"

    @pytest.mark.parametrize("doc_id", [None, ""])
    def test_missing_id(self, doc_id):
        with pytest.raises(MissingParameterError) as exc_info:
            require_id(doc_id)
        assert str(exc_info.value) == "Document ID not specified"


class TestResponses:
    """Test cases for response to_dict() shapes."""

    def test_list_result_without_docs(self):
        result = ListResult(rows=[ListRow(id="Blog.A"), ListRow(id="Blog.B")])
        assert result.total_rows == 2
        assert AllDocsResponse(data=result).to_dict() == {
            "data": {
                "rows": [{"id": "Blog.A", "value": {}}, {"id": "Blog.B", "value": {}}],
                "total_rows": 2,
            }
        }

    def test_list_row_with_doc(self):
        row = ListRow(id="Blog.A", doc={"_id": "Blog.A", "title": "A"})
        assert row.to_dict() == {"id": "Blog.A", "value": {}, "doc": {"_id": "Blog.A", "title": "A"}}

    def test_empty_list_result(self):
        assert ListResult().to_dict() == {"rows": [], "total_rows": 0}

    def test_document_response(self):
        assert DocumentResponse(data={"title": "A"}).to_dict() == {"data": {"title": "A"}}

    def test_created_response(self):
        assert CreatedResponse(id="Blog.X").to_dict() == {"id": "Blog.X"}

    def test_no_content_response(self):
        assert NoContentResponse().to_dict() == {"status": 204}

    def test_attachment_response(self):
        assert AttachmentResponse(data=b"abc").to_dict() == {"data": b"abc"}
