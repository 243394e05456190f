"""Storage base class shared by all storage backends.

A storage exposes one method per generic verb. Each verb takes a Command
and a typed request, runs the backend's ``do_<verb>`` handler and settles
the command with the response or with the StorageError the handler raised.
Failures never escape as exceptions; the command's error continuation is the
only failure channel, including for verbs a backend does not provide.
"""

import logging
from abc import ABCMeta, abstractmethod
from typing import Any, Callable, Dict, Mapping, Optional, Type

from src.xwiki_client.errors import (
    OperationNotImplementedError,
    StorageError,
    UnknownOperationError,
)

from .command import Command
from .models import (
    AllDocsRequest,
    AllDocsResponse,
    AttachmentRequest,
    AttachmentResponse,
    CreatedResponse,
    DocumentRequest,
    DocumentResponse,
    NoContentResponse,
    PostRequest,
    PutRequest,
    StorageRequest,
    StorageResponse,
)

logger = logging.getLogger(__name__)

# Verb name -> request type built from the host's params/options
REQUEST_TYPES: Dict[str, Type[Any]] = {
    'all_docs': AllDocsRequest,
    'get': DocumentRequest,
    'get_attachment': AttachmentRequest,
    'post': PostRequest,
    'put': PutRequest,
    'put_attachment': AttachmentRequest,
    'remove': DocumentRequest,
    'remove_attachment': AttachmentRequest,
    'check': DocumentRequest,
    'repair': DocumentRequest,
}

# Host frameworks name some verbs in camelCase
OPERATION_ALIASES = {
    'allDocs': 'all_docs',
    'getAttachment': 'get_attachment',
    'putAttachment': 'put_attachment',
    'removeAttachment': 'remove_attachment',
}


class Storage(metaclass=ABCMeta):
    """Generic document storage driven through command continuations.

    Subclasses implement the ``do_*`` handlers, which return a response or
    raise a StorageError. ``do_remove_attachment``, ``do_check`` and
    ``do_repair`` fail with OperationNotImplementedError unless overridden.
    """

    type_name = ''

    def execute(
        self,
        method: str,
        command: Command,
        params: Optional[Mapping[str, Any]] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """Run a verb from raw host arguments.

        The typed request is built and validated here; invalid parameters
        and unknown verbs are reported through ``command.error``.

        Args:
            method: Verb name ("get", "all_docs", "allDocs", ...)
            command: Continuations to settle
            params: Operation arguments (``_id``, ``_attachment``, ``_blob``, metadata)
            options: Flags such as ``include_docs`` and ``space``
        """
        operation = OPERATION_ALIASES.get(method, method)
        request_type = REQUEST_TYPES.get(operation)
        if request_type is None:
            command.error(UnknownOperationError(method))
            return

        try:
            request = request_type.from_params(params, options)
        except StorageError as e:
            command.error(e)
            return

        getattr(self, operation)(command, request)

    def _complete(self, command: Command, handler: Callable[[Any], StorageResponse], request: StorageRequest) -> None:
        try:
            response = handler(request)
        except StorageError as e:
            logger.debug(f"{type(self).__name__}.{handler.__name__} failed: {e}")
            command.error(e)
            return
        command.success(response)

    def all_docs(self, command: Command, request: AllDocsRequest) -> None:
        self._complete(command, self.do_all_docs, request)

    def get(self, command: Command, request: DocumentRequest) -> None:
        self._complete(command, self.do_get, request)

    def get_attachment(self, command: Command, request: AttachmentRequest) -> None:
        self._complete(command, self.do_get_attachment, request)

    def post(self, command: Command, request: PostRequest) -> None:
        self._complete(command, self.do_post, request)

    def put(self, command: Command, request: PutRequest) -> None:
        self._complete(command, self.do_put, request)

    def put_attachment(self, command: Command, request: AttachmentRequest) -> None:
        self._complete(command, self.do_put_attachment, request)

    def remove(self, command: Command, request: DocumentRequest) -> None:
        self._complete(command, self.do_remove, request)

    def remove_attachment(self, command: Command, request: AttachmentRequest) -> None:
        self._complete(command, self.do_remove_attachment, request)

    def check(self, command: Command, request: DocumentRequest) -> None:
        self._complete(command, self.do_check, request)

    def repair(self, command: Command, request: DocumentRequest) -> None:
        self._complete(command, self.do_repair, request)

    @abstractmethod
    def do_all_docs(self, request: AllDocsRequest) -> AllDocsResponse:
        """List documents, optionally with their metadata."""

    @abstractmethod
    def do_get(self, request: DocumentRequest) -> DocumentResponse:
        """Fetch a document's metadata."""

    @abstractmethod
    def do_get_attachment(self, request: AttachmentRequest) -> AttachmentResponse:
        """Fetch an attachment's bytes."""

    @abstractmethod
    def do_post(self, request: PostRequest) -> CreatedResponse:
        """Create a document under a generated ID."""

    @abstractmethod
    def do_put(self, request: PutRequest) -> NoContentResponse:
        """Create or replace a document under a given ID."""

    @abstractmethod
    def do_put_attachment(self, request: AttachmentRequest) -> NoContentResponse:
        """Store an attachment."""

    @abstractmethod
    def do_remove(self, request: DocumentRequest) -> NoContentResponse:
        """Delete a document."""

    def do_remove_attachment(self, request: AttachmentRequest) -> NoContentResponse:
        raise OperationNotImplementedError("REMOVE ATTACHMENT")

    def do_check(self, request: DocumentRequest) -> StorageResponse:
        raise OperationNotImplementedError("CHECK")

    def do_repair(self, request: DocumentRequest) -> StorageResponse:
        raise OperationNotImplementedError("REPAIR")
