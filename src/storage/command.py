"""Success/error continuation pair handed to a storage with every call.

A storage reports the outcome of a verb by settling its command exactly
once: ``success(response)`` or ``error(exception)``. The command also keeps
the outcome in a ``concurrent.futures.Future`` so a host running commands
on worker threads can wait for them with ``result()``.
"""

import logging
import threading
from concurrent.futures import Future
from typing import Callable, Optional

from src.xwiki_client.errors import CommandAlreadySettledError, StorageError

from .models import StorageResponse

logger = logging.getLogger(__name__)

SuccessCallback = Callable[[StorageResponse], None]
ErrorCallback = Callable[[StorageError], None]


class Command:
    """Continuations of a single storage call.

    Example:
        >>> command = Command(success=print)
        >>> storage.execute("get", command, {"_id": "Blog.Hello"})
        >>> command.result()
    """

    def __init__(
        self,
        success: Optional[SuccessCallback] = None,
        error: Optional[ErrorCallback] = None,
    ):
        """Initialize the command.

        Args:
            success: Called with the response when the verb succeeds
            error: Called with the StorageError when the verb fails
        """
        self._on_success = success
        self._on_error = error
        self._future: "Future[StorageResponse]" = Future()
        self._lock = threading.Lock()
        self._settled = False

    @property
    def settled(self) -> bool:
        return self._settled

    def _settle(self) -> None:
        with self._lock:
            if self._settled:
                raise CommandAlreadySettledError()
            self._settled = True

    def success(self, response: StorageResponse) -> None:
        """Deliver a successful response.

        Raises:
            CommandAlreadySettledError: If the command was already settled
        """
        self._settle()
        self._future.set_result(response)
        if self._on_success is not None:
            self._on_success(response)

    def error(self, reason: StorageError) -> None:
        """Deliver a failure.

        Raises:
            CommandAlreadySettledError: If the command was already settled
        """
        self._settle()
        logger.debug(f"Command failed: {reason}")
        self._future.set_exception(reason)
        if self._on_error is not None:
            self._on_error(reason)

    def result(self, timeout: Optional[float] = None) -> StorageResponse:
        """Wait for the outcome.

        Returns:
            The response passed to success()

        Raises:
            StorageError: The error passed to error()
            concurrent.futures.TimeoutError: If not settled within timeout
        """
        return self._future.result(timeout)
