"""Cooperative cancellation for long-running context extraction.

A CancellationToken is created by the caller and passed explicitly to every
operation that talks to git or the filesystem. Operations poll it at their
suspension points; a running subprocess or file read is never interrupted.
"""

import threading
from typing import Optional

from commitctx.exceptions import OperationCancelledError


class CancellationToken:
    """Shared cancellation signal, safe to trigger from another thread."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation of every operation holding this token."""
        self._event.set()

    @property
    def is_cancellation_requested(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise OperationCancelledError if cancellation was requested.

        Raises:
            OperationCancelledError: If cancel() has been called.
        """
        if self._event.is_set():
            raise OperationCancelledError()


def raise_if_cancelled(token: Optional[CancellationToken]) -> None:
    """Check an optional token; a missing token never cancels."""
    if token is not None:
        token.raise_if_cancelled()
