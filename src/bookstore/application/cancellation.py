"""Cooperative cancellation for in-flight operations.

The caller hands a token to the unit of work; repositories check it on
every call and the unit of work checks it once more right before commit.
Once a transaction has committed, cancelling the token changes nothing.
"""

from __future__ import annotations

import threading

from bookstore.domain.exceptions import OperationCancelledError


class CancellationToken:

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelledError("The operation was cancelled")
