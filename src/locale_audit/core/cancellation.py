"""Cooperative cancellation for long-running catalog and usage passes."""

from __future__ import annotations

import threading


class OperationCancelled(RuntimeError):
    """Raised inside a pass when its ``CancellationToken`` has fired."""


class CancellationToken:
    """Thread-safe, one-way cancellation flag.

    Long loops call :meth:`raise_if_cancelled` between units of work so a
    cancelled pass stops at a clean boundary.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelled("localization check was cancelled")


def check_cancelled(token: CancellationToken | None) -> None:
    """``raise_if_cancelled`` that tolerates a missing token."""
    if token is not None:
        token.raise_if_cancelled()
