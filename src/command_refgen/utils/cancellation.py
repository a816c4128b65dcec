"""Cooperative cancellation."""

from __future__ import annotations

import threading

from ..core.exceptions import AnalysisCancelledError


class CancellationToken:
    """A flag set once (e.g. from a SIGINT handler) and polled by workers.

    Backed by ``threading.Event`` so it can be set from a signal handler or
    another thread while the event loop is busy.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self, context: str | None = None) -> None:
        """Raise AnalysisCancelledError when cancellation was requested."""
        if self._event.is_set():
            message = "Analysis cancelled"
            if context:
                message = f"{message} ({context})"
            raise AnalysisCancelledError(message)
