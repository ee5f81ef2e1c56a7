"""Deadline: a timeout plus an explicit cancellation signal.

Every store, ledger and coordinator operation takes an optional Deadline.
Operations call ``check()`` at each step; the coordinator never commits
once the deadline has expired or been cancelled.
"""

from __future__ import annotations

import threading
import time
from typing import Callable

from orderdesk.domain.exceptions import DeadlineExceeded, OperationCancelled


class Deadline:

    def __init__(
        self,
        timeout: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self._expires_at = None if timeout is None else clock() + timeout
        self._cancelled = threading.Event()

    @staticmethod
    def after(seconds: float) -> Deadline:
        return Deadline(timeout=seconds)

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def expired(self) -> bool:
        return self._expires_at is not None and self._clock() >= self._expires_at

    def remaining(self) -> float | None:
        """Seconds left, or None when there is no timeout."""
        if self._expires_at is None:
            return None
        return max(self._expires_at - self._clock(), 0.0)

    def check(self) -> None:
        if self.cancelled:
            raise OperationCancelled("Operation was cancelled")
        if self.expired:
            raise DeadlineExceeded("Operation deadline exceeded")


def check_deadline(deadline: Deadline | None) -> None:
    if deadline is not None:
        deadline.check()
