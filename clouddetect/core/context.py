import threading
import time
from typing import Optional

from clouddetect.models import ProbeEvent
from clouddetect.utils.observability import ProbeObserver, notify


class DetectionContext:
    """
    Deadline and cancellation signal shared by every detector of one detection call.

    The cancellation flag is a threading.Event so that executor threads running
    blocking I/O observe it too. Only the orchestrator cancels; detectors read.
    """

    def __init__(self, timeout: float, observer: Optional[ProbeObserver] = None):
        self.timeout = timeout
        self.started_at = time.monotonic()
        self.deadline = self.started_at + timeout
        self._observer = observer
        self._cancelled = threading.Event()
        self._cancel_lock = threading.Lock()
        self._cancel_reason: Optional[str] = None

    def remaining(self) -> float:
        """Seconds left before the deadline, never negative."""
        return max(0.0, self.deadline - time.monotonic())

    def elapsed(self) -> float:
        return time.monotonic() - self.started_at

    @property
    def expired(self) -> bool:
        return time.monotonic() >= self.deadline

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def cancel_reason(self) -> Optional[str]:
        return self._cancel_reason

    @property
    def done(self) -> bool:
        """True once detectors should stop: cancelled or out of time."""
        return self.cancelled or self.expired

    def cancel(self, reason: str = "cancelled") -> None:
        # Idempotent: the first reason sticks
        with self._cancel_lock:
            if self._cancelled.is_set():
                return
            self._cancel_reason = reason
            self._cancelled.set()

    def emit(self, event: ProbeEvent) -> None:
        notify(self._observer, event)
