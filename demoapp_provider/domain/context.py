"""Cancellation and deadline signal passed into every adapter operation."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class OperationContext:
    """Caller-owned cancellation flag plus an optional monotonic deadline.

    Attributes:
        cancel_event: Set by the caller to abandon the operation.
        deadline: ``time.monotonic()`` value after which the operation is
            treated as cancelled, or ``None`` for no deadline.
    """

    cancel_event: threading.Event = field(default_factory=threading.Event)
    deadline: Optional[float] = None

    @classmethod
    def background(cls) -> "OperationContext":
        """Return a context that never fires."""
        return cls()

    @classmethod
    def with_timeout(cls, seconds: float) -> "OperationContext":
        return cls(deadline=time.monotonic() + float(seconds))

    def cancel(self) -> None:
        self.cancel_event.set()

    @property
    def cancelled(self) -> bool:
        if self.cancel_event.is_set():
            return True
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or ``None`` without one."""
        if self.deadline is None:
            return None
        return self.deadline - time.monotonic()

    def reason(self) -> str:
        if self.cancel_event.is_set():
            return "operation cancelled"
        return "operation deadline exceeded"


__all__ = ["OperationContext"]
