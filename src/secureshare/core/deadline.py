"""Per-operation deadlines for store access."""

from __future__ import annotations

import time
from dataclasses import dataclass

from secureshare.core.errors import StorageTimeout


@dataclass(frozen=True)
class Deadline:
    """Absolute expiry instant on the monotonic clock."""

    expires_at: float

    @classmethod
    def after(cls, seconds: float) -> Deadline:
        """Return a deadline ``seconds`` from now."""
        return cls(time.monotonic() + seconds)

    def remaining(self) -> float:
        """Seconds left before expiry, never negative."""
        return max(0.0, self.expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        return time.monotonic() >= self.expires_at

    def check(self, operation: str) -> None:
        """Raise ``StorageTimeout`` if the deadline has passed."""
        if self.expired:
            raise StorageTimeout(f"deadline expired before {operation}")


def remaining_or_none(deadline: Deadline | None) -> float | None:
    """Return the remaining seconds, or ``None`` when there is no deadline."""
    if deadline is None:
        return None
    return deadline.remaining()
