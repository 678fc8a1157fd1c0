"""Outcome of replicating a notification across recipients."""

from __future__ import annotations

from dataclasses import dataclass, field

from .notification import Notification


@dataclass(frozen=True)
class FanoutFailure:
    """Recipient whose notification could not be stored."""

    recipient_id: int
    reason: str
    error_code: str = "STORE_UNAVAILABLE"


@dataclass
class FanoutResult:
    """Created notifications and failed recipients of one fan-out call."""

    created: list[Notification] = field(default_factory=list)
    failures: list[FanoutFailure] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return not self.failures

    @property
    def is_partial(self) -> bool:
        return bool(self.created) and bool(self.failures)

    @property
    def failed_recipient_ids(self) -> list[int]:
        return [failure.recipient_id for failure in self.failures]


__all__ = ["FanoutFailure", "FanoutResult"]
