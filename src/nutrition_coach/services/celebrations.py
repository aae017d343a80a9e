"""Celebration signals raised by goal milestones."""

from dataclasses import dataclass, field
from typing import Literal, Protocol
from uuid import UUID

CelebrationKind = Literal["shower", "burst"]

WATER_GOAL_CELEBRATION: CelebrationKind = "shower"
STREAK_RECORD_CELEBRATION: CelebrationKind = "burst"


class CelebrationSink(Protocol):
    """Receiver of celebration signals."""

    def trigger(self, user_id: UUID, kind: CelebrationKind) -> None:
        """Record that a celebration should be shown to the user."""


@dataclass
class CelebrationQueue(CelebrationSink):
    """Buffers celebrations until the caller collects them."""

    pending: dict[UUID, list[CelebrationKind]] = field(default_factory=dict)

    def trigger(self, user_id: UUID, kind: CelebrationKind) -> None:
        self.pending.setdefault(user_id, []).append(kind)

    def drain(self, user_id: UUID) -> list[CelebrationKind]:
        """Return and clear the pending celebrations of a user."""
        return self.pending.pop(user_id, [])
