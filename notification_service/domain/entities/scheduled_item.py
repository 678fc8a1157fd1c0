"""Domain entity describing a schedulable scene or task."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ScheduledItemKind(str, Enum):
    """Kinds of items the scheduling feature can schedule."""

    SCENE = "scene"
    TASK = "task"


@dataclass
class ScheduledItem:
    """Read-only snapshot of an item supplied by the scheduling feature."""

    id: int | None
    kind: ScheduledItemKind
    title: str
    project_id: int | None = None
    scheduled_date: str | None = None
    scheduled_time: str | None = None
    created_by: int | None = None
    assignee_ids: list[int] = field(default_factory=list)


__all__ = ["ScheduledItem", "ScheduledItemKind"]
