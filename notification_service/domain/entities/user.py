"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Identity that can send and receive notifications."""

    id: int | None
    username: str
    email: str
    is_active: bool = True
    created_at: datetime | None = None
