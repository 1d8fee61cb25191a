from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class User:
    """An employee account that owns punches."""

    user_id: int
    username: str
    password_hash: str
    display_name: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def name(self) -> str:
        """Label used in chat notifications and the session."""
        return self.display_name or self.username
