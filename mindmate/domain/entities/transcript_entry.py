"""
POCO DTO for a single chat transcript entry. No framework dependencies.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

Origin = Literal["fromUser", "fromAgent"]


@dataclass(frozen=True)
class TranscriptEntry:
    id: str
    text: str
    is_user: bool
    timestamp: datetime

    @property
    def origin(self) -> Origin:
        return "fromUser" if self.is_user else "fromAgent"

__all__ = ["TranscriptEntry", "Origin"]
