"""
Identifier generation for transcript entries and request pseudo-identities.

Ids only need to be unique enough for one chat session; no cryptographic
strength is required.
"""

from __future__ import annotations

import random
import string
from dataclasses import dataclass
from typing import Optional

from mindmate.interfaces.services.identity import IIdGenerator

_BASE36 = string.digits + string.ascii_lowercase


class RandomIdGenerator:
    """Short lowercase base-36 ids, e.g. 'k3j9x0q2a'."""

    def __init__(self, length: int = 9, rng: Optional[random.Random] = None) -> None:
        if length < 1:
            raise ValueError("length must be positive")
        self.length = length
        self._rng = rng or random.Random()

    def new_id(self) -> str:
        return "".join(self._rng.choice(_BASE36) for _ in range(self.length))


@dataclass(frozen=True)
class PseudoIdentity:
    """Throwaway user/session ids sent with each agent request."""
    user_id: str
    session_id: str

    @classmethod
    def generate(cls, ids: IIdGenerator) -> "PseudoIdentity":
        return cls(
            user_id=f"user{ids.new_id()}@test.com",
            session_id=f"session{ids.new_id()}",
        )


__all__ = ["RandomIdGenerator", "PseudoIdentity"]
