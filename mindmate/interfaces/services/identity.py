"""
Identifier source port (entry ids, pseudo user/session ids).
"""
from __future__ import annotations
from typing import Protocol


class IIdGenerator(Protocol):
    def new_id(self) -> str:
        ...

__all__ = ["IIdGenerator"]
