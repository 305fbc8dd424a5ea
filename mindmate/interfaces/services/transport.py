"""
Agent transport port. The controller depends on this; infra implements.
"""
from __future__ import annotations
from typing import Protocol


class IAgentTransport(Protocol):
    async def send(self, message: str) -> str:
        """
        Deliver the user's message to the remote agent and return the raw
        response body text. Raise on transport failure.
        """
        ...

__all__ = ["IAgentTransport"]
