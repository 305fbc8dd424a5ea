"""
Response extraction port.
"""
from __future__ import annotations
from typing import Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from mindmate.domain.entities.agent_response import ExtractionResult


class IResponseExtractor(Protocol):
    def extract(self, raw: str) -> "ExtractionResult":
        """Never raises; failures are reported through the result."""
        ...

__all__ = ["IResponseExtractor"]
