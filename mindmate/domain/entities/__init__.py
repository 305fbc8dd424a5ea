"""
Domain entities re-exported for convenience.
"""
from .transcript_entry import TranscriptEntry, Origin
from .transcript import Transcript
from .agent_response import (
    AgentResponse,
    ExtractionResult,
    EXTRACTION_FALLBACK,
    TRANSPORT_FALLBACK_MESSAGE,
)

__all__ = [
    "TranscriptEntry",
    "Origin",
    "Transcript",
    "AgentResponse",
    "ExtractionResult",
    "EXTRACTION_FALLBACK",
    "TRANSPORT_FALLBACK_MESSAGE",
]
