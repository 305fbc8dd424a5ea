"""
Agent response DTOs and fallback literals.

The remote agent is asked to reply with a document shaped like:

    {
      "response": {"message": "...", "tone": "...", "focus_area": "...", "conversation_type": "..."},
      "metadata": {"response_type": "...", "safety_level": "...", "engagement_style": "..."}
    }

Only `response.message` is load-bearing; every other tag is optional pass-through.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


def _tag(section: Dict[str, Any], key: str) -> Optional[str]:
    value = section.get(key)
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class AgentResponse:
    message: str
    tone: Optional[str] = None
    focus_area: Optional[str] = None
    conversation_type: Optional[str] = None
    response_type: Optional[str] = None
    safety_level: Optional[str] = None
    engagement_style: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, tree: Dict[str, Any]) -> "AgentResponse":
        """
        Cast a parsed tree to AgentResponse.

        Callers are expected to have checked that tree["response"]["message"] is a
        non-empty string; missing tags simply become None.
        """
        response = tree.get("response") or {}
        metadata = tree.get("metadata")
        if not isinstance(metadata, dict):
            metadata = {}
        return cls(
            message=response["message"],
            tone=_tag(response, "tone"),
            focus_area=_tag(response, "focus_area"),
            conversation_type=_tag(response, "conversation_type"),
            response_type=_tag(metadata, "response_type"),
            safety_level=_tag(metadata, "safety_level"),
            engagement_style=_tag(metadata, "engagement_style"),
            raw=tree,
        )

    def to_dict(self) -> Dict[str, Any]:
        response = {"message": self.message}
        for key in ("tone", "focus_area", "conversation_type"):
            value = getattr(self, key)
            if value is not None:
                response[key] = value
        metadata = {}
        for key in ("response_type", "safety_level", "engagement_style"):
            value = getattr(self, key)
            if value is not None:
                metadata[key] = value
        return {"response": response, "metadata": metadata}


@dataclass(frozen=True)
class ExtractionResult:
    """
    Outcome of pulling an AgentResponse out of raw text.

    `reason` is diagnostic text for logs only.
    """
    ok: bool
    response: Optional[AgentResponse] = None
    reason: str = ""

    @classmethod
    def success(cls, response: AgentResponse) -> "ExtractionResult":
        return cls(ok=True, response=response)

    @classmethod
    def failure(cls, reason: str) -> "ExtractionResult":
        return cls(ok=False, response=None, reason=reason)


EXTRACTION_FALLBACK = AgentResponse(
    message="Tell me more about what is on your mind, I am here to listen and support you.",
    tone="supportive",
    focus_area="emotional_support",
    conversation_type="active_listening",
    response_type="therapeutic",
    safety_level="appropriate",
    engagement_style="supportive",
)

TRANSPORT_FALLBACK_MESSAGE = (
    "I am here for you. Sometimes it is good to just be present with your feelings. "
    "How are you feeling right now?"
)

__all__ = [
    "AgentResponse",
    "ExtractionResult",
    "EXTRACTION_FALLBACK",
    "TRANSPORT_FALLBACK_MESSAGE",
]
