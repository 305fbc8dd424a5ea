"""
Composition module for DI (edge wiring).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from mindmate.config import Config
from mindmate.application.conversation_controller import ConversationController
from mindmate.infrastructure.identity import RandomIdGenerator

if TYPE_CHECKING:
    from mindmate.interfaces.services.transport import IAgentTransport


def build_transport(
    api_url: str | None = None,
    api_key: str | None = None,
    agent_id: str | None = None,
) -> "IAgentTransport":
    """
    Construct and return the HTTP transport for the hosted agent.
    """
    from mindmate.infrastructure.transport.lyzr_client import LyzrAgentClient
    return LyzrAgentClient(api_url=api_url, api_key=api_key, agent_id=agent_id)


def build_controller(
    transport: Optional["IAgentTransport"] = None,
    reply_delay: float | None = None,
) -> ConversationController:
    """
    Construct a ConversationController wired to the configured transport.
    """
    from mindmate.infrastructure.parsing.loose_json import LooseJsonExtractor
    return ConversationController(
        transport=transport or build_transport(),
        extractor=LooseJsonExtractor(),
        ids=RandomIdGenerator(),
        reply_delay=Config.REPLY_DELAY_SECONDS if reply_delay is None else reply_delay,
    )
