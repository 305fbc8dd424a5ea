"""
Hosted agent inference client (HTTP transport).

Responsibilities:
- POST the user's message to the agent inference endpoint with a fresh
  pseudo-identity (user_id, session_id) per request.
- Return the raw response body text. The body usually, not always, contains
  JSON; interpreting it is the extractor's job, so non-2xx bodies are returned
  as-is (and logged).
- Wrap network failures in ApiCallError.

Environment variables (via Config):
- MINDMATE_API_URL          (default: https://agent-prod.studio.lyzr.ai/v3/inference/chat/)
- MINDMATE_API_KEY          (sent as x-api-key)
- MINDMATE_AGENT_ID         (default: 68e0e2a0615699d53b623bbc)
- MINDMATE_TIMEOUT_SECONDS  (default: 60)
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

import requests

from mindmate.config import Config
from mindmate.infrastructure.identity import PseudoIdentity, RandomIdGenerator
from mindmate.interfaces.services.identity import IIdGenerator
from .exceptions import ApiCallError, TransportConfigError

logger = logging.getLogger(__name__)


class LyzrAgentClient:
    def __init__(
        self,
        api_url: Optional[str] = None,
        api_key: Optional[str] = None,
        agent_id: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        ids: Optional[IIdGenerator] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_url = api_url or Config.API_URL
        self.api_key = api_key if api_key is not None else Config.API_KEY
        self.agent_id = agent_id or Config.AGENT_ID
        self.timeout_seconds = timeout_seconds or Config.TIMEOUT_SECONDS
        self.ids = ids or RandomIdGenerator()
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
        }

    def build_payload(self, message: str, identity: Optional[PseudoIdentity] = None) -> Dict[str, Any]:
        identity = identity or PseudoIdentity.generate(self.ids)
        return {
            "user_id": identity.user_id,
            "agent_id": self.agent_id,
            "session_id": identity.session_id,
            "message": message,
        }

    def post_message(self, message: str) -> str:
        """
        Blocking request. Returns the raw body text.

        Raises:
            TransportConfigError: no endpoint URL configured
            ApiCallError: the request could not be completed
        """
        if not self.api_url:
            raise TransportConfigError("MINDMATE_API_URL is not set")

        payload = self.build_payload(message)
        try:
            resp = self.session.post(
                self.api_url,
                headers=self._headers(),
                json=payload,
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as e:
            raise ApiCallError(f"Agent request failed: {e}") from e

        if resp.status_code >= 400:
            logger.warning(f"Agent endpoint returned HTTP {resp.status_code}: {resp.text[:800]}")
        else:
            logger.debug(f"Agent endpoint returned HTTP {resp.status_code} ({len(resp.text)} chars)")
        return resp.text

    async def send(self, message: str) -> str:
        """IAgentTransport: run the blocking request off the event loop."""
        return await asyncio.to_thread(self.post_message, message)


__all__ = ["LyzrAgentClient"]
