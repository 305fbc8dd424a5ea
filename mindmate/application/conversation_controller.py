"""
Conversation controller.

Owns the transcript, the pending input buffer and the composing flag. One
submission produces exactly one agent entry:

- transport ok, extraction ok      -> response.message      (after reply_delay)
- transport ok, extraction failed  -> EXTRACTION_FALLBACK   (after reply_delay)
- transport raised                 -> TRANSPORT_FALLBACK    (immediately)

Runs on a single asyncio loop; overlapping submissions are rejected while
composing, so the transcript needs no locking.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Awaitable, Callable, List, Optional

from mindmate.domain.entities.agent_response import EXTRACTION_FALLBACK, TRANSPORT_FALLBACK_MESSAGE
from mindmate.domain.entities.transcript import Transcript
from mindmate.domain.entities.transcript_entry import TranscriptEntry
from mindmate.infrastructure.identity import RandomIdGenerator
from mindmate.infrastructure.parsing.loose_json import LooseJsonExtractor
from mindmate.interfaces.services.extraction import IResponseExtractor
from mindmate.interfaces.services.identity import IIdGenerator
from mindmate.interfaces.services.transport import IAgentTransport

logger = logging.getLogger(__name__)

Listener = Callable[["ConversationController"], None]


class ConversationController:
    def __init__(
        self,
        transport: IAgentTransport,
        extractor: Optional[IResponseExtractor] = None,
        ids: Optional[IIdGenerator] = None,
        reply_delay: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.transport = transport
        self.extractor = extractor or LooseJsonExtractor()
        self.ids = ids or RandomIdGenerator()
        self.reply_delay = reply_delay
        self._sleep = sleep
        self._now = now
        self.transcript = Transcript()
        self.input_text = ""
        self._composing = False
        self._listeners: List[Listener] = []

    # ---------- State ----------

    @property
    def composing(self) -> bool:
        return self._composing

    @property
    def can_submit(self) -> bool:
        return not self._composing and bool(self.input_text.strip())

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as e:
                logger.error(f"Transcript listener failed: {e!r}")

    def _append(self, text: str, is_user: bool, composing: bool) -> TranscriptEntry:
        """Append an entry and set the composing flag, then notify once."""
        entry = TranscriptEntry(id=self.ids.new_id(), text=text, is_user=is_user, timestamp=self._now())
        self.transcript.append(entry)
        self._composing = composing
        self._notify()
        return entry

    # ---------- Submission ----------

    async def submit(self, text: Optional[str] = None) -> Optional[TranscriptEntry]:
        """
        Send user text (or the pending input buffer) to the agent.

        Returns the agent entry appended for this submission, or None when the
        input was blank or a reply is already pending.
        """
        raw_input = self.input_text if text is None else text
        message = (raw_input or "").strip()
        if not message:
            return None
        if self._composing:
            logger.debug("Submission ignored while a reply is pending")
            return None

        self.input_text = ""
        self._append(message, is_user=True, composing=True)

        try:
            body = await self.transport.send(message)
        except Exception as e:
            logger.error(f"Error contacting agent: {e!r}")
            entry = self._append(TRANSPORT_FALLBACK_MESSAGE, is_user=False, composing=False)
            return entry

        result = self.extractor.extract(body)
        if result.ok and result.response is not None:
            reply = result.response.message
        else:
            logger.warning(f"Agent response error: {result.reason}")
            logger.warning(f"Raw response: {str(body)[:800]}")
            reply = EXTRACTION_FALLBACK.message

        await self._sleep(self.reply_delay)
        entry = self._append(reply, is_user=False, composing=False)
        return entry


__all__ = ["ConversationController"]
