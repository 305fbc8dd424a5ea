"""
Shared test fixtures for the chat controller and transport tests.

No test touches the network: the transport is replaced by in-memory fakes and
HTTP calls are patched at the requests.Session boundary.
"""

import os
import sys
from datetime import datetime, timedelta
from typing import List, Optional

import pytest

# Ensure project root is on sys.path so 'mindmate' imports resolve in tests
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)


class SequentialIds:
    """Deterministic IIdGenerator: id1, id2, ..."""

    def __init__(self, prefix: str = "id") -> None:
        self.prefix = prefix
        self.count = 0

    def new_id(self) -> str:
        self.count += 1
        return f"{self.prefix}{self.count}"


class FakeTransport:
    """IAgentTransport returning a canned body or raising a canned error."""

    def __init__(self, body: str = "", error: Optional[Exception] = None) -> None:
        self.body = body
        self.error = error
        self.calls: List[str] = []
        self.on_send = None

    async def send(self, message: str) -> str:
        self.calls.append(message)
        if self.on_send is not None:
            self.on_send(message)
        if self.error is not None:
            raise self.error
        return self.body


class RecordingSleep:
    """Stand-in for asyncio.sleep that records delays instead of waiting."""

    def __init__(self) -> None:
        self.delays: List[float] = []
        self.on_sleep = None

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)
        if self.on_sleep is not None:
            self.on_sleep(seconds)


class FixedClock:
    def __init__(self, start: datetime = datetime(2024, 5, 1, 9, 30)) -> None:
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(seconds=1)
        return value


@pytest.fixture
def ids():
    return SequentialIds()


@pytest.fixture
def fake_sleep():
    return RecordingSleep()


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def make_controller(ids, fake_sleep, clock):
    from mindmate.application.conversation_controller import ConversationController

    def _make(transport, reply_delay: float = 1.0):
        return ConversationController(
            transport=transport,
            ids=ids,
            reply_delay=reply_delay,
            sleep=fake_sleep,
            now=clock,
        )

    return _make
