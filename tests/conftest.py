"""Shared fixtures: fake HTTP transport, fake Gemini model and a controllable clock."""
import os
import sys
from types import SimpleNamespace

import httpx
import pytest

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))


class FakeClock:
    """Monotonic clock whose sleep advances time instantly."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeGeminiModel:
    """Stands in for GenerativeModel; replies are strings or exceptions to raise."""

    def __init__(self, replies, clock=None):
        self.replies = list(replies)
        self.prompts: list[str] = []
        self.call_times: list[float] = []
        self.clock = clock

    async def generate_content_async(self, prompt):
        self.prompts.append(prompt)
        if self.clock is not None:
            self.call_times.append(self.clock())
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return SimpleNamespace(text=reply)


class FakeLLM:
    """Minimal GeminiClient replacement for classifier and pipeline tests."""

    def __init__(self, replies):
        self.replies = list(replies)
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def make_client(handler) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by `handler(request)`."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def fake_clock():
    return FakeClock()
