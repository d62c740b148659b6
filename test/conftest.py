import httpx
import pytest

from llm.llm_client import LLMClient
from extraction.task_extractor import TaskExtractor

class FakeProvider:
    def __init__(self, payload=None, error: Exception = None):
        self._payload = payload
        self._error = error
        self.messages = []

    async def generate(self, *, message: str):
        self.messages.append(message)
        if self._error is not None:
            raise self._error
        return self._payload

@pytest.fixture
def fake_provider_factory():
    def _make(payload=None, error: Exception = None):
        return FakeProvider(payload, error)
    return _make

@pytest.fixture
def extractor_factory(fake_provider_factory):
    def _make(payload=None, error: Exception = None):
        provider = fake_provider_factory(payload, error)
        return TaskExtractor(llm_client=LLMClient(provider=provider)), provider
    return _make

@pytest.fixture
def offline_extractor(extractor_factory):
    extractor, _ = extractor_factory(error=httpx.ConnectError("connection refused"))
    return extractor
