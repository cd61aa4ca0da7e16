import pytest
from fastapi.testclient import TestClient

from kbrelay.config import Settings
from kbrelay.knowledge_base import KnowledgeBaseAnswer
from kbrelay.main import create_app


class FakeKnowledgeBase:
    """Deterministic stand-in for the Bedrock client."""

    def __init__(self, answer=None, error=None):
        self.answer = answer or KnowledgeBaseAnswer(answer="A", session_id="S", citations=[])
        self.error = error
        self.calls = []
        self.closed = False

    def retrieve_and_generate(self, query, session_id=None):
        self.calls.append((query, session_id))
        if self.error is not None:
            raise self.error
        return self.answer

    def close(self):
        self.closed = True


@pytest.fixture
def fake_kb():
    return FakeKnowledgeBase()


@pytest.fixture
def make_client():
    clients = []

    def _make(knowledge_base, **overrides):
        settings = Settings(knowledge_base_id="KB12345678", **overrides)
        client = TestClient(create_app(settings, knowledge_base=knowledge_base))
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client, fake_kb):
    return make_client(fake_kb)
