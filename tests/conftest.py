from types import SimpleNamespace
from typing import Callable, List, Optional, Sequence

import pytest

from settings import Settings


class FakeLLMClient:
    """Stands in for ``openai.OpenAI``; records every call it receives.

    ``chat_handler`` returns the message content for a chat call and
    ``embedding_handler`` the vector for an embedding call. Either may raise.
    """

    def __init__(
        self,
        chat_handler: Optional[Callable[..., str]] = None,
        embedding_handler: Optional[Callable[..., Sequence[float]]] = None,
    ):
        self.chat_calls: List[dict] = []
        self.embedding_calls: List[dict] = []
        self._chat_handler = chat_handler
        self._embedding_handler = embedding_handler
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create_chat))
        self.embeddings = SimpleNamespace(create=self._create_embedding)

    def _create_chat(self, **kwargs):
        self.chat_calls.append(kwargs)
        if self._chat_handler is None:
            raise RuntimeError("Error code: 404 - model is not found")
        content = self._chat_handler(**kwargs)
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])

    def _create_embedding(self, **kwargs):
        self.embedding_calls.append(kwargs)
        if self._embedding_handler is None:
            raise RuntimeError("embedding provider unavailable")
        vector = self._embedding_handler(**kwargs)
        return SimpleNamespace(data=[SimpleNamespace(embedding=vector)])


@pytest.fixture
def fake_client():
    return FakeLLMClient


@pytest.fixture
def rule_only_settings():
    return Settings(api_key=None, enable_semantic=False, enable_ai=False)


@pytest.fixture
def ai_settings():
    return Settings(api_key="test-key", llm_model="test/preferred-model", enable_semantic=False)


@pytest.fixture
def semantic_settings():
    return Settings(api_key="test-key", enable_semantic=True, enable_ai=False)


@pytest.fixture
def sample_resume():
    return (
        "Jane Doe\n"
        "jane@example.com | +1 555-123-4567\n"
        "\n"
        "Experience\n"
        "Backend Engineer, Acme Corp  Jan 2019 - Dec 2022\n"
        "- Built Docker based microservices on AWS, reduced latency by 40%\n"
        "- Led migration to Kubernetes and automated CI/CD pipelines\n"
        "- Optimized PostgreSQL queries and mentored two engineers\n"
        "\n"
        "Education\n"
        "B.Tech in Computer Science, State University, 2014 - 2018\n"
        "\n"
        "Skills\n"
        "Python, Docker, Kubernetes, AWS, PostgreSQL, Terraform\n"
    )


@pytest.fixture
def sample_jd():
    return (
        "Senior Backend Engineer.\n"
        "Requirements: Python, Docker, Kubernetes, AWS and Terraform.\n"
        "Experience with Kafka is a plus."
    )
