import pytest

from api.config import Settings


class FakeProvider:
    def __init__(self, response_text: str):
        self._response_text = response_text
        self.prompts = []

    def generate(self, *, user: str) -> str:
        self.prompts.append(user)
        return self._response_text


@pytest.fixture
def fake_provider_factory():
    def _make(response_text: str):
        return FakeProvider(response_text)
    return _make


@pytest.fixture
def ready_settings():
    return Settings(gemini_api_key="test-key")


@pytest.fixture
def make_todos():
    from todo_ai.models import Todo

    def _make(*texts: str):
        return [Todo(id=f"t{i}", text=text) for i, text in enumerate(texts, start=1)]
    return _make
