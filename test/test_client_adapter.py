import asyncio
import json

import httpx
import pytest

from client.prioritize_client import PrioritizationFailed, PrioritizeClient, apply_prioritization
from todo_ai.models import Todo


def _client(handler):
    return PrioritizeClient(base_url="http://testserver", transport=httpx.MockTransport(handler))


def test_success_returns_reconciled_list(make_todos):
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={"todos": [{"id": "t2", "text": "b", "priority": 1}, {"id": "t1", "text": "a", "priority": 2}]},
        )

    out = _client(handler).prioritize_todos(make_todos("a", "b"))

    assert seen["path"] == "/api/prioritize"
    assert seen["body"] == {"todos": [{"id": "t1", "text": "a"}, {"id": "t2", "text": "b"}]}
    assert [(t.id, t.priority) for t in out] == [("t2", 1), ("t1", 2)]


def test_empty_list_makes_no_call():
    def handler(request):
        raise AssertionError("no request expected")

    assert _client(handler).prioritize_todos([]) == []


def test_error_message_is_surfaced_verbatim(make_todos):
    def handler(request):
        return httpx.Response(500, json={"message": "Could not parse AI response."})

    with pytest.raises(PrioritizationFailed) as exc:
        _client(handler).prioritize_todos(make_todos("a"))
    assert exc.value.message == "Could not parse AI response."


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(502, text="<html>Bad gateway</html>"),
        httpx.Response(500, json={"message": 42}),
        httpx.Response(500, json=["unexpected"]),
    ],
)
def test_malformed_error_body_uses_generic_message(make_todos, response):
    with pytest.raises(PrioritizationFailed) as exc:
        _client(lambda request: response).prioritize_todos(make_todos("a"))
    assert exc.value.message == "Failed to prioritize tasks."


def test_transport_error_uses_generic_message(make_todos):
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(PrioritizationFailed) as exc:
        _client(handler).prioritize_todos(make_todos("a"))
    assert exc.value.message == "Failed to prioritize tasks."


class RecordingStore:
    def __init__(self):
        self.calls = []

    async def update_priorities(self, user_id, priorities):
        self.calls.append((user_id, list(priorities)))
        return len(self.calls[-1][1])


def test_apply_prioritization_renumbers_and_persists_in_one_batch(make_todos):
    def handler(request):
        return httpx.Response(
            200,
            json={"todos": [{"id": "t2", "text": "b", "priority": 1}, {"id": "t1", "text": "a", "priority": 1}]},
        )

    store = RecordingStore()
    out = asyncio.run(apply_prioritization(make_todos("a", "b"), _client(handler), store, user_id="u1"))

    assert [(t.id, t.priority) for t in out] == [("t2", 1), ("t1", 2)]
    assert store.calls == [("u1", [("t2", 1), ("t1", 2)])]


def test_apply_prioritization_failure_leaves_state_untouched(make_todos):
    todos = make_todos("a", "b")
    store = RecordingStore()

    def handler(request):
        return httpx.Response(400, json={"message": "Please provide at least one todo item."})

    with pytest.raises(PrioritizationFailed):
        asyncio.run(apply_prioritization(todos, _client(handler), store))

    assert store.calls == []
    assert [t.priority for t in todos] == [None, None]


def test_apply_prioritization_without_store(make_todos):
    def handler(request):
        return httpx.Response(200, json={"todos": [{"text": "a", "priority": 5}]})

    out = asyncio.run(apply_prioritization([Todo(text="a")], _client(handler)))
    assert out[0].priority == 1
