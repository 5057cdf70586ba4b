"""
Client-side adapter for the prioritization endpoint.

`PrioritizeClient` performs the HTTP call; `apply_prioritization` runs the
whole client flow: call the endpoint, renumber the returned order 1..n and
persist the new priorities in one batch. Failures raise before anything
is persisted and never mutate the caller's list.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional, Sequence

import httpx

from storage.todo_store import TodoStore
from todo_ai.models import Todo

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Failed to prioritize tasks."


class PrioritizationFailed(Exception):
    """Message meant to be shown verbatim to the user."""

    def __init__(self, message: str = GENERIC_FAILURE):
        self.message = message
        super().__init__(message)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return GENERIC_FAILURE
    message = body.get("message") if isinstance(body, dict) else None
    return message if isinstance(message, str) else GENERIC_FAILURE


class PrioritizeClient:
    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        timeout_s: float = 60.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport

    def prioritize_todos(self, todos: Sequence[Todo]) -> List[Todo]:
        if len(todos) == 0:
            return list(todos)

        payload = {"todos": [t.model_dump(exclude_unset=True) for t in todos]}
        try:
            with httpx.Client(
                base_url=self.base_url, timeout=self.timeout_s, transport=self._transport
            ) as client:
                r = client.post("/api/prioritize", json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Prioritize request failed: {e}")
            raise PrioritizationFailed() from e

        if r.is_error:
            raise PrioritizationFailed(_error_message(r))

        try:
            data: Any = r.json()
            return [Todo.model_validate(t) for t in data["todos"]]
        except (ValueError, KeyError, TypeError) as e:
            raise PrioritizationFailed() from e


async def apply_prioritization(
    todos: Sequence[Todo],
    client: PrioritizeClient,
    store: Optional[TodoStore] = None,
    user_id: str = "default",
) -> List[Todo]:
    """Prioritize, renumber 1..n in the returned order and persist the priorities."""
    prioritized = await asyncio.to_thread(client.prioritize_todos, todos)
    normalized = [
        todo.model_copy(update={"priority": position})
        for position, todo in enumerate(prioritized, start=1)
    ]

    if store is not None:
        await store.update_priorities(
            user_id, [(t.id, t.priority) for t in normalized if t.id is not None]
        )
    return normalized
