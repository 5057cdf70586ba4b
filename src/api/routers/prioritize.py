import asyncio
import logging
import time

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.backend import BackendAPI
from api.dependencies import get_backend
from api.metrics import REQUESTS_TOTAL, REQUEST_LATENCY_SECONDS, TODOS_PRIORITIZED_TOTAL
from todo_ai.errors import TodoAIError

router = APIRouter()
logger = logging.getLogger(__name__)

ENDPOINT = "/api/prioritize"
GENERIC_FAILURE = "Failed to prioritize tasks."


async def _read_todos(request: Request):
    # Unreadable or non-object bodies count as a missing todo list.
    try:
        payload = await request.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    return payload.get("todos")


def _record(status: int, start: float) -> None:
    REQUESTS_TOTAL.labels(endpoint=ENDPOINT, status=str(status)).inc()
    REQUEST_LATENCY_SECONDS.labels(endpoint=ENDPOINT).observe(time.time() - start)


@router.post(ENDPOINT)
async def prioritize_todos(
    request: Request,
    backend: BackendAPI = Depends(get_backend),
):
    start = time.time()
    todos = await _read_todos(request)

    try:
        prioritized = await asyncio.to_thread(backend.prioritize, todos)
    except TodoAIError as e:
        logger.error(f"Error prioritizing todos: {e.status_code} {e.message}")
        _record(e.status_code, start)
        return JSONResponse(status_code=e.status_code, content=e.to_payload())
    except Exception:
        logger.exception("Unexpected error while prioritizing todos")
        _record(500, start)
        return JSONResponse(status_code=500, content={"message": GENERIC_FAILURE})

    _record(200, start)
    TODOS_PRIORITIZED_TOTAL.inc(len(prioritized))
    # exclude_unset echoes each todo as submitted, plus its new priority
    return {"todos": [todo.model_dump(exclude_unset=True) for todo in prioritized]}
