import logging
import time

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_todo_store, get_user_id
from api.metrics import REQUESTS_TOTAL, REQUEST_LATENCY_SECONDS
from storage.todo_store import TodoStore
from todo_ai.models import NewTodoIn, PriorityBatchIn, TodoPatchIn

router = APIRouter(prefix="/api/todos")
logger = logging.getLogger(__name__)


@router.get("")
async def list_todos(
    user_id: str = Depends(get_user_id),
    store: TodoStore = Depends(get_todo_store),
) -> dict:
    """List the user's todos, highest priority first."""
    start = time.time()
    todos = await store.list_for_user(user_id)
    REQUESTS_TOTAL.labels(endpoint="/api/todos", status="200").inc()
    REQUEST_LATENCY_SECONDS.labels(endpoint="/api/todos").observe(time.time() - start)
    return {"todos": [t.model_dump() for t in todos]}


@router.post("", status_code=201)
async def create_todo(
    payload: NewTodoIn,
    user_id: str = Depends(get_user_id),
    store: TodoStore = Depends(get_todo_store),
) -> dict:
    todo = await store.insert(user_id, payload.text)
    return {"todo": todo.model_dump()}


@router.patch("/{todo_id}")
async def update_todo(
    todo_id: str,
    payload: TodoPatchIn,
    user_id: str = Depends(get_user_id),
    store: TodoStore = Depends(get_todo_store),
) -> dict:
    if payload.text is not None and not payload.text.strip():
        raise HTTPException(status_code=400, detail="text must not be blank")

    todo = await store.update(
        user_id,
        todo_id,
        text=payload.text.strip() if payload.text is not None else None,
        completed=payload.completed,
    )
    if todo is None:
        raise HTTPException(status_code=404, detail="Todo not found")
    return {"todo": todo.model_dump()}


@router.delete("/{todo_id}")
async def delete_todo(
    todo_id: str,
    user_id: str = Depends(get_user_id),
    store: TodoStore = Depends(get_todo_store),
) -> dict:
    if not await store.delete(user_id, todo_id):
        raise HTTPException(status_code=404, detail="Todo not found")
    return {"status": "deleted", "id": todo_id}


@router.put("/priorities")
async def save_priorities(
    payload: PriorityBatchIn,
    user_id: str = Depends(get_user_id),
    store: TodoStore = Depends(get_todo_store),
) -> dict:
    """Persist a whole prioritization result in one transaction."""
    try:
        updated = await store.update_priorities(
            user_id, [(item.id, item.priority) for item in payload.todos]
        )
    except Exception as e:
        logger.error(f"Failed to save priorities: {e}")
        raise HTTPException(status_code=500, detail="Unable to save priorities")
    return {"status": "saved", "updated": updated}
