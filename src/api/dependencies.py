from typing import Optional

from fastapi import Depends, Header, HTTPException

from api import state
from api.backend import BackendAPI
from api.config import Settings
from storage.todo_store import TodoStore


def get_settings() -> Settings:
    return state.settings


def get_backend(settings: Settings = Depends(get_settings)) -> BackendAPI:
    return BackendAPI(settings=settings)


def get_todo_store() -> TodoStore:
    if state.todo_store is None:
        raise HTTPException(status_code=503, detail="Todo storage is not configured")
    return state.todo_store


def get_user_id(
    x_user_id: Optional[str] = Header(default=None, alias="X-User-Id"),
    settings: Settings = Depends(get_settings),
) -> str:
    user_id = (x_user_id or "").strip()
    return user_id or settings.default_user_id
