from __future__ import annotations

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator


class Todo(BaseModel):
    # Extra keys sent by the browser are kept and echoed back unchanged.
    model_config = ConfigDict(extra="allow")

    # Opaque; assigned by the store and echoed back as received.
    id: Optional[Any] = None
    text: str
    completed: bool = False
    priority: Optional[int] = None

    @field_validator("completed", "priority", mode="wrap")
    @classmethod
    def drop_unusable(cls, value: Any, handler, info: ValidationInfo) -> Any:
        # Only text is needed to rank a todo; a malformed side field falls back to its default.
        try:
            return handler(value)
        except ValidationError:
            return cls.model_fields[info.field_name].default


class NewTodoIn(BaseModel):
    text: str = Field(..., min_length=1)

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("text must not be blank")
        return v2


class TodoPatchIn(BaseModel):
    text: Optional[str] = None
    completed: Optional[bool] = None


class PriorityUpdate(BaseModel):
    id: Union[str, int]
    priority: int


class PriorityBatchIn(BaseModel):
    todos: List[PriorityUpdate] = Field(default_factory=list)


class PrioritizeOut(BaseModel):
    todos: List[Todo] = Field(default_factory=list)


class ErrorOut(BaseModel):
    message: str
    detail: Optional[Any] = None
