from __future__ import annotations

from typing import Iterable, Mapping, Union

from todo_ai.models import Todo

PROMPT_HEADER = "You are a task prioritization assistant. Here are the tasks to evaluate:"
PROMPT_INSTRUCTIONS = (
    'Return ONLY a JSON array with two keys per entry: "index" (the original task number) '
    'and "priority" (1 is highest priority). Respond strictly in JSON.'
)


def _todo_text(todo: Union[Todo, Mapping, str]) -> str:
    if isinstance(todo, Todo):
        return todo.text
    if isinstance(todo, Mapping):
        return str(todo.get("text", ""))
    return str(todo)


def build_prioritization_prompt(todos: Iterable[Union[Todo, Mapping, str]]) -> str:
    """Number the todos from 1 in list order and ask for a JSON ranking.

    Task text is interpolated as-is; the numbering is what the reconciler
    matches `index` values against, so the order passed here must be the
    order passed to `reconcile`.
    """
    todo_lines = "\n".join(
        f"{position}. {_todo_text(todo)}" for position, todo in enumerate(todos, start=1)
    )
    return f"{PROMPT_HEADER}\n\n{todo_lines}\n\n{PROMPT_INSTRUCTIONS}"
