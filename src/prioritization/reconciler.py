from __future__ import annotations

import math
from typing import Any, Iterable, List, Optional, Sequence

from todo_ai.models import Todo

# Sort key for todos that somehow end up without a priority.
UNASSIGNED_PRIORITY = math.inf


def _as_number(value: Any) -> Optional[float]:
    # bool is an int subclass; true/false in model output is not a position.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _usable_priority(value: Any) -> Optional[int]:
    number = _as_number(value)
    if number is None:
        return None
    if isinstance(number, float):
        if not number.is_integer():
            return None
        return int(number)
    return number


def _first_entry_for(position: int, ranking: Sequence[Any]) -> Optional[dict]:
    for entry in ranking:
        if isinstance(entry, dict) and _as_number(entry.get("index")) == position:
            return entry
    return None


def _sort_key(todo: Todo) -> float:
    return UNASSIGNED_PRIORITY if todo.priority is None else todo.priority


def reconcile(todos: Iterable[Todo], ranking: Any) -> List[Todo]:
    """Apply a parsed ranking to the todos it was built from.

    The todo at 1-based position i takes the priority of the first ranking
    entry whose index is i, or i itself when no entry matches or the
    matching entry has no whole-number priority. The result is stably sorted ascending
    by priority and always contains exactly the input todos.
    """
    entries = ranking if isinstance(ranking, list) else []

    reconciled = []
    for position, todo in enumerate(todos, start=1):
        entry = _first_entry_for(position, entries)
        priority = _usable_priority(entry.get("priority")) if entry is not None else None
        if priority is None:
            priority = position
        reconciled.append(todo.model_copy(update={"priority": priority}))

    return sorted(reconciled, key=_sort_key)
