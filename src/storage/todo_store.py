"""
Todo persistence backed by PostgreSQL.

Rows are always scoped by user_id; a todo id belonging to another user is
treated as not found.
"""

import logging
import uuid
from typing import Iterable, List, Optional, Tuple, Union

from storage import db
from todo_ai.models import Todo

logger = logging.getLogger(__name__)

TodoId = Union[str, int, uuid.UUID]

_COLUMNS = "id, text, completed, priority"


def _parse_id(todo_id: TodoId) -> Optional[uuid.UUID]:
    if isinstance(todo_id, uuid.UUID):
        return todo_id
    try:
        return uuid.UUID(str(todo_id))
    except ValueError:
        return None


def _todo_from_record(record) -> Todo:
    return Todo(
        id=str(record["id"]),
        text=record["text"],
        completed=record["completed"],
        priority=record["priority"],
    )


class TodoStore:
    def __init__(self, pool=None):
        # Falls back to the application pool when none is injected.
        self._pool = pool

    @property
    def pool(self):
        return self._pool if self._pool is not None else db.get_pool()

    async def list_for_user(self, user_id: str) -> List[Todo]:
        """Todos of one user, by priority ascending (unranked last), then creation order."""
        query = f"""
            SELECT {_COLUMNS}
            FROM todos
            WHERE user_id = $1
            ORDER BY priority ASC NULLS LAST, created_at ASC
        """
        records = await self.pool.fetch(query, user_id)
        return [_todo_from_record(r) for r in records]

    async def insert(self, user_id: str, text: str) -> Todo:
        query = f"""
            INSERT INTO todos (user_id, text, completed)
            VALUES ($1, $2, FALSE)
            RETURNING {_COLUMNS}
        """
        record = await self.pool.fetchrow(query, user_id, text.strip())
        todo = _todo_from_record(record)
        logger.info(f"Inserted todo {todo.id} for user {user_id}")
        return todo

    async def update(
        self,
        user_id: str,
        todo_id: TodoId,
        text: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> Optional[Todo]:
        """Update text and/or completed; None when the todo does not exist for this user."""
        parsed_id = _parse_id(todo_id)
        if parsed_id is None:
            return None

        query = f"""
            UPDATE todos
            SET text = COALESCE($3, text),
                completed = COALESCE($4, completed)
            WHERE id = $1 AND user_id = $2
            RETURNING {_COLUMNS}
        """
        record = await self.pool.fetchrow(query, parsed_id, user_id, text, completed)
        return _todo_from_record(record) if record is not None else None

    async def delete(self, user_id: str, todo_id: TodoId) -> bool:
        parsed_id = _parse_id(todo_id)
        if parsed_id is None:
            return False

        status = await self.pool.execute(
            "DELETE FROM todos WHERE id = $1 AND user_id = $2",
            parsed_id,
            user_id,
        )
        # asyncpg returns the command tag, e.g. "DELETE 1"
        deleted = status.split()[-1] != "0"
        if deleted:
            logger.info(f"Deleted todo {todo_id} for user {user_id}")
        return deleted

    async def update_priorities(
        self, user_id: str, priorities: Iterable[Tuple[TodoId, int]]
    ) -> int:
        """Write all priorities in a single statement and return how many rows matched.

        Ids that do not belong to the user match nothing and are not counted.
        """
        ids = []
        values = []
        for todo_id, priority in priorities:
            parsed_id = _parse_id(todo_id)
            if parsed_id is None:
                logger.warning(f"Skipping priority update for invalid todo id {todo_id!r}")
                continue
            ids.append(parsed_id)
            values.append(priority)

        if not ids:
            return 0

        query = """
            UPDATE todos AS t
            SET priority = u.priority
            FROM unnest($1::uuid[], $2::int[]) AS u(id, priority)
            WHERE t.id = u.id AND t.user_id = $3
            RETURNING t.id
        """
        records = await self.pool.fetch(query, ids, values, user_id)

        if len(records) < len(ids):
            logger.warning(
                f"{len(ids) - len(records)} priority updates matched no todo for user {user_id}"
            )
        logger.info(f"Updated priorities of {len(records)} todos for user {user_id}")
        return len(records)
