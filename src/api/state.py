from typing import Optional

from api.config import Settings, load_settings
from storage.todo_store import TodoStore

# Loaded at import so routes work even when startup hooks have not run (e.g. TestClient without a context).
settings: Settings = load_settings()

# Set at startup when DATABASE_URL is configured
todo_store: Optional[TodoStore] = None
