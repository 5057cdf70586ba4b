import logging

from fastapi import FastAPI

from api import state
from api.routers import ops, prioritize, todos
from storage import db
from storage.todo_store import TodoStore

# Logging configuration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title="todo-ai")
app.include_router(ops.router)
app.include_router(prioritize.router)
app.include_router(todos.router)


@app.on_event("startup")
async def startup() -> None:
    settings = state.settings
    logger.info(
        f"Starting todo-ai (provider={settings.llm_provider}, credential={settings.credential_status.value})"
    )

    if settings.persistence_enabled:
        await db.init_db_pool(settings.database_url)
        await db.init_schema()
        state.todo_store = TodoStore()
    else:
        logger.warning("DATABASE_URL is not set. Todo storage routes will return 503.")


@app.on_event("shutdown")
async def shutdown() -> None:
    if state.todo_store is not None:
        await db.close_db_pool()
        state.todo_store = None


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=state.settings.server_port)
