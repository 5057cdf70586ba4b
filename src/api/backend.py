import logging
from typing import Any, List, Optional

from api.config import Settings
from api.metrics import LLM_CALLS_TOTAL, RANKING_PARSE_FAILURES_TOTAL
from llm.llm_client import LLMClient
from llm.prompt_builder import build_prioritization_prompt
from llm.response_parser import extract_ranking
from prioritization.reconciler import reconcile
from todo_ai.errors import ConfigurationError, ParseError, TodoAIError, ValidationError
from todo_ai.models import Todo

logger = logging.getLogger(__name__)


def validate_todos(todos: Any) -> List[Todo]:
    if not isinstance(todos, list) or len(todos) == 0:
        raise ValidationError()

    validated = []
    for position, raw in enumerate(todos, start=1):
        if isinstance(raw, Todo):
            validated.append(raw)
            continue
        if not isinstance(raw, dict):
            raise ValidationError(
                message="Each todo item must be an object.",
                detail=f"todo {position} is {type(raw).__name__}",
            )
        if not isinstance(raw.get("text"), str):
            raise ValidationError(
                message="Each todo item must have a text field.",
                detail=f"todo {position} has no string text",
            )
        validated.append(Todo.model_validate(raw))
    return validated


class BackendAPI:
    """Central orchestration of one prioritization round-trip."""

    def __init__(self, settings: Optional[Settings] = None, llm_client: Optional[LLMClient] = None):
        self.settings = settings or Settings()
        self.llm_client = llm_client

    def _llm(self) -> LLMClient:
        if self.llm_client is None:
            self.llm_client = LLMClient(settings=self.settings)
        return self.llm_client

    def prioritize(self, todos: Any) -> List[Todo]:
        """Rank the todos with one model call and return them reconciled and sorted."""

        # 1. Validate request shape
        todo_items = validate_todos(todos)

        # 2. Fail fast when the credential is missing
        if not self.settings.is_ready:
            raise ConfigurationError()

        # 3. Build prompt
        prompt = build_prioritization_prompt(todo_items)

        # 4. Call the remote model
        try:
            ai_response = self._llm().complete(prompt)
        except TodoAIError as e:
            LLM_CALLS_TOTAL.labels(outcome=type(e).__name__).inc()
            raise
        LLM_CALLS_TOTAL.labels(outcome="ok").inc()

        # 5. Extract the ranking
        try:
            ranking = extract_ranking(ai_response, strategy=self.settings.ranking_parse_strategy)
        except ParseError:
            RANKING_PARSE_FAILURES_TOTAL.inc()
            raise

        # 6. Reconcile with the submitted list
        prioritized = reconcile(todo_items, ranking)
        logger.info(f"Prioritized {len(prioritized)} todos ({len(ranking)} ranking entries)")
        return prioritized
