from __future__ import annotations
import json
import re
from llm.providers.base import LLMProvider

_NUMBERED_LINE_RE = re.compile(r"^(\d+)\.\s", re.MULTILINE)


class MockProvider(LLMProvider):
    def generate(self, *, user: str, model: str | None = None) -> str:
        """
        Returns a ranking that keeps the numbered tasks in their given order.
        """
        indices = [int(n) for n in _NUMBERED_LINE_RE.findall(user)]
        ranking = [
            {"index": index, "priority": rank}
            for rank, index in enumerate(indices, start=1)
        ]
        return json.dumps(ranking)
