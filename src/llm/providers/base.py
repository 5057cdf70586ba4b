from __future__ import annotations
from abc import ABC, abstractmethod

class LLMProvider(ABC):
    @abstractmethod
    def generate(self, *, user: str) -> str:
        """
        Must return the model output as TEXT (the ranking is parsed later by response_parser).
        """
        raise NotImplementedError
