"""
Runtime configuration for the todo prioritization service.

Values come from the process environment (optionally seeded from a `.env`
file) and are read once at startup into an immutable Settings object.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum

from dotenv import load_dotenv

from llm.response_parser import STRATEGIES
from todo_ai.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class CredentialStatus(str, Enum):
    READY = "ready"
    NOT_READY = "not_ready"


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str = ""
    gemini_model: str = DEFAULT_GEMINI_MODEL
    gemini_base_url: str = DEFAULT_GEMINI_BASE_URL
    gemini_timeout_s: float = 30.0
    llm_provider: str = "gemini"
    ranking_parse_strategy: str = "greedy"
    database_url: str = ""
    default_user_id: str = "default"
    deployment_profile: str = "unknown"
    server_port: int = 5000

    def __post_init__(self):
        if self.ranking_parse_strategy not in STRATEGIES:
            raise ConfigurationError(
                message=f"Unknown RANKING_PARSE_STRATEGY {self.ranking_parse_strategy!r}",
                detail=f"expected one of: {', '.join(STRATEGIES)}",
            )

    @property
    def credential_status(self) -> CredentialStatus:
        # The mock provider never talks to the network, so it needs no key.
        if self.llm_provider == "mock" or self.gemini_api_key:
            return CredentialStatus.READY
        return CredentialStatus.NOT_READY

    @property
    def is_ready(self) -> bool:
        return self.credential_status is CredentialStatus.READY

    @property
    def persistence_enabled(self) -> bool:
        return bool(self.database_url)


def load_settings(env_file: str | None = None) -> Settings:
    """Build Settings from the environment.

    Existing environment variables win over values from the `.env` file.
    """
    load_dotenv(env_file, override=False)

    settings = Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY", "").strip(),
        gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL).strip() or DEFAULT_GEMINI_MODEL,
        gemini_base_url=os.getenv("GEMINI_BASE_URL", DEFAULT_GEMINI_BASE_URL).strip().rstrip("/"),
        gemini_timeout_s=float(os.getenv("GEMINI_TIMEOUT_S", "30")),
        llm_provider=os.getenv("LLM_PROVIDER", "gemini").strip().lower(),
        ranking_parse_strategy=os.getenv("RANKING_PARSE_STRATEGY", "greedy").strip().lower(),
        database_url=os.getenv("DATABASE_URL", "").strip(),
        default_user_id=os.getenv("DEFAULT_USER_ID", "default").strip() or "default",
        deployment_profile=os.getenv("DEPLOYMENT_PROFILE", "unknown"),
        server_port=int(os.getenv("SERVER_PORT", "5000")),
    )

    if not settings.is_ready:
        logger.warning(
            "GEMINI_API_KEY is not set. AI prioritization will fail until you add it to your environment."
        )

    return settings
