"""Gemini connectivity checks.

Usage:
    python -m llm.diagnostics list-models
    python -m llm.diagnostics ping [--prompt "Say hello"]
"""

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from api.config import load_settings
from llm.providers.gemini_provider import GeminiProvider
from todo_ai.errors import TodoAIError

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check that the configured Gemini credential and model work",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list-models", help="List models available to the credential")
    ping = sub.add_parser("ping", help="Send a single prompt and print the reply")
    ping.add_argument("--prompt", default="Say hello")
    ping.add_argument("--model", default=None, help="Override GEMINI_MODEL")
    return parser


def main(argv: Optional[Sequence[str]] = None, provider: Optional[GeminiProvider] = None) -> int:
    """CLI entry point. Returns the process exit code."""
    args = _build_parser().parse_args(argv)

    try:
        if provider is None:
            settings = load_settings()
            provider = GeminiProvider(
                api_key=settings.gemini_api_key,
                model=settings.gemini_model,
                base_url=settings.gemini_base_url,
                timeout_s=settings.gemini_timeout_s,
            )

        if args.command == "list-models":
            print(json.dumps(provider.list_models(), indent=2))
        else:
            print(provider.generate(user=args.prompt, model=args.model))
    except TodoAIError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        if e.detail:
            print(e.detail, file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
    sys.exit(main())
