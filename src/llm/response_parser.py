"""
Turn freeform model output into a ranking.

Two strategies are available:

- ``greedy`` (default): take everything from the first ``[`` to the last
  ``]`` in the text and parse it as JSON.
- ``balanced``: take the first balanced ``[...]`` pair only, ignoring
  brackets inside JSON strings. Prose after the answer that contains
  brackets no longer breaks parsing, at the cost of differing from the
  greedy behaviour on such inputs.

Neither strategy validates the elements; malformed entries are left for the
reconciler to skip.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, List, Optional

from todo_ai.errors import ParseError

logger = logging.getLogger(__name__)

GREEDY = "greedy"
BALANCED = "balanced"
STRATEGIES = (GREEDY, BALANCED)

_GREEDY_ARRAY_RE = re.compile(r"\[[\s\S]*\]")


def _find_greedy(text: str) -> Optional[str]:
    match = _GREEDY_ARRAY_RE.search(text)
    return match.group(0) if match else None


def _find_balanced(text: str) -> Optional[str]:
    start = text.find("[")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for pos in range(start, len(text)):
        ch = text[pos]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth == 0:
                return text[start : pos + 1]
    return None


def extract_ranking(text: str, strategy: str = GREEDY) -> List[Any]:
    """Locate and parse the JSON array in model output.

    Raises ParseError when no bracketed substring exists or it is not valid JSON.
    """
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown ranking parse strategy: {strategy!r}")

    candidate = _find_balanced(text) if strategy == BALANCED else _find_greedy(text)
    if candidate is None:
        logger.error("Could not parse AI response: %s", text[:200])
        raise ParseError()

    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.error("AI response is not valid JSON (%s): %s", e, candidate[:200])
        raise ParseError(detail=str(e)) from e

    if not isinstance(parsed, list):
        raise ParseError()

    return parsed
