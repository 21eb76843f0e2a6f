"""Plan extractor — best-effort JSON recovery from an LLM completion.

Models usually wrap the requested JSON in prose or a markdown code fence. The
extractor picks the most specific candidate (a ```json fence, then any fence,
then the whole text) and parses it. It never raises: text that does not hold a
JSON object comes back as ``Unparsed`` so callers can still show something.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

FALLBACK_OVERVIEW = "Generated travel plan"

_JSON_FENCE = re.compile(r"```json\n(.*?)\n```", re.DOTALL)
_ANY_FENCE = re.compile(r"```(.*?)```", re.DOTALL)


@dataclass(frozen=True)
class Parsed:
    data: dict[str, Any]

    def as_dict(self) -> dict[str, Any]:
        return self.data


@dataclass(frozen=True)
class Unparsed:
    raw_text: str

    def as_dict(self) -> dict[str, Any]:
        return {"overview": FALLBACK_OVERVIEW, "rawContent": self.raw_text}


ExtractedPlan = Parsed | Unparsed


def select_candidate(raw: str) -> str:
    """Return the substring most likely to hold the JSON document."""
    match = _JSON_FENCE.search(raw) or _ANY_FENCE.search(raw)
    return match.group(1) if match else raw


def extract_plan(raw: str) -> ExtractedPlan:
    candidate = select_candidate(raw)
    try:
        data = json.loads(candidate)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning(f"Failed to parse JSON from completion: {e}\nRaw: {raw[:500]}")
        return Unparsed(raw)

    if not isinstance(data, dict):
        logger.warning(f"Completion JSON is a {type(data).__name__}, expected an object")
        return Unparsed(raw)
    return Parsed(data)
