"""Turn a model gateway reply into an ``ItineraryDocument``.

The reply goes through an ordered chain of tiers. Each tier is a pure function
that either returns a validated document or a ``TierFailure`` describing why it
produced nothing usable; the next tier only runs after a failure.

1. ``extract_tool_call``: arguments of the ``return_itinerary`` tool call.
2. ``extract_message_json``: the message text parsed as JSON, with an optional
   Markdown code fence stripped first.
3. ``build_raw_shell``: one empty day per trip day plus the untouched text.
   With the tool forced the reply usually has no text, so the tool-call
   arguments stand in for it.

A parsed object is accepted only when it validates as ``ItineraryDocument``
without type coercion, and it is returned exactly as parsed.
Nothing is salvaged field by field: a failing tier is discarded as a whole.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from langchain_core.messages import AIMessage
from pydantic import ValidationError

from src.core.errors import NoContentReturned
from src.core.prompts import ITINERARY_TOOL_NAME
from src.core.schemas import DayPlan, ItineraryDocument, TripRequest

logger = logging.getLogger(__name__)

_LEADING_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_TRAILING_FENCE_PATTERN = re.compile(r"\s*```$")


@dataclass(frozen=True)
class TierFailure:
    """Why a tier produced no document."""

    tier: str
    reason: str


TierResult = Union[ItineraryDocument, TierFailure]


def _validate_document(payload: Any, tier: str) -> TierResult:
    try:
        return ItineraryDocument.from_payload(payload)
    except ValidationError as exc:
        return TierFailure(tier, f"payload does not match the itinerary schema: {exc.error_count()} error(s)")


def extract_tool_call(message: AIMessage, tool_name: str = ITINERARY_TOOL_NAME) -> TierResult:
    """Tier 1: accept the arguments of the first matching tool call."""

    for call in message.tool_calls or []:
        if call.get("name") == tool_name:
            return _validate_document(call.get("args"), "tool_call")

    for call in message.invalid_tool_calls or []:
        if call.get("name") == tool_name:
            return TierFailure("tool_call", f"arguments are not valid JSON: {call.get('error')}")

    return TierFailure("tool_call", f"no '{tool_name}' tool call in reply")


def tool_call_arguments(message: AIMessage, tool_name: str = ITINERARY_TOOL_NAME) -> Optional[str]:
    """Return the arguments of the first matching tool call as text, if any."""

    for call in message.tool_calls or []:
        if call.get("name") == tool_name:
            return json.dumps(call.get("args"), ensure_ascii=False)

    for call in message.invalid_tool_calls or []:
        if call.get("name") == tool_name and call.get("args"):
            return call["args"]

    return None


def strip_code_fence(text: str) -> str:
    """Remove one leading ```/```json fence and one trailing ``` fence."""

    stripped = text.strip()
    stripped = _LEADING_FENCE_PATTERN.sub("", stripped, count=1)
    return _TRAILING_FENCE_PATTERN.sub("", stripped, count=1)


def extract_message_json(text: str) -> TierResult:
    """Tier 2: parse the free-form message text as JSON."""

    try:
        payload = json.loads(strip_code_fence(text))
    except json.JSONDecodeError as exc:
        return TierFailure("message_json", f"content is not valid JSON: {exc.msg}")
    return _validate_document(payload, "message_json")


def build_raw_shell(text: str, request: TripRequest) -> ItineraryDocument:
    """Tier 3: keep unparseable prose for plain-text display."""

    return ItineraryDocument(
        destination=request.destination,
        days=[DayPlan(day=number, items=[]) for number in range(1, request.trip_length_days + 1)],
        raw=text,
    )


def message_text(message: AIMessage) -> Optional[str]:
    """Return the text content of ``message``, or ``None`` when there is none."""

    content = message.content
    if isinstance(content, str):
        return content if content.strip() else None

    text_chunks: List[str] = []
    for chunk in content or []:
        if isinstance(chunk, dict) and chunk.get("type") == "text":
            text_chunks.append(chunk.get("text", ""))
        elif isinstance(chunk, str):
            text_chunks.append(chunk)
    joined = "".join(text_chunks)
    return joined if joined.strip() else None


def _log_failure(failure: TierFailure) -> None:
    logger.warning("Itinerary %s tier failed: %s", failure.tier, failure.reason)


def reconcile_itinerary(message: AIMessage, request: TripRequest) -> ItineraryDocument:
    """Produce a document from ``message``; never raises on malformed output.

    Raises:
        NoContentReturned: the reply has neither a matching tool call nor text.
    """

    result = extract_tool_call(message)
    if isinstance(result, ItineraryDocument):
        logger.info("Itinerary parsed from structured tool call")
        return result
    _log_failure(result)

    text = message_text(message)
    if text is not None:
        result = extract_message_json(text)
        if isinstance(result, ItineraryDocument):
            logger.info("Itinerary parsed from message content")
            return result
        _log_failure(result)
    else:
        text = tool_call_arguments(message)
        if text is None:
            logger.error("AI gateway reply carried neither a tool call nor text content")
            raise NoContentReturned()

    logger.warning("Falling back to raw-text itinerary for %s", request.destination)
    return build_raw_shell(text, request)
