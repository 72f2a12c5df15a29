"""Prompt templates and the structured-output tool for itinerary generation."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from src.core.schemas import TripRequest

ITINERARY_TOOL_NAME = "return_itinerary"

itinerary_system_prompt = """You are an expert travel planner with deep knowledge of destinations worldwide. Create detailed, practical, and exciting travel itineraries that match the traveler's interests and budget.

Always answer by calling the `return_itinerary` tool with a complete itinerary. Never leave an item half-filled: every item needs a title, type, start time, location, description and highlights."""

itinerary_user_prompt = """Create a detailed {days}-day travel itinerary for {destination} for {travelers} traveler(s).

TRAVEL DETAILS:
- Dates: {start_date} to {end_date} ({days} days)
- Budget: {budget}
{origin_line}{transport_line}- Interests: {interests}

DAY STRUCTURE:
- Return exactly {days} days numbered 1 to {days}, with the calendar date (YYYY-MM-DD) and a one-sentence summary for each day
- Plan 3-5 items per day in chronological order: a morning activity, a midday meal, an afternoon activity, then an evening activity or dinner
- Use the item type "activity", "meal", "transport" or "evening"
- Give times as 24-hour HH:MM (timeStart, and timeEnd when known)

ITEM CONTENT:
- Name specific attractions, restaurants, and experiences with their location
- Express cost as a currency-prefixed string matching the local currency, e.g. "€25" or "$10-15", or "Free"
- Add 2-4 short highlight tags per item (e.g. "Local favourite", "Skip-the-line")
- Include practical tips and travel time between locations in the description
- Keep every suggestion appropriate for a {budget} budget

Make it engaging, practical, and personalized to the traveler's interests."""

_ACTIVITY_ITEM_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "description": "Name of the activity or venue"},
        "type": {
            "type": "string",
            "enum": ["activity", "meal", "transport", "evening"],
        },
        "timeStart": {"type": "string", "description": "Start time, 24-hour HH:MM"},
        "timeEnd": {"type": "string", "description": "End time, 24-hour HH:MM"},
        "location": {"type": "string", "description": "Address or neighbourhood"},
        "cost": {
            "type": "string",
            "description": "Currency-prefixed estimate, e.g. '€25' or 'Free'",
        },
        "description": {"type": "string", "description": "What to do and practical tips"},
        "highlights": {
            "type": "array",
            "items": {"type": "string"},
            "description": "2-4 short tags",
        },
    },
    "required": ["title", "type", "timeStart", "location", "description", "highlights"],
}

_DAY_PLAN_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "day": {"type": "integer", "description": "Day number starting at 1"},
        "date": {"type": "string", "description": "Calendar date, YYYY-MM-DD"},
        "summary": {"type": "string", "description": "One-sentence theme of the day"},
        "items": {
            "type": "array",
            "description": "3-5 items in chronological order",
            "items": _ACTIVITY_ITEM_SCHEMA,
        },
    },
    "required": ["day", "items"],
}

ITINERARY_TOOL: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": ITINERARY_TOOL_NAME,
        "description": "Return the complete day-by-day travel itinerary.",
        "parameters": {
            "type": "object",
            "properties": {
                "destination": {"type": "string"},
                "days": {"type": "array", "items": _DAY_PLAN_SCHEMA},
            },
            "required": ["destination", "days"],
        },
    },
}


@dataclass(frozen=True)
class ItineraryPrompt:
    """Everything sent to the model gateway for one generation request."""

    system: str
    user: str
    tool: Dict[str, Any] = field(default_factory=lambda: ITINERARY_TOOL)
    tool_name: str = ITINERARY_TOOL_NAME


def build_itinerary_prompt(request: TripRequest) -> ItineraryPrompt:
    """Render the instructions for ``request``; pure and deterministic."""

    origin_line = f"- Travelling from: {request.origin}\n" if request.origin else ""
    transport_line = (
        f"- Preferred transport: {request.transport_mode}\n"
        if request.transport_mode and request.transport_mode != "any"
        else ""
    )
    user = itinerary_user_prompt.format(
        days=request.trip_length_days,
        destination=request.destination,
        travelers=request.travelers,
        start_date=request.start_date.isoformat(),
        end_date=request.end_date.isoformat(),
        budget=request.budget,
        origin_line=origin_line,
        transport_line=transport_line,
        interests=request.interests,
    )
    return ItineraryPrompt(system=itinerary_system_prompt, user=user)
