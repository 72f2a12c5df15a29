"""Failure conditions surfaced by the itinerary generation endpoint.

Each error carries the HTTP status returned to the caller and the message placed
in the ``{"error": ...}`` body. Malformed model output is deliberately absent:
it is absorbed by the raw-text fallback in ``src.core.post_processing``.
"""
from __future__ import annotations

from typing import Optional


class ItineraryGenerationError(RuntimeError):
    """Base class for failures that end an itinerary generation request."""

    status_code: int = 500
    default_message: str = "Unable to generate itinerary"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ConfigurationError(ItineraryGenerationError):
    """A required upstream credential is missing."""

    default_message = "AI_GATEWAY_API_KEY is not configured"


class RateLimited(ItineraryGenerationError):
    """The model gateway answered 429."""

    status_code = 429
    default_message = "Rate limit exceeded. Please try again in a moment."


class QuotaExhausted(ItineraryGenerationError):
    """The model gateway answered 402."""

    status_code = 402
    default_message = "AI credits depleted. Please add credits to continue."


class GatewayError(ItineraryGenerationError):
    """Any other upstream failure; details are logged, never returned."""

    default_message = "AI gateway error"


class NoContentReturned(ItineraryGenerationError):
    """The gateway replied without a usable tool call or any text content."""

    default_message = "No itinerary generated"


__all__ = [
    "ItineraryGenerationError",
    "ConfigurationError",
    "RateLimited",
    "QuotaExhausted",
    "GatewayError",
    "NoContentReturned",
]
