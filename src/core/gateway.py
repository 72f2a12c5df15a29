"""Mapping from model gateway HTTP statuses to caller-facing conditions.

This runs before any attempt to read the gateway reply: only a 2xx status lets
the response reach the reconciler. Nothing here retries.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from src.core.errors import GatewayError, ItineraryGenerationError, QuotaExhausted, RateLimited

logger = logging.getLogger(__name__)


class GatewayCondition(str, Enum):
    SUCCESS = "success"
    RATE_LIMITED = "rate_limited"
    QUOTA_EXHAUSTED = "quota_exhausted"
    GATEWAY_ERROR = "gateway_error"


def classify_gateway_status(status_code: int) -> GatewayCondition:
    """Return the condition for a gateway HTTP status code."""

    if 200 <= status_code < 300:
        return GatewayCondition.SUCCESS
    if status_code == 429:
        return GatewayCondition.RATE_LIMITED
    if status_code == 402:
        return GatewayCondition.QUOTA_EXHAUSTED
    return GatewayCondition.GATEWAY_ERROR


def gateway_error_for_status(
    status_code: int, body: Optional[str] = None
) -> Optional[ItineraryGenerationError]:
    """Build the error matching ``status_code``, or ``None`` on success.

    The response body is only logged; callers receive the generic message.
    """

    condition = classify_gateway_status(status_code)
    if condition is GatewayCondition.SUCCESS:
        return None
    if condition is GatewayCondition.RATE_LIMITED:
        logger.warning("AI gateway rate limited the request (HTTP 429)")
        return RateLimited()
    if condition is GatewayCondition.QUOTA_EXHAUSTED:
        logger.warning("AI gateway reported exhausted credits (HTTP 402)")
        return QuotaExhausted()
    logger.error("AI gateway error: %s %s", status_code, body or "")
    return GatewayError()


def raise_for_gateway_status(status_code: int, body: Optional[str] = None) -> None:
    """Raise the mapped error for any non-2xx status."""

    error = gateway_error_for_status(status_code, body)
    if error is not None:
        raise error
