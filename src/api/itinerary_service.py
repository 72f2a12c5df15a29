"""Single-shot itinerary generation against the model gateway."""
from __future__ import annotations

import json
import logging
from typing import Optional

import openai
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from src.core.config import ApiSettings
from src.core.errors import GatewayError, NoContentReturned
from src.core.gateway import gateway_error_for_status
from src.core.post_processing import reconcile_itinerary
from src.core.prompts import build_itinerary_prompt
from src.core.schemas import ItineraryDocument, TripRequest

logger = logging.getLogger(__name__)


def _error_body(exc: openai.APIStatusError) -> Optional[str]:
    body = getattr(exc, "body", None)
    if body is not None:
        return body if isinstance(body, str) else json.dumps(body, default=str)
    response = getattr(exc, "response", None)
    return getattr(response, "text", None)


class ItineraryService:
    """Builds the prompt, calls the gateway once and reconciles the reply.

    The gateway speaks the OpenAI chat-completions protocol, so the chat model
    is a ``ChatOpenAI`` pointed at the gateway base URL. Retries are disabled:
    every failure is reported to the caller exactly once.

    Attributes:
        settings: Gateway credentials and tuning
        llm: Chat model used for generation
    """

    def __init__(self, settings: ApiSettings, *, llm: Optional[BaseChatModel] = None) -> None:
        api_key = settings.ensure("ai_gateway_api_key")
        settings.apply_langsmith_tracing()

        self.settings = settings
        self.llm = llm or ChatOpenAI(
            model=settings.ai_gateway_model,
            api_key=api_key,
            base_url=settings.ai_gateway_base_url,
            timeout=settings.ai_gateway_timeout_s,
            max_retries=0,
        )

    def __repr__(self) -> str:
        llm_name = getattr(self.llm, "model_name", None) or type(self.llm).__name__
        return f"ItineraryService(llm='{llm_name}', base_url='{self.settings.ai_gateway_base_url}')"

    async def generate(self, request: TripRequest) -> ItineraryDocument:
        """Generate an itinerary for ``request``.

        Raises:
            RateLimited: the gateway answered 429
            QuotaExhausted: the gateway answered 402
            GatewayError: any other upstream failure
            NoContentReturned: the reply had no tool call and no text
        """

        if request.dates_reversed:
            logger.warning(
                "End date %s precedes start date %s; trip length clamped to %d day(s)",
                request.end_date,
                request.start_date,
                request.trip_length_days,
            )

        prompt = build_itinerary_prompt(request)
        model = self.llm.bind_tools([prompt.tool], tool_choice=prompt.tool_name)
        messages = [SystemMessage(content=prompt.system), HumanMessage(content=prompt.user)]

        try:
            reply = await model.ainvoke(messages)
        except openai.APIStatusError as exc:
            error = gateway_error_for_status(exc.status_code, _error_body(exc))
            raise (error or GatewayError()) from exc
        except openai.APIConnectionError as exc:
            logger.error("AI gateway unreachable: %s", exc)
            raise GatewayError() from exc

        if not isinstance(reply, AIMessage):
            logger.error("Unexpected reply type from chat model: %s", type(reply).__name__)
            raise NoContentReturned()

        document = reconcile_itinerary(reply, request)
        logger.info(
            "Itinerary generated for %s (%d day(s)%s)",
            request.destination,
            len(document.days),
            ", raw text" if document.is_raw_fallback else "",
        )
        return document
