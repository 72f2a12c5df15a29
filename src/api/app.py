"""FastAPI surface for itinerary generation and route comparison."""
from __future__ import annotations

# Load environment variables from .env file
from dotenv import load_dotenv

# Load .env file before any other imports that might need environment variables
load_dotenv()


import logging
from typing import Dict

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.api.dependencies import get_itinerary_service
from src.api.response_builder import (
    _document_to_response,
    _error_response,
    _generation_error_response,
    _validation_error_response,
)
from src.api.schemas import (
    ErrorResponse,
    GenerateItineraryRequest,
    GenerateItineraryResponse,
    RouteComparisonRequest,
    RouteComparisonResponse,
)
from src.core.errors import ItineraryGenerationError
from src.core.route_ranking import apply_travel_style, compare_routes

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

app = FastAPI(title="TripCraft API", version="0.1.0")


@app.middleware("http")
async def apply_cors_policy(request: Request, call_next) -> Response:
    """Flat CORS policy: answer every preflight and tag every response."""

    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Rejected invalid request to %s: %s", request.url.path, exc.errors())
    return _validation_error_response(exc.errors())


@app.post(
    "/generate-itinerary",
    response_model=GenerateItineraryResponse,
    responses={402: {"model": ErrorResponse}, 429: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_itinerary(payload: GenerateItineraryRequest) -> JSONResponse:
    """Generate a day-by-day itinerary with the language model.

    The model is forced to answer through the ``return_itinerary`` tool. When its
    output cannot be parsed the text is still returned under ``itinerary_json.raw``
    together with one empty day per trip day.

    Example JSON payload:
        ```json
        {
            "destination": "Paris",
            "startDate": "2025-06-01",
            "endDate": "2025-06-03",
            "travelers": "2",
            "interests": "museums, food markets",
            "budget": "moderate",
            "origin": "London",
            "transportMode": "train"
        }
        ```

    Returns:
        200 ``{"itinerary_json": {...}}``; 429 when rate limited, 402 when the
        gateway credits are exhausted, 500 for anything else, each as
        ``{"error": "..."}``.
    """

    logger.info(
        "Generating itinerary for %s, %s to %s, %s traveler(s), budget %s",
        payload.destination,
        payload.start_date,
        payload.end_date,
        payload.travelers,
        payload.budget,
    )

    try:
        service = get_itinerary_service()
        document = await service.generate(payload)
    except ItineraryGenerationError as exc:
        logger.error(f"Itinerary generation failed ({exc.status_code}): {exc.message}")
        return _generation_error_response(exc)
    except Exception as exc:
        logger.error(f"Unexpected error during itinerary generation: {str(exc)}", exc_info=True)
        return _error_response(500, str(exc) or "Unknown error")

    return _document_to_response(document)


@app.post("/routes/compare", response_model=RouteComparisonResponse)
async def compare_journey_routes(payload: RouteComparisonRequest) -> RouteComparisonResponse:
    """Filter and rank candidate door-to-door routes."""

    logger.info("Comparing %d candidate routes", len(payload.routes))
    ranked = compare_routes(payload.routes, payload.filters)
    return RouteComparisonResponse(routes=ranked, filters=apply_travel_style(payload.filters))


@app.get("/health")
async def health_check() -> Dict[str, str]:
    """Simple health endpoint used for readiness probes."""

    return {"status": "healthy", "service": "tripcraft-api"}
