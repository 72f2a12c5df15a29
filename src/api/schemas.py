from typing import Any, Dict, List

from pydantic import BaseModel, Field

from src.core.schemas import JourneyRoute, RouteFilters, TripRequest


class GenerateItineraryRequest(TripRequest):
    """Request payload posted by the planning form."""


class GenerateItineraryResponse(BaseModel):
    """Successful generation; the document uses the client's camelCase keys."""

    itinerary_json: Dict[str, Any] = Field(
        ..., description="ItineraryDocument with `raw` set only for the text fallback"
    )


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    error: str


class RouteComparisonRequest(BaseModel):
    """Candidate journeys plus the filters chosen by the user."""

    routes: List[JourneyRoute] = Field(default_factory=list)
    filters: RouteFilters = Field(default_factory=RouteFilters)


class RouteComparisonResponse(BaseModel):
    """Matching routes in ranked order and the filters actually applied."""

    routes: List[JourneyRoute]
    filters: RouteFilters
