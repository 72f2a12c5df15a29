"""Pydantic data models for the itinerary generator and the route planner.

The itinerary models mirror the JSON contract shared with the web client: the
wire format is camelCase (``startDate``, ``timeStart``) while attributes are
snake_case. Both spellings are accepted on input.

Key model categories:
- TripRequest: immutable trip parameters collected by the planning form
- ItineraryDocument / DayPlan / ActivityItem: the structured itinerary returned
  by the language model (or the raw-text shell built when it cannot be parsed)
- JourneySegment / JourneyRoute / RouteFilters: multi-modal route comparison
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    PrivateAttr,
    StringConstraints,
    computed_field,
    field_validator,
    model_validator,
)

from src.core.types import (
    ComfortRating,
    HttpURLStr,
    NonNegMinutes,
    NonNegMoney,
    TimeHHMM,
)

BudgetTier = Literal["budget", "moderate", "luxury"]
TransportMode = Literal["any", "flight", "train", "bus", "car", "bike"]
ActivityType = Literal["activity", "meal", "transport", "evening"]

SegmentTransport = Literal["flight", "train", "bus", "ferry", "car", "bike", "taxi"]
FilterTransport = Literal["flight", "train", "bus", "ferry", "car", "bike"]
RouteSortKey = Literal["cheapest", "fastest", "eco", "experience"]
TravelStyle = Literal["all", "budget", "eco", "time", "adventure"]

ALL_FILTER_TRANSPORTS: Tuple[FilterTransport, ...] = (
    "flight",
    "train",
    "bus",
    "ferry",
    "car",
    "bike",
)


class TripRequest(BaseModel):
    """Immutable trip parameters for a single generation attempt.

    Attributes:
        origin: Optional departure city, used to suggest arrival logistics
        destination: Where the trip takes place
        start_date / end_date: Calendar dates (``startDate`` / ``endDate``)
        travelers: Party size; numeric strings from the form are coerced
        interests: Free text copied verbatim into the prompt
        budget: Spending tier
        transport_mode: Preferred way of getting there (``transportMode``)
        trip_length_days: Inclusive day count, never below 1
    """

    origin: Optional[str] = None
    destination: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    start_date: date = Field(alias="startDate")
    end_date: date = Field(alias="endDate")
    travelers: PositiveInt
    interests: str = ""
    budget: BudgetTier
    transport_mode: Optional[TransportMode] = Field(default=None, alias="transportMode")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @field_validator("origin", "transport_mode", mode="before")
    @classmethod
    def blank_as_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @computed_field(alias="tripLengthDays", return_type=int)
    @property
    def trip_length_days(self) -> int:
        """Inclusive day count; an end date before the start clamps to 1."""

        return max(1, (self.end_date - self.start_date).days + 1)

    @property
    def dates_reversed(self) -> bool:
        return self.end_date < self.start_date


class ActivityItem(BaseModel):
    """One scheduled entry inside a day, in the order the model intended."""

    title: str
    type: ActivityType
    time_start: TimeHHMM = Field(alias="timeStart")
    time_end: Optional[TimeHHMM] = Field(default=None, alias="timeEnd")
    location: str
    cost: Optional[str] = Field(
        default=None, description="Currency-prefixed free text, e.g. '€25'"
    )
    description: str
    highlights: List[str]

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class DayPlan(BaseModel):
    """A numbered day of the itinerary."""

    day: PositiveInt
    day_date: Optional[str] = Field(default=None, alias="date")
    summary: Optional[str] = None
    items: List[ActivityItem]

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ItineraryDocument(BaseModel):
    """Normalised itinerary handed back to the client.

    ``raw`` is only populated when the model output could not be parsed; in that
    case ``days`` holds one empty day per trip day and the client shows the text.
    Extra keys produced by the model are kept. A document built with
    ``from_payload`` remembers the parsed object and hands it back untouched.
    """

    destination: str
    days: List[DayPlan]
    raw: Optional[str] = None

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    _source: Optional[Dict[str, Any]] = PrivateAttr(default=None)

    @classmethod
    def from_payload(cls, payload: Any) -> "ItineraryDocument":
        """Validate a parsed model reply without coercing any of its values."""

        document = cls.model_validate(payload, strict=True)
        document._source = payload
        return document

    @model_validator(mode="after")
    def validate_day_order(self) -> "ItineraryDocument":
        numbers = [plan.day for plan in self.days]
        if any(later <= earlier for earlier, later in zip(numbers, numbers[1:])):
            raise ValueError("day numbers must be unique and ascending")
        return self

    @property
    def is_raw_fallback(self) -> bool:
        return bool(self.raw)

    def to_payload(self) -> dict:
        """Return the accepted payload as parsed, or serialise with wire names."""

        if self._source is not None:
            return self._source
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class JourneySegment(BaseModel):
    """Single leg of a door-to-door journey."""

    transport_type: SegmentTransport
    from_location: str
    to_location: str
    departure_time: Optional[datetime] = None
    arrival_time: Optional[datetime] = None
    duration_minutes: NonNegMinutes = 0
    cost: NonNegMoney = 0
    provider_name: Optional[str] = None
    booking_link: Optional[HttpURLStr] = None
    luggage_policy: Optional[str] = None
    notes: Optional[str] = None

    def layover_until(self, following: "JourneySegment") -> Optional[int]:
        """Whole minutes between this arrival and the next departure, floored."""

        if self.arrival_time is None or following.departure_time is None:
            return None
        gap = following.departure_time - self.arrival_time
        return int(gap.total_seconds() // 60)


class JourneyRoute(BaseModel):
    """Complete multi-modal option between an origin and a destination."""

    id: str
    route_type: Optional[str] = None
    total_duration_minutes: NonNegMinutes
    total_cost: NonNegMoney
    carbon_footprint_kg: NonNegMoney = 0
    num_transfers: int = Field(default=0, ge=0)
    comfort_rating: ComfortRating = 0
    is_recommended: bool = False
    journey_segments: List[JourneySegment] = Field(default_factory=list)

    @computed_field(return_type=List[Optional[int]])
    @property
    def layover_minutes(self) -> List[Optional[int]]:
        """Wait between consecutive legs; ``None`` where a time is unknown."""

        segments = self.journey_segments
        return [
            current.layover_until(following)
            for current, following in zip(segments, segments[1:])
        ]


class RouteFilters(BaseModel):
    """User-selected constraints applied to the candidate routes."""

    sort_by: RouteSortKey = "cheapest"
    transport_types: List[FilterTransport] = Field(
        default_factory=lambda: list(ALL_FILTER_TRANSPORTS)
    )
    max_transfers: int = Field(default=3, ge=0)
    budget_range: Tuple[NonNegMoney, NonNegMoney] = (0, 2000)
    travel_style: TravelStyle = "all"

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def validate_budget_range(self) -> "RouteFilters":
        low, high = self.budget_range
        if low > high:
            raise ValueError("budget_range minimum must not exceed the maximum")
        return self


__all__ = [
    "ALL_FILTER_TRANSPORTS",
    "ActivityItem",
    "ActivityType",
    "BudgetTier",
    "DayPlan",
    "FilterTransport",
    "ItineraryDocument",
    "JourneyRoute",
    "JourneySegment",
    "RouteFilters",
    "RouteSortKey",
    "SegmentTransport",
    "TransportMode",
    "TravelStyle",
    "TripRequest",
]
