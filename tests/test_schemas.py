"""Tests for the itinerary and route data models."""
from __future__ import annotations

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from src.core.schemas import (
    ActivityItem,
    DayPlan,
    ItineraryDocument,
    JourneyRoute,
    JourneySegment,
    RouteFilters,
    TripRequest,
)


def _make_request(start: date, end: date, **overrides) -> TripRequest:
    data = {
        "destination": "Lisbon",
        "startDate": start.isoformat(),
        "endDate": end.isoformat(),
        "travelers": 2,
        "interests": "tiles, seafood",
        "budget": "moderate",
    }
    data.update(overrides)
    return TripRequest.model_validate(data)


def _make_item(**overrides) -> dict:
    item = {
        "title": "Belem Tower",
        "type": "activity",
        "timeStart": "09:30",
        "location": "Belem",
        "description": "Arrive early to beat the queue.",
        "highlights": ["UNESCO"],
    }
    item.update(overrides)
    return item


def test_same_day_trip_is_one_day():
    request = _make_request(date(2025, 5, 1), date(2025, 5, 1))
    assert request.trip_length_days == 1


def test_next_day_end_is_two_days():
    request = _make_request(date(2025, 5, 1), date(2025, 5, 2))
    assert request.trip_length_days == 2


@pytest.mark.parametrize(
    "start, end, expected",
    [
        (date(2025, 1, 10), date(2025, 1, 17), 8),
        (date(2024, 2, 28), date(2024, 3, 1), 3),  # leap year
        (date(2025, 12, 30), date(2026, 1, 2), 4),
    ],
)
def test_trip_length_is_inclusive(start, end, expected):
    assert _make_request(start, end).trip_length_days == expected


def test_end_before_start_is_clamped_to_one_day():
    request = _make_request(date(2025, 5, 10), date(2025, 5, 1))
    assert request.trip_length_days == 1
    assert request.dates_reversed


def test_trip_request_coerces_string_travelers_and_blank_optionals():
    request = _make_request(
        date(2025, 5, 1),
        date(2025, 5, 3),
        travelers="3",
        origin="  ",
        transportMode="",
    )
    assert request.travelers == 3
    assert request.origin is None
    assert request.transport_mode is None


def test_trip_request_accepts_snake_case_names():
    request = TripRequest(
        destination="Lisbon",
        start_date=date(2025, 5, 1),
        end_date=date(2025, 5, 3),
        travelers=1,
        interests="",
        budget="luxury",
        transport_mode="train",
    )
    assert request.transport_mode == "train"
    assert request.model_dump(by_alias=True)["tripLengthDays"] == 3


@pytest.mark.parametrize(
    "overrides",
    [
        {"budget": "cheap"},
        {"travelers": 0},
        {"transportMode": "rocket"},
        {"destination": ""},
        {"destination": "   "},
    ],
)
def test_trip_request_rejects_invalid_values(overrides):
    with pytest.raises(ValidationError):
        _make_request(date(2025, 5, 1), date(2025, 5, 2), **overrides)


def test_trip_request_strips_destination():
    request = _make_request(date(2025, 5, 1), date(2025, 5, 2), destination="  Lisbon ")
    assert request.destination == "Lisbon"


def test_trip_request_is_immutable():
    request = _make_request(date(2025, 5, 1), date(2025, 5, 2))
    with pytest.raises(ValidationError):
        request.destination = "Porto"


def test_activity_item_requires_every_mandatory_field():
    incomplete = _make_item()
    del incomplete["location"]
    with pytest.raises(ValidationError):
        ActivityItem.model_validate(incomplete)


def test_activity_item_rejects_non_24_hour_time():
    with pytest.raises(ValidationError):
        ActivityItem.model_validate(_make_item(timeStart="9:30 AM"))


def test_activity_item_rejects_unknown_type():
    with pytest.raises(ValidationError):
        ActivityItem.model_validate(_make_item(type="shopping"))


def test_document_payload_round_trips_unchanged():
    payload = {
        "destination": "Lisbon",
        "days": [
            {
                "day": 1,
                "date": "2025-05-01",
                "summary": "Riverside monuments",
                "items": [_make_item(timeEnd="11:00", cost="€10")],
            },
            {"day": 2, "items": []},
        ],
    }

    document = ItineraryDocument.model_validate(payload)

    assert document.days[0].day_date == "2025-05-01"
    assert document.days[0].items[0].time_end == "11:00"
    assert document.to_payload() == payload
    assert not document.is_raw_fallback


def test_from_payload_rejects_coercible_values():
    with pytest.raises(ValidationError):
        ItineraryDocument.from_payload({"destination": "Lisbon", "days": [{"day": "1", "items": []}]})

    with pytest.raises(ValidationError):
        ItineraryDocument.from_payload(
            {"destination": "Lisbon", "days": [{"day": 1, "items": [_make_item(timeStart=" 09:30")]}]}
        )


def test_from_payload_hands_back_the_parsed_object():
    payload = {"destination": "Lisbon", "days": [{"day": 1, "items": [_make_item()]}], "tips": ["Buy a Viva card"]}

    document = ItineraryDocument.from_payload(payload)

    assert document.to_payload() is payload
    assert document.days[0].items[0].time_start == "09:30"


def test_document_rejects_duplicate_day_numbers():
    with pytest.raises(ValidationError):
        ItineraryDocument.model_validate(
            {"destination": "Lisbon", "days": [{"day": 1, "items": []}, {"day": 1, "items": []}]}
        )


def test_document_rejects_descending_day_numbers():
    with pytest.raises(ValidationError):
        ItineraryDocument.model_validate(
            {"destination": "Lisbon", "days": [{"day": 2, "items": []}, {"day": 1, "items": []}]}
        )


def test_document_rejects_zero_day_number():
    with pytest.raises(ValidationError):
        DayPlan.model_validate({"day": 0, "items": []})


def test_document_requires_days():
    with pytest.raises(ValidationError):
        ItineraryDocument.model_validate({"destination": "Lisbon"})


def test_layover_minutes_between_segments():
    route = JourneyRoute(
        id="r-1",
        total_duration_minutes=300,
        total_cost=200,
        journey_segments=[
            JourneySegment(
                transport_type="taxi",
                from_location="Home",
                to_location="Airport",
                departure_time=datetime(2025, 5, 1, 6, 30),
                arrival_time=datetime(2025, 5, 1, 7, 15),
            ),
            JourneySegment(
                transport_type="flight",
                from_location="Airport",
                to_location="London",
                departure_time=datetime(2025, 5, 1, 8, 0),
                arrival_time=datetime(2025, 5, 1, 16, 0, 30),
            ),
            JourneySegment(
                transport_type="train",
                from_location="London",
                to_location="Paris",
                departure_time=datetime(2025, 5, 1, 18, 0),
            ),
            JourneySegment(transport_type="taxi", from_location="Gare du Nord", to_location="Hotel"),
        ],
    )

    assert route.layover_minutes == [45, 119, None]


def test_route_filters_reject_inverted_budget_range():
    with pytest.raises(ValidationError):
        RouteFilters(budget_range=(500, 100))


def test_route_filters_defaults_allow_every_transport():
    filters = RouteFilters()
    assert filters.sort_by == "cheapest"
    assert set(filters.transport_types) == {"flight", "train", "bus", "ferry", "car", "bike"}
    assert filters.max_transfers == 3
