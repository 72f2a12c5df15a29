"""Filtering and ranking of multi-modal journey options.

A travel style is a preset that overrides parts of the filters before they are
applied, e.g. "eco" sorts by carbon footprint and keeps only surface transport.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List

from src.core.schemas import JourneyRoute, RouteFilters, RouteSortKey, TravelStyle

logger = logging.getLogger(__name__)

TRAVEL_STYLE_PRESETS: Dict[TravelStyle, Dict[str, Any]] = {
    "all": {},
    "budget": {"sort_by": "cheapest"},
    "eco": {"sort_by": "eco", "transport_types": ["train", "bus", "bike", "ferry"]},
    "time": {"sort_by": "fastest", "max_transfers": 1},
    "adventure": {"sort_by": "experience"},
}

# Ascending keys; comfort is negated so the most comfortable route comes first.
SORT_KEYS: Dict[RouteSortKey, Callable[[JourneyRoute], float]] = {
    "cheapest": lambda route: route.total_cost,
    "fastest": lambda route: route.total_duration_minutes,
    "eco": lambda route: route.carbon_footprint_kg,
    "experience": lambda route: -route.comfort_rating,
}


def apply_travel_style(filters: RouteFilters) -> RouteFilters:
    """Return ``filters`` with the preset of its travel style merged in."""

    preset = TRAVEL_STYLE_PRESETS[filters.travel_style]
    if not preset:
        return filters
    return filters.model_copy(update=preset)


def route_matches(route: JourneyRoute, filters: RouteFilters) -> bool:
    """Check transport types, transfer count and budget for one route."""

    allowed = set(filters.transport_types)
    has_allowed_transport = any(
        segment.transport_type in allowed for segment in route.journey_segments
    )
    low, high = filters.budget_range
    return (
        has_allowed_transport
        and route.num_transfers <= filters.max_transfers
        and low <= route.total_cost <= high
    )


def compare_routes(
    routes: Iterable[JourneyRoute], filters: RouteFilters
) -> List[JourneyRoute]:
    """Filter ``routes`` and sort them by the effective sort key.

    Ties keep their input order.
    """

    effective = apply_travel_style(filters)
    candidates = list(routes)
    kept = [route for route in candidates if route_matches(route, effective)]
    logger.info(
        "Kept %d of %d routes (sort=%s, style=%s)",
        len(kept),
        len(candidates),
        effective.sort_by,
        effective.travel_style,
    )
    return sorted(kept, key=SORT_KEYS[effective.sort_by])
