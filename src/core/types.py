"""Shared type aliases used across the itinerary and route models."""
from __future__ import annotations

from typing import Annotated

from pydantic import Field, StringConstraints

NonNegMoney = Annotated[float, Field(ge=0)]
NonNegMinutes = Annotated[int, Field(ge=0)]
ComfortRating = Annotated[float, Field(ge=0, le=10)]
HttpURLStr = Annotated[
    str,
    StringConstraints(
        pattern=r"^https?://[\w\-./%?#=&]+$",
        strip_whitespace=True,
    ),
]
TimeHHMM = Annotated[
    str,
    StringConstraints(
        pattern=r"^(?:[01]\d|2[0-3]):[0-5]\d$",
    ),
]
