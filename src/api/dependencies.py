from functools import lru_cache

from src.api.itinerary_service import ItineraryService
from src.core.config import ApiSettings


@lru_cache(maxsize=1)
def get_itinerary_service() -> ItineraryService:
    settings = ApiSettings.from_env()
    return ItineraryService(settings)
