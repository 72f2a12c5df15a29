from typing import Iterable, List

from fastapi.responses import JSONResponse

from src.api.schemas import ErrorResponse, GenerateItineraryResponse
from src.core.errors import ItineraryGenerationError
from src.core.schemas import ItineraryDocument


def _document_to_response(document: ItineraryDocument) -> JSONResponse:
    body = GenerateItineraryResponse(itinerary_json=document.to_payload())
    return JSONResponse(content=body.model_dump())


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def _generation_error_response(exc: ItineraryGenerationError) -> JSONResponse:
    return _error_response(exc.status_code, exc.message)


def _validation_messages(errors: Iterable[dict]) -> List[str]:
    rendered: List[str] = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid value")
        rendered.append(f"{location}: {message}" if location else message)
    return rendered


def _validation_error_response(errors: Iterable[dict]) -> JSONResponse:
    detail = "; ".join(_validation_messages(errors)) or "Invalid request"
    return _error_response(400, f"Invalid request: {detail}")
