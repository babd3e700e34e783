from fastapi import HTTPException, Request, status

from restaurant_pos.events import EventPublisher
from restaurant_pos.services.errors import InvalidStateError, NotFoundError


def request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def get_publisher(request: Request) -> EventPublisher:
    return request.app.state.event_publisher


def to_http_error(exc: Exception) -> HTTPException:
    """Map service exceptions onto HTTP status codes."""
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, InvalidStateError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
