"""Booking error taxonomy.

Each error is an HTTPException so the service layer can raise it directly
and FastAPI renders it as ``{"detail": ...}`` with the right status code.
"""
from fastapi import HTTPException, status


class BookingError(HTTPException):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(status_code=self.status_code, detail=detail)


class NotFound(BookingError):
    """Unknown booking, venue or user id."""

    status_code = status.HTTP_404_NOT_FOUND


class Forbidden(BookingError):
    """Actor lacks the role or ownership the operation requires."""

    status_code = status.HTTP_403_FORBIDDEN


class InvalidTransition(BookingError):
    """Current status does not allow the requested target status."""


class InvalidStage(BookingError):
    """Edit or feedback attempted while the booking is in the wrong status."""


class Conflict(BookingError):
    """Venue slot already taken, or a duplicate record."""


class InvalidTimeRange(BookingError):
    """Malformed HH:MM value, or start not before end."""


class Unauthorized(BookingError):
    """Unknown username or wrong password."""

    status_code = status.HTTP_401_UNAUTHORIZED
