"""
Application exceptions for the Hostel backend.

Every exception carries a machine-readable error code and the HTTP status it
maps to, so the API layer can render them uniformly.
"""
from typing import Any


class HostelException(Exception):
    """
    Base exception for all Hostel application errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error code for API responses
        details: Additional error context
        status_code: HTTP status used when the error reaches a client
    """

    status_code: int = 400

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ResourceNotFoundError(HostelException):
    """Raised when a requested record does not exist."""

    status_code = 404

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            f"{resource} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource": resource, "id": resource_id},
        )


# Occupancy errors
class OccupancyError(HostelException):
    """Base exception for room placement failures"""


class RoomNotFoundError(OccupancyError):
    """Referenced room number has no matching room"""

    status_code = 404

    def __init__(self, room_number: str):
        super().__init__(
            f"Room '{room_number}' does not exist",
            "ROOM_NOT_FOUND",
            {"room_number": room_number},
        )


class RoomFullError(OccupancyError):
    """Room already holds as many residents as its type allows"""

    status_code = 409

    def __init__(self, room_number: str, capacity: int):
        super().__init__(
            f"Room '{room_number}' is full (capacity {capacity})",
            "ROOM_FULL",
            {"room_number": room_number, "capacity": capacity},
        )


class ConcurrentUpdateError(OccupancyError):
    """Room was modified by another request between read and write"""

    status_code = 409

    def __init__(self, room_number: str):
        super().__init__(
            f"Room '{room_number}' was modified concurrently, retry the request",
            "CONCURRENT_UPDATE",
            {"room_number": room_number},
        )


class StoreUnavailableError(HostelException):
    """Underlying persistence call failed"""

    status_code = 503

    def __init__(self, operation: str, reason: str):
        super().__init__(
            f"Storage unavailable during {operation}",
            "STORE_UNAVAILABLE",
            {"operation": operation, "reason": reason},
        )


class RoomConflictError(HostelException):
    """Room change would break uniqueness or occupancy rules"""

    status_code = 409

    def __init__(self, message: str, room_number: str):
        super().__init__(message, "ROOM_CONFLICT", {"room_number": room_number})


# Account errors
class DuplicateEmailError(HostelException):
    status_code = 409

    def __init__(self, email: str):
        super().__init__(
            f"A user with email '{email}' already exists",
            "DUPLICATE_EMAIL",
            {"email": email},
        )
