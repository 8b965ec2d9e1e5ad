"""Domain errors raised by the service layer.

Each error carries the HTTP status and the machine-readable ``error`` code the
API renders for it (see ``shareit.main``).
"""

from fastapi import status


class ShareItError(Exception):
    """Base class for business-rule violations."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "ERROR"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(ShareItError):
    """A referenced user, item, request, or booking does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class UnauthorizedError(ShareItError):
    """The caller is not allowed to read or change the resource."""

    status_code = status.HTTP_403_FORBIDDEN
    code = "UNAUTHORIZED"


class InvalidTimeRangeError(ShareItError):
    """Booking start/end are out of order or in the past."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "INVALID_TIME_RANGE"


class UnavailableError(ShareItError):
    """The item cannot be booked, or the user may not comment on it."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "UNAVAILABLE"


class ConflictStateError(ShareItError):
    """A status transition was attempted on a booking that is no longer WAITING."""

    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT_STATE"


class InvalidArgumentError(ShareItError):
    """Bad paging parameters or an unrecognised booking state."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "INVALID_ARGUMENT"


class DuplicateEmailError(ShareItError):
    """Another user already registered this email."""

    status_code = status.HTTP_409_CONFLICT
    code = "DUPLICATE_EMAIL"
