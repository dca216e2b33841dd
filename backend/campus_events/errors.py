"""Domain errors raised by the service layer.

Each error is an ``HTTPException`` so routers can let it propagate untouched;
``code`` is stable and lets clients tell business-rule refusals ("not allowed")
apart from storage trouble ("retry may help").
"""
from typing import Optional

from fastapi import HTTPException, status


class CampusEventsError(HTTPException):
    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "error"
    message: str = "Request could not be processed"

    def __init__(self, message: Optional[str] = None, **extra):
        self.message = message or self.message
        detail = {"code": self.code, "message": self.message}
        detail.update(extra)
        super().__init__(status_code=self.status_code, detail=detail)


class Forbidden(CampusEventsError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    message = "You are not allowed to perform this action"


class NotFound(CampusEventsError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    message = "Resource not found"


class InvalidSchedule(CampusEventsError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "invalid_schedule"
    message = "Event start time must be before its end time"


class UnknownVenue(CampusEventsError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "unknown_venue"
    message = "Venue does not exist"


class EventNotOpen(CampusEventsError):
    status_code = status.HTTP_409_CONFLICT
    code = "event_not_open"
    message = "Event is not open for registration"


class EventFull(EventNotOpen):
    code = "event_full"
    message = "Event has reached its participant limit"


class AlreadyRegistered(CampusEventsError):
    status_code = status.HTTP_409_CONFLICT
    code = "already_registered"
    message = "Already registered for this event"


class AccountPendingApproval(CampusEventsError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "account_pending_approval"
    message = (
        "Your account is pending admin approval. "
        "You'll receive login details by email once approved."
    )


class InvalidCredentials(CampusEventsError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_credentials"
    message = "Invalid email or password"


class PartialApprovalFailure(CampusEventsError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "partial_approval_failure"
    message = "Credential was changed but the account could not be marked approved"


class Conflict(CampusEventsError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"
    message = "Request conflicts with the current state"


class StorageUnavailable(CampusEventsError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "storage_unavailable"
    message = "Storage is temporarily unavailable, please retry"
