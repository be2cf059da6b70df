# tracker/shared/exceptions.py
from typing import Iterable, Optional

from fastapi import HTTPException, status


class BaseHTTPException(HTTPException):
    """Base class for exceptions that declare their status and message."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    message: str = "Request could not be processed"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(
            status_code=type(self).status_code, detail=message or type(self).message
        )


# Authentication & Authorization Exceptions
class InvalidTokenError(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing or invalid token"
        )


class NotAuthorizedError(HTTPException):
    def __init__(self) -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")


class InsufficientPermissionError(HTTPException):
    def __init__(self, entity: str, action: str) -> None:
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Insufficient permissions: {entity}.{action} required",
        )


class FeatureDisabledError(HTTPException):
    def __init__(self, feature: str) -> None:
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Feature disabled for this project: {feature}",
        )


# Workflow state Exceptions
class InvalidObjectStateError(BaseHTTPException):
    """Raised when an object is not in a status that allows the operation."""

    status_code = status.HTTP_409_CONFLICT
    message = "Object is not in a valid state for this operation"


class DeliveryCriteriaNotMetError(HTTPException):
    def __init__(
        self, pending_kpis: Iterable[str], pending_quality_standards: Iterable[str]
    ) -> None:
        self.pending_kpis = list(pending_kpis)
        self.pending_quality_standards = list(pending_quality_standards)
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": "All linked KPIs and quality standards must be assessed",
                "pending_kpis": self.pending_kpis,
                "pending_quality_standards": self.pending_quality_standards,
            },
        )


# Validation / Request Exceptions
class InvalidDataError(HTTPException):
    def __init__(self, message: str = "Invalid request data") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
