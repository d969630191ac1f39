# backend/app/core/exceptions.py
"""
Domain-specific exceptions for the TuitionHub platform.

These exceptions provide clear, business-focused error messages
that can be caught and handled appropriately at the API layer.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_http_exception(self) -> HTTPException:
        """Convert to an HTTPException carrying the standard error envelope."""
        return HTTPException(
            status_code=self.status_code,
            detail={
                "message": self.message,
                "code": self.code,
                "details": self.details,
            },
        )


class ValidationException(DomainException):
    """Raised when a request is missing required data or fails business validation."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    status_code = status.HTTP_404_NOT_FOUND


class UnauthenticatedException(DomainException):
    """Raised when no bearer credential accompanies a protected request."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized Access!") -> None:
        super().__init__(message, code="UNAUTHENTICATED")

    def to_http_exception(self) -> HTTPException:
        exc = super().to_http_exception()
        exc.headers = {"WWW-Authenticate": "Bearer"}
        return exc


class InvalidCredentialException(UnauthenticatedException):
    """Raised when the identity provider rejects the bearer credential."""

    def __init__(self, message: str = "Could not validate credentials") -> None:
        super().__init__(message)
        self.code = "INVALID_CREDENTIAL"


class ForbiddenException(DomainException):
    """Raised when user lacks permission for an action."""

    status_code = status.HTTP_403_FORBIDDEN


class PaymentNotVerifiedException(DomainException):
    """Raised when the payment processor does not report a checkout session as paid."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, session_id: str, payment_status: Optional[str]) -> None:
        super().__init__(
            message="Payment not verified",
            code="PAYMENT_NOT_VERIFIED",
            details={"session_id": session_id, "payment_status": payment_status},
        )


class ServiceException(DomainException):
    """Raised when a service operation fails."""

    def to_http_exception(self) -> HTTPException:
        # Internal failure details stay in the server log.
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": "Internal Server Error", "code": self.code, "details": {}},
        )


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    This exception is used when data access operations fail,
    such as database connection issues, query failures, or
    constraint violations.
    """
