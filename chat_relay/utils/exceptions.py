from typing import Any, Dict, Optional
from fastapi import status


class AppException(Exception):
    """Base application exception class."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            status_code: HTTP status code to return
            details: Additional error details
        """
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class MalformedEventException(AppException):
    """Exception for inbound websocket frames that cannot be understood."""

    def __init__(
        self,
        message: str = "Malformed event",
        event: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize malformed event exception.

        Args:
            message: Error message
            event: Name of the event, when it could be read from the frame
            details: Validation error details
        """
        error_details = details or {}
        if event:
            error_details["event"] = event

        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=error_details
        )


class ConnectionNotFoundException(AppException):
    """Exception for operations addressed to a connection that is not live."""

    def __init__(self, connection_id: str, message: Optional[str] = None):
        super().__init__(
            message=message or f"Connection with ID {connection_id} not found",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"connection_id": connection_id}
        )


class ModelInitializationException(AppException):
    """Exception raised when an assistant model cannot be built at startup."""

    def __init__(
        self,
        model_name: str,
        message: str = "Model initialization failed",
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize model initialization exception.

        Args:
            model_name: Name of the model that failed to build
            message: Error message
            details: Additional error details
        """
        error_details = details or {}
        error_details["model"] = model_name

        super().__init__(
            message=message,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details=error_details
        )
