"""
Error taxonomy for the portal API.

Services raise these instead of framework exceptions; `app.main` registers
handlers that turn every one of them into `{"error": "<message>"}` with
the matching status code.
"""

from fastapi import status


class PortalError(Exception):
    """Base exception for all portal errors"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    headers: dict | None = None

    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message}


class UnauthenticatedError(PortalError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ForbiddenError(PortalError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class NotFoundError(PortalError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


class ValidationError(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Invalid request"):
        super().__init__(message)


class UpstreamFailure(PortalError):
    """Email, push or storage provider call failed"""

    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, message: str = "Upstream service failed"):
        super().__init__(message)


class TooManyRequestsError(PortalError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    headers = {"Retry-After": "60"}

    def __init__(self, message: str = "Too many requests. Please slow down."):
        super().__init__(message)
