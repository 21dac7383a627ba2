"""Errors raised while talking to the PropConnect backend."""

from propconnect_admin.exceptions.base import AppException


class BackendError(AppException):
    """The backend answered with a non-success status."""

    def __init__(self, status_code: int, detail: str | None = None):
        """
        Parameters:
            status_code (int): HTTP status returned by the backend.
            detail (str | None): Backend-provided error text (`error`, `message` or `detail` field) when available.
        """
        self.status_code = status_code
        self.detail = detail
        super().__init__(detail or f"Backend request failed with status {status_code}")


class BackendUnavailableError(AppException):
    """The backend could not be reached (DNS, connect, timeout...)."""

    def __init__(self, message: str = "Unable to connect to server. Please try again."):
        super().__init__(message)
