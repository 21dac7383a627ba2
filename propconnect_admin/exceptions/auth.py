"""Authentication and session exceptions."""

from propconnect_admin.exceptions.base import AppException


class AuthenticationError(AppException):
    """Base class for authentication-related errors."""

    pass


class InvalidCredentialsError(AuthenticationError):
    """The backend rejected the username/password or the account is not an admin."""

    def __init__(self, message: str = "Invalid admin credentials"):
        """
        Initialize the InvalidCredentialsError with a human-readable message.

        Parameters:
            message: Custom error message describing the login failure; defaults to "Invalid admin credentials".
        """
        super().__init__(message)


class NotAuthenticatedError(AuthenticationError):
    """A protected route was requested while no operator session exists."""

    def __init__(self, next_path: str = "/"):
        """
        Initialize the error with the path the operator was trying to reach.

        Parameters:
            next_path (str): Requested path, carried to the login redirect so the operator can return to it.
        """
        self.next_path = next_path
        super().__init__("Authentication required")


class SessionExpiredError(AuthenticationError):
    """The backend answered 401 to an authenticated request; the session has been torn down."""

    def __init__(self, message: str = "Your session has expired. Please log in again."):
        super().__init__(message)


class SessionResolvingError(AuthenticationError):
    """The persisted session has not been read yet; protected content must not render."""

    def __init__(self):
        super().__init__("Loading session")


class InsufficientPermissionsError(AuthenticationError):
    """The session does not belong to an ADMIN account."""

    def __init__(self, message: str = "Insufficient permissions"):
        """
        Initialize InsufficientPermissionsError with an optional message describing the permission failure.

        Parameters:
            message (str): Human-readable error message; defaults to "Insufficient permissions".
        """
        super().__init__(message)
