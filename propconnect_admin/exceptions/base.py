"""Base exception for the admin console."""


class AppException(Exception):
    """Root of every domain error raised by the admin console."""

    def __init__(self, message: str = "An application error occurred"):
        """
        Initialize the exception with a human-readable message.

        Parameters:
            message (str): Description of the failure; also returned by `str(exc)`.
        """
        self.message = message
        super().__init__(message)
