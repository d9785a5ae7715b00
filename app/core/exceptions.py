"""Custom application exceptions."""


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500):
        """Initialize exception with message and status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class UnauthorizedException(AppException):
    """Unauthorized access exception."""

    def __init__(self, message: str = "Unauthorized"):
        """Initialize with 401 status code."""
        super().__init__(message, status_code=401)


class DatabaseConfigurationError(AppException):
    """Connection settings are missing or cannot be parsed. Fatal at startup."""

    def __init__(self, message: str = "Invalid database configuration"):
        """Initialize with 500 status code."""
        super().__init__(message, status_code=500)
