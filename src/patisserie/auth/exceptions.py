"""Authentication and authorization failures raised by the HTTP layer."""


class AuthenticationError(Exception):
    """Missing, malformed or rejected bearer token."""

    def __init__(self, message: str = "Not authorized, no token") -> None:
        super().__init__(message)
        self.message = message


class PermissionDeniedError(Exception):
    """The caller is authenticated but not allowed to act."""

    def __init__(self, message: str = "Not authorized as an admin") -> None:
        super().__init__(message)
        self.message = message
