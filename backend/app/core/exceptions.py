"""Error taxonomy shared by services and mapped to HTTP responses in app.main."""


class CarTrackError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CarTrackError):
    """Malformed or missing input."""
    status_code = 400


class AuthError(CarTrackError):
    """Missing, unknown or expired session."""
    status_code = 401

    def __init__(self, reason: str = "missing"):
        message = "Session expired" if reason == "expired" else "Unauthorized"
        super().__init__(message)
        self.reason = reason


class NotFoundError(CarTrackError):
    status_code = 404


class ConflictError(CarTrackError):
    status_code = 400


class StateError(CarTrackError):
    """Operation not possible in the current application state."""
    status_code = 400


class StorageError(CarTrackError):
    """Unexpected store or filesystem failure."""
    status_code = 500
