"""Domain errors raised by the survey core."""


class SurveyError(Exception):
    """Base class for errors reported back to the caller."""

    status_code = 500

    def __init__(self, message: str = "Survey error"):
        self.message = message
        super().__init__(self.message)


class ValidationError(SurveyError):
    """Malformed or missing input."""

    status_code = 400

    def __init__(self, message: str = "Validation error"):
        super().__init__(message)


class UnauthorizedError(SurveyError):
    """Admin authorization missing or invalid."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFoundError(SurveyError):
    """Survey not found."""

    status_code = 404

    def __init__(self, message: str = "Survey not found"):
        super().__init__(message)


class ConflictError(SurveyError):
    """Participant already responded to the survey."""

    status_code = 409

    def __init__(self, message: str = "You have already responded to this survey"):
        super().__init__(message)


class StorageUnavailableError(SurveyError):
    """Storage backend unreachable or not writable. Fatal at startup."""

    status_code = 503

    def __init__(self, message: str = "Storage unavailable"):
        super().__init__(message)
