"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 400

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class ConflictError(AppError):
    """Raised when a resource already exists."""

    status_code = 409

    def __init__(self, message: str):
        super().__init__(message, code="CONFLICT")


class LastGroupError(ValidationError):
    """Raised when deleting the only remaining portfolio group."""

    def __init__(self) -> None:
        super().__init__("At least one portfolio group must be kept")
        self.code = "LAST_GROUP"


class DataUnavailableError(AppError):
    """Raised when upstream market data is required but unavailable."""

    status_code = 503

    def __init__(self, message: str):
        super().__init__(message, code="DATA_UNAVAILABLE")
