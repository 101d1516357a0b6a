"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

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

    def __init__(self, resource: str, identifier: object):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class InsufficientQuantityError(AppError):
    """Raised when a SELL asks for more shares than the holding has."""

    def __init__(self, symbol: str, requested: int, available: int):
        self.symbol = symbol
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient quantity of {symbol}: requested {requested}, available {available}",
            code="INSUFFICIENT_QUANTITY",
        )


class ConsistencyError(AppError):
    """Raised when replaying a symbol's history reaches an impossible state."""

    def __init__(self, symbol: str, message: str):
        self.symbol = symbol
        super().__init__(f"Inconsistent history for {symbol}: {message}", code="CONSISTENCY_ERROR")
