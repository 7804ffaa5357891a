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

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class StorageError(AppError):
    """Raised when the backing store is malformed or unreachable."""

    def __init__(self, message: str):
        super().__init__(message, code="STORAGE_ERROR")


class WriteConflictError(AppError):
    """Raised when a concurrent writer changed a ledger row under us."""

    def __init__(self, message: str):
        super().__init__(message, code="WRITE_CONFLICT")


class TradeProcessingError(AppError):
    """Raised when a single trade could not be applied after all retries."""

    def __init__(self, signature: str, attempts: int, reason: str):
        self.signature = signature
        self.attempts = attempts
        super().__init__(
            f"Trade {signature} not applied after {attempts} attempts: {reason}",
            code="TRADE_PROCESSING_ERROR",
        )


class DuplicateTradeError(AppError):
    """Raised by the Trade Log when a signature is already recorded."""

    def __init__(self, signature: str):
        self.signature = signature
        super().__init__(f"Trade already recorded: {signature}", code="DUPLICATE_TRADE")
