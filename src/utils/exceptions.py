"""
Token registry exception handling and standardized error codes
"""

from typing import Optional


class TokenRegistryErrorCodes:
    """Standardized error codes for token registry operations"""

    # Validation errors
    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    MISSING_FIELD = "MISSING_FIELD"
    EMPTY_FIELD = "EMPTY_FIELD"
    INVALID_NUMBER = "INVALID_NUMBER"
    NEGATIVE_NUMBER = "NEGATIVE_NUMBER"

    # Storage errors
    STORAGE_READ_FAILED = "STORAGE_READ_FAILED"
    STORAGE_WRITE_FAILED = "STORAGE_WRITE_FAILED"

    # Query view errors
    SUBMISSION_REJECTED = "SUBMISSION_REJECTED"


class TokenRegistryError(Exception):

    def __init__(self, error_code: str, message: str):
        self.error_code = error_code
        self.message = message
        super().__init__(f"{error_code}: {message}")


class ValidationError(TokenRegistryError):
    """A create request is missing a field or carries a malformed value"""

    def __init__(self, error_code: str, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(error_code, message)


class StorageUnavailable(TokenRegistryError):
    """The backing medium cannot be read or written"""

    def __init__(self, message: str, error_code: str = TokenRegistryErrorCodes.STORAGE_READ_FAILED):
        super().__init__(error_code, message)


class SubmissionRejected(TokenRegistryError):

    def __init__(self, cause: TokenRegistryError):
        self.cause = cause
        super().__init__(TokenRegistryErrorCodes.SUBMISSION_REJECTED, cause.message)
