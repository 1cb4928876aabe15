"""Custom exception classes for the storage adapter."""

from typing import Any

from core.utils.constants import (
    ERROR_CODE_IMAGE_DELETION_FAILED,
    ERROR_CODE_IMAGE_LOOKUP_FAILED,
    ERROR_CODE_IMAGE_UPLOAD_FAILED,
    ERROR_CODE_INTERNAL_SERVER_ERROR,
    ERROR_CODE_VALIDATION_FAILED,
)


class ImageServiceError(Exception):
    """
    Base exception for all storage adapter errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(ImageServiceError):
    """Raised when an image submission is malformed."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ImageLookupFailedError(ImageServiceError):
    """Raised when an existence probe fails for a reason other than not-found."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_IMAGE_LOOKUP_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ImageUploadFailedError(ImageServiceError):
    """Raised when the remote store rejects or fails an upload."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_IMAGE_UPLOAD_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ImageDeletionFailedError(ImageServiceError):
    """Raised when the remote store fails a delete."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_IMAGE_DELETION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class InternalServerError(ImageServiceError):
    """
    The single error kind handed back to the host.

    It is returned, not raised, by the host-facing adapter operations.
    `err` keeps the original cause so the host can log the remote details.
    """

    status_code: int = 500
    err: BaseException | None

    def __init__(
        self,
        *,
        message: str,
        err: BaseException | None = None,
        error_code: str = ERROR_CODE_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )
        self.err = err
        self.__cause__ = err
