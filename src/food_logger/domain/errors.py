"""Error types raised across the food logger."""


class FoodLoggerError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500


class InvalidRequestError(FoodLoggerError):
    """The request cannot be served as given."""

    status_code = 400


class ConfigurationError(FoodLoggerError):
    """The selected AI backend has no usable credentials or endpoint."""


class UnsupportedBackendError(ConfigurationError):
    """The configured AI backend tag has no implementation."""


class AIBackendError(FoodLoggerError):
    """The AI backend failed or returned an unusable payload."""


class ParseError(FoodLoggerError):
    """The AI backend answered with content that does not fit the schema."""


class StorageError(FoodLoggerError):
    """Local file storage failed."""


class DocumentStoreError(Exception):
    """Document store operation failed; callers fall back to file storage."""
