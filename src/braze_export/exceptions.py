"""braze_export exception types."""

from __future__ import annotations


class BrazeExportError(Exception):
    """Base error for the braze_export library."""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class ConfigurationError(BrazeExportError):
    """Raised when the export configuration cannot be used to build a request."""


class BrazeExportErrorCodes:
    """Error code constants for BrazeExportError."""

    UNKNOWN_ENDPOINT: str = "UNKNOWN_ENDPOINT"
    VALIDATION: str = "VALIDATION_ERROR"
    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
