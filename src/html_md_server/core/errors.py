"""
Error taxonomy for the conversion pipeline.

Every failure the handler can produce is an ``ApiError`` value carrying the
client-facing message and the HTTP status it maps to. Pipeline stages return
these instead of raising, so the first error simply ends the pipeline.
"""

from dataclasses import dataclass
from enum import Enum

from litestar.status_codes import (
    HTTP_400_BAD_REQUEST,
    HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_504_GATEWAY_TIMEOUT,
)


class ErrorKind(str, Enum):
    MISSING_PARAMETER = "MissingParameter"
    INVALID_URL = "InvalidUrl"
    UPSTREAM_ERROR = "UpstreamError"
    UNSUPPORTED_CONTENT_TYPE = "UnsupportedContentType"
    PAYLOAD_TOO_LARGE = "PayloadTooLarge"
    CONVERSION_FAILED = "ConversionFailed"
    TIMEOUT = "Timeout"
    UNEXPECTED = "Unexpected"
    UNCAUGHT = "Uncaught"


@dataclass(frozen=True)
class ApiError:
    """A terminal pipeline failure: what the client sees and with which status.

    Attributes:
        kind: Which stage failed and why
        message: Human readable message returned as the ``error`` field
        status: HTTP status code of the error response
    """

    kind: ErrorKind
    message: str
    status: int

    def to_dict(self) -> dict:
        return {"error": self.message, "status": self.status}


def missing_parameter() -> ApiError:
    return ApiError(
        ErrorKind.MISSING_PARAMETER, "URL parameter is required", HTTP_400_BAD_REQUEST
    )


def invalid_url() -> ApiError:
    return ApiError(
        ErrorKind.INVALID_URL,
        "Invalid URL format. Must be a valid HTTP or HTTPS URL",
        HTTP_400_BAD_REQUEST,
    )


def upstream_error(url: str, status: int, status_text: str) -> ApiError:
    return ApiError(
        ErrorKind.UPSTREAM_ERROR, f"Failed to fetch {url}: {status_text}", status
    )


def unsupported_content_type() -> ApiError:
    return ApiError(
        ErrorKind.UNSUPPORTED_CONTENT_TYPE,
        "Only HTML content is supported",
        HTTP_400_BAD_REQUEST,
    )


def payload_too_large() -> ApiError:
    return ApiError(
        ErrorKind.PAYLOAD_TOO_LARGE,
        "Content too large. Maximum size is 10MB",
        HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    )


def conversion_failed() -> ApiError:
    return ApiError(
        ErrorKind.CONVERSION_FAILED,
        "Failed to convert HTML to Markdown",
        HTTP_500_INTERNAL_SERVER_ERROR,
    )


def request_timeout() -> ApiError:
    return ApiError(ErrorKind.TIMEOUT, "Request timeout", HTTP_504_GATEWAY_TIMEOUT)


def unexpected() -> ApiError:
    return ApiError(
        ErrorKind.UNEXPECTED,
        "Internal server error while processing request",
        HTTP_500_INTERNAL_SERVER_ERROR,
    )


def uncaught() -> ApiError:
    return ApiError(
        ErrorKind.UNCAUGHT, "Internal Server Error", HTTP_500_INTERNAL_SERVER_ERROR
    )
