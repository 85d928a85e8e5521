"""
Error mapping and response generation functions.
"""

import logging
from typing import Union

from litestar import MediaType
from litestar.exceptions import HTTPException
from litestar.response import Response
from litestar.status_codes import HTTP_500_INTERNAL_SERVER_ERROR

from .errors import ApiError, request_timeout, uncaught, unexpected
from .exceptions import AbortError

logger = logging.getLogger(__name__)


def classify_exception(error: BaseException) -> ApiError:
    """Map an exception raised by a collaborator to a pipeline error.

    Args:
        error: Exception raised while fetching, reading or converting

    Returns:
        Timeout error for aborts, generic internal error for anything else
    """
    if isinstance(error, AbortError):
        return request_timeout()

    logger.error("Unexpected error: %r", error, exc_info=error)
    return unexpected()


def map_uncaught_exception(error: Exception) -> ApiError:
    """Map a failure that escaped the handler to the generic 500 error."""
    logger.error("Unhandled error while serving request: %r", error, exc_info=error)
    return uncaught()


def map_http_exception(error: HTTPException) -> dict:
    """Map framework HTTP exceptions (404, 405, ...) to the error body shape.

    Server side failures only expose the generic message.
    """
    if error.status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        return map_uncaught_exception(error).to_dict()
    return {"error": error.detail, "status": error.status_code}


def status_allows_body(status: int) -> bool:
    return status >= 200 and status not in (204, 304)


def log_api_error(error: ApiError) -> None:
    if error.status >= HTTP_500_INTERNAL_SERVER_ERROR:
        logger.warning("%s (%d): %s", error.kind.value, error.status, error.message)
    else:
        logger.info("%s (%d): %s", error.kind.value, error.status, error.message)


def create_error_response(error: Union[ApiError, dict]) -> Response:
    """Build the JSON error response for an API error or a pre-built body."""
    body = error.to_dict() if isinstance(error, ApiError) else error
    if not status_allows_body(body["status"]):
        # e.g. an upstream 304 passed through; the status line carries the error
        return Response(
            content=b"", status_code=body["status"], media_type=MediaType.TEXT
        )
    return Response(
        content=body,
        status_code=body["status"],
        media_type=MediaType.JSON,
    )
