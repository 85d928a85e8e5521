import logging
from typing import Optional

from litestar import Litestar, Request
from litestar.di import Provide
from litestar.exceptions import HTTPException
from litestar.middleware.logging import LoggingMiddlewareConfig
from litestar.response import Response

from .controllers import HtmlController
from .converter import MarkdownConverter, MarkItDownConverter
from .core.config import Settings, get_settings
from .core.error_mapper import (
    create_error_response,
    map_http_exception,
    map_uncaught_exception,
)
from .fetcher import Fetcher, HttpxFetcher
from .handler import ConversionHandler
from .middleware import ServerTimingMiddleware

logger = logging.getLogger(__name__)


def handle_http_exception(request: Request, exc: HTTPException) -> Response:
    """Render framework errors (unknown route, bad method) as JSON errors"""
    logger.info(
        "%s %s -> %d: %s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.detail,
    )
    return create_error_response(map_http_exception(exc))


def handle_uncaught_exception(request: Request, exc: Exception) -> Response:
    """Last resort for failures that escaped the conversion handler"""
    return create_error_response(map_uncaught_exception(exc))


def create_app(
    settings: Optional[Settings] = None,
    fetcher: Optional[Fetcher] = None,
    converter: Optional[MarkdownConverter] = None,
) -> Litestar:
    """Build the application, optionally with custom collaborators"""
    settings = settings or get_settings()
    fetcher = fetcher or HttpxFetcher.from_settings(settings)
    converter = converter or MarkItDownConverter()

    def provide_settings() -> Settings:
        """Provide application settings as singleton"""
        return settings

    def provide_conversion_handler() -> ConversionHandler:
        """Provide a ConversionHandler wired to the configured collaborators"""
        return ConversionHandler(
            fetcher, converter, max_content_length=settings.max_content_length
        )

    def configure_logging() -> None:
        level = logging.DEBUG if settings.debug else settings.log_level.upper()
        logging.basicConfig(
            level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    request_logging = LoggingMiddlewareConfig(
        request_log_fields=("method", "path", "query"),
        response_log_fields=("status_code",),
    )

    return Litestar(
        route_handlers=[HtmlController],
        dependencies={
            "settings": Provide(provide_settings, sync_to_thread=False),
            "conversion_handler": Provide(
                provide_conversion_handler, sync_to_thread=False
            ),
        },
        middleware=[ServerTimingMiddleware(), request_logging.middleware],
        exception_handlers={
            HTTPException: handle_http_exception,
            Exception: handle_uncaught_exception,
        },
        debug=settings.debug,
        state={"config": settings},
        on_startup=[configure_logging],
    )


app = create_app()
