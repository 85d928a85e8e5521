from typing import Annotated, Optional

from litestar import Controller, get
from litestar.params import Dependency, Parameter
from litestar.response import Response
from litestar.status_codes import HTTP_200_OK

from .core.config import Settings
from .core.error_mapper import create_error_response, log_api_error
from .core.errors import ApiError
from .handler import ConversionHandler

MARKDOWN_CONTENT_TYPE = "text/plain; charset=UTF-8"


class HtmlController(Controller):
    path = "/html"

    @get("")
    async def convert_html(
        self,
        conversion_handler: Annotated[
            ConversionHandler, Dependency(skip_validation=True)
        ],
        settings: Annotated[Settings, Dependency(skip_validation=True)],
        url: Annotated[Optional[str], Parameter(query="url", required=False)] = None,
    ) -> Response:
        """Fetch the page at ``url`` and return it as Markdown text"""
        result = await conversion_handler.handle(url)

        if isinstance(result, ApiError):
            log_api_error(result)
            return create_error_response(result)

        return Response(
            content=result.markdown,
            status_code=HTTP_200_OK,
            media_type=MARKDOWN_CONTENT_TYPE,
            headers={"Cache-Control": settings.cache_control},
        )
