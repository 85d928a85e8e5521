"""
HTML page to Markdown conversion pipeline.

``ConversionHandler.handle`` runs validation, fetch, content gating and
conversion in order. Each stage returns either its value or an ``ApiError``;
the first ``ApiError`` is returned as the result of the whole request.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .converter import ConversionInput, MarkdownConverter
from .core.error_mapper import classify_exception
from .core.errors import (
    ApiError,
    conversion_failed,
    payload_too_large,
    unsupported_content_type,
    upstream_error,
)
from .core.validation import ValidatedUrl, validate_url_param
from .fetcher import Fetcher

logger = logging.getLogger(__name__)

MAX_CONTENT_LENGTH = 10 * 1024 * 1024
HTML_CONTENT_TYPE = "text/html"


@dataclass(frozen=True)
class MarkdownResult:
    markdown: str


@dataclass(frozen=True)
class FetchedPage:
    body: str
    content_type: str


HandlerResult = Union[MarkdownResult, ApiError]


class ConversionHandler:
    """Fetches an HTML page and converts it to Markdown."""

    def __init__(
        self,
        fetcher: Fetcher,
        converter: MarkdownConverter,
        max_content_length: int = MAX_CONTENT_LENGTH,
    ):
        self.fetcher = fetcher
        self.converter = converter
        self.max_content_length = max_content_length

    async def handle(self, url: Optional[str]) -> HandlerResult:
        """Run the pipeline for the raw ``url`` query value."""
        target = validate_url_param(url)
        if isinstance(target, ApiError):
            return target

        page = await self.fetch_page(target)
        if isinstance(page, ApiError):
            return page

        return await self.convert_page(target, page)

    async def fetch_page(self, target: ValidatedUrl) -> Union[FetchedPage, ApiError]:
        """Fetch the target and apply the content type and size gates."""
        try:
            response = await self.fetcher.fetch(target.url)
        except Exception as e:
            return classify_exception(e)

        if not response.ok:
            return upstream_error(
                target.requested, response.status, response.status_text
            )

        content_type = response.headers.get("Content-Type")
        if not content_type or HTML_CONTENT_TYPE not in content_type:
            return unsupported_content_type()

        try:
            body = await response.text()
        except Exception as e:
            return classify_exception(e)

        if len(body) > self.max_content_length:
            return payload_too_large()

        return FetchedPage(body=body, content_type=content_type)

    async def convert_page(
        self, target: ValidatedUrl, page: FetchedPage
    ) -> Union[MarkdownResult, ApiError]:
        document = ConversionInput(
            name=target.document_name,
            blob=page.body.encode("utf-8"),
            content_type=page.content_type,
        )
        try:
            converted = await self.converter.to_markdown([document])
        except Exception as e:
            return classify_exception(e)

        if not converted:
            return conversion_failed()

        try:
            markdown = converted[0].data or ""
        except (AttributeError, TypeError, LookupError) as e:
            return classify_exception(e)

        logger.info("Converted %s to %d chars of markdown", target.url, len(markdown))
        return MarkdownResult(markdown=markdown)
