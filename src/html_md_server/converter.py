import asyncio
import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import List, Optional, Protocol, Sequence

from markitdown import MarkItDown, StreamInfo


@dataclass
class ConversionInput:
    """A named document handed to the converter.

    ``content_type`` is the declared type of the document; ``encoding`` is the
    encoding ``blob`` was actually written in, which wins over any charset
    parameter of the declared type.
    """

    name: str
    blob: bytes
    content_type: str
    encoding: str = "utf-8"


@dataclass
class ConversionOutput:
    """One converted document; ``data`` holds the Markdown text."""

    name: str
    mime_type: str
    data: str
    format: str = "markdown"


class MarkdownConverter(Protocol):
    async def to_markdown(
        self, documents: Sequence[ConversionInput]
    ) -> Optional[Sequence[ConversionOutput]]:
        """Convert documents, returning one output per input in input order."""
        ...


def media_type(content_type: str) -> str:
    """Strip parameters such as ``charset`` from a Content-Type value."""
    return content_type.partition(";")[0].strip().lower()


class MarkItDownConverter:
    """Markdown converter backed by MarkItDown stream conversion."""

    def __init__(self, markitdown_instance: Optional[MarkItDown] = None):
        self._markitdown_instance = markitdown_instance
        self._logger = logging.getLogger(__name__)

    def _get_markitdown_instance(self) -> MarkItDown:
        if self._markitdown_instance is None:
            self._markitdown_instance = MarkItDown(enable_plugins=False)
            self._logger.info("MarkItDown instance initialized")
        return self._markitdown_instance

    async def to_markdown(
        self, documents: Sequence[ConversionInput]
    ) -> List[ConversionOutput]:
        loop = asyncio.get_event_loop()
        results = []
        for document in documents:
            markdown = await loop.run_in_executor(
                None, self._sync_convert_document, document
            )
            results.append(
                ConversionOutput(
                    name=document.name, mime_type="text/markdown", data=markdown
                )
            )
        return results

    def _sync_convert_document(self, document: ConversionInput) -> str:
        stream_info = StreamInfo(
            mimetype=media_type(document.content_type) or None,
            charset=document.encoding,
            extension=Path(document.name).suffix.lower() or None,
            filename=document.name,
        )

        with BytesIO(document.blob) as stream:
            result = self._get_markitdown_instance().convert_stream(
                stream, stream_info=stream_info
            )
        self._logger.debug(
            "Converted %s (%d bytes) to %d chars of markdown",
            document.name,
            len(document.blob),
            len(result.markdown),
        )
        return result.markdown
