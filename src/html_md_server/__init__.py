"""
html-md-server: fetch a web page and return it as Markdown.
"""

from .converter import ConversionInput, ConversionOutput, MarkItDownConverter
from .core.errors import ApiError, ErrorKind
from .fetcher import HttpxFetcher
from .handler import ConversionHandler, MarkdownResult

__version__ = "0.1.0"

__all__ = [
    "ApiError",
    "ConversionHandler",
    "ConversionInput",
    "ConversionOutput",
    "ErrorKind",
    "HttpxFetcher",
    "MarkItDownConverter",
    "MarkdownResult",
]
