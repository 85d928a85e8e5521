"""
Validation of the inbound ``url`` query parameter.
"""

import re
from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import urlparse

from .errors import ApiError, invalid_url, missing_parameter

ALLOWED_SCHEMES = ("http", "https")

# http: and https: URLs may omit the slashes or use backslashes, e.g. http:example.com
_SPECIAL_SCHEME_PREFIX = re.compile(r"^(https?):[\\/]*", re.IGNORECASE)


@dataclass(frozen=True)
class ValidatedUrl:
    """A target URL known to be absolute with an http or https scheme.

    ``url`` is the normalized form that gets fetched, ``requested`` is the value
    as the client sent it.
    """

    url: str
    scheme: str
    hostname: str
    requested: str

    @property
    def document_name(self) -> str:
        """Name given to the fetched page when it is handed to the converter."""
        return f"{self.hostname}.html"


def validate_url_param(url: Optional[str]) -> Union[ValidatedUrl, ApiError]:
    """Validate the raw query parameter.

    Args:
        url: Value of the ``url`` query parameter, ``None`` when absent

    Returns:
        ValidatedUrl on success, otherwise the ApiError describing the problem
    """
    if not url:
        return missing_parameter()

    requested = url.strip()
    url = _SPECIAL_SCHEME_PREFIX.sub(r"\1://", requested, count=1)
    try:
        parsed = urlparse(url)
        # Accessing port validates it and raises ValueError when out of range
        parsed.port
    except ValueError:
        return invalid_url()

    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        return invalid_url()

    if not parsed.netloc or not parsed.hostname:
        return invalid_url()

    if any(ch.isspace() for ch in parsed.netloc):
        return invalid_url()

    return ValidatedUrl(
        url=url,
        scheme=parsed.scheme.lower(),
        hostname=parsed.hostname,
        requested=requested,
    )
