class AbortError(Exception):
    """Raised by collaborators when an operation was aborted, e.g. on timeout."""

    pass


class FetchError(Exception):
    """Raised by the fetcher on transport-level failures."""

    pass
