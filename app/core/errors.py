"""
Application errors for clean API error handling.

Use ServiceUnavailableError when a dependency (computation service, image host)
is misconfigured or unreachable so the API can return 503 with a user-facing message.
"""


class ServiceUnavailableError(Exception):
    """Raised when a required service (e.g. the computation API) is unavailable or misconfigured."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NothingToConvertError(ValueError):
    """Raised when a conversion query is built from text with no applicable unit conversion."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__("Nothing to convert")


class ImageHostingError(Exception):
    """Raised when the image host rejects or fails an upload."""

    def __init__(self, url: str, detail: str) -> None:
        self.url = url
        self.detail = detail
        super().__init__(f"Upload failed for {url}: {detail}")
