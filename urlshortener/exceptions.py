"""Exceptions raised by the URL shortener service.

Every exception carries the HTTP status code the web layer answers with, so
routes can map failures without inspecting messages.
"""


class URLShortenerError(Exception):
    """Base exception for all service errors."""

    status_code = 500


class InvalidURLError(URLShortenerError):
    """Raised when a URL is empty, unparseable, not http(s), or has no host."""

    status_code = 400


class InvalidShortCodeError(URLShortenerError):
    """Raised when a short code fails the length or character check."""

    # Indistinguishable from a miss for end users
    status_code = 404


class NotFoundError(URLShortenerError):
    """Raised when no record matches a short code."""

    status_code = 404


class CodeGenerationExhaustedError(URLShortenerError):
    """Raised when every collision retry produced a code that is taken."""

    status_code = 500


class StoreFailureError(URLShortenerError):
    """Raised when the store fails for any reason other than a miss."""

    status_code = 500
