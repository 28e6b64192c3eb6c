"""Core business logic for URL shortener."""

from .canonical import canonicalize
from .shortcode import ShortCodeGenerator
from .service import URLShortenerService

__all__ = ["canonicalize", "ShortCodeGenerator", "URLShortenerService"]
