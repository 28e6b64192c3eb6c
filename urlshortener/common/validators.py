"""Validation utilities for URL shortener."""

import re
from urllib.parse import urlparse
from typing import Tuple

MAX_URL_LENGTH = 2048

SHORT_CODE_MIN_LENGTH = 4
SHORT_CODE_MAX_LENGTH = 20

_SHORT_CODE_PATTERN = re.compile(r"[A-Za-z0-9_-]+")

# ASCII control characters, space and DEL (urlparse drops some of them silently)
_UNSAFE_URL_CHARACTERS = re.compile(r"[\x00-\x20\x7f]")


def is_valid_url(url: str) -> Tuple[bool, str]:
    """Validate a URL submitted for shortening.

    Args:
        url: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL cannot be empty"

    if len(url) > MAX_URL_LENGTH:
        return False, f"URL is too long (max {MAX_URL_LENGTH} characters)"

    if _UNSAFE_URL_CHARACTERS.search(url):
        return False, "URL must not contain whitespace or control characters"

    try:
        result = urlparse(url)
        hostname = result.hostname
        # The port is only parsed on access
        result.port
    except ValueError as e:
        return False, f"invalid URL format: {e}"

    if result.scheme.lower() not in ("http", "https"):
        return False, "only HTTP and HTTPS protocols are supported"

    if not hostname:
        return False, "URL must have a valid host"

    return True, ""


def is_valid_short_code(
    short_code: str,
    min_length: int = SHORT_CODE_MIN_LENGTH,
    max_length: int = SHORT_CODE_MAX_LENGTH,
) -> Tuple[bool, str]:
    """Validate a short code before it is looked up.

    Args:
        short_code: The short code to validate
        min_length: Minimum length for short code
        max_length: Maximum length for short code

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not short_code or not isinstance(short_code, str):
        return False, "Short code is required"

    if len(short_code) < min_length:
        return False, f"Short code must be at least {min_length} characters"

    if len(short_code) > max_length:
        return False, f"Short code must be at most {max_length} characters"

    # Only allow alphanumeric characters, hyphens, and underscores
    if not _SHORT_CODE_PATTERN.fullmatch(short_code):
        return False, "Short code can only contain letters, numbers, hyphens, and underscores"

    return True, ""
