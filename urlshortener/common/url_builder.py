"""URL building utilities for URL shortener."""


def build_short_url(short_code: str, short_domain: str, scheme: str = "http") -> str:
    """Build complete short URL.

    Args:
        short_code: The short code
        short_domain: host[:port] the short links are served from
        scheme: URL scheme of the short link

    Returns:
        Complete short URL (e.g., http://localhost:8080/abc1234)
    """
    domain = short_domain.strip().rstrip("/")
    return f"{scheme}://{domain}/{short_code}"
