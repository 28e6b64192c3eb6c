"""URL canonicalization for duplicate detection."""

from urllib.parse import urlsplit, urlunsplit


def canonicalize(raw_url: str) -> str:
    """Convert a URL to the canonical form used as the dedup key.

    Scheme and host are lowercased, a single trailing slash is dropped from
    non-root paths and an empty path becomes ``/``. Query and fragment are
    kept verbatim. Input that cannot be parsed is returned unchanged.

    Args:
        raw_url: The URL as submitted

    Returns:
        Canonical URL string
    """
    try:
        parsed = urlsplit(raw_url)
    except ValueError:
        return raw_url

    # Credentials are case-sensitive, only the host[:port] part is folded
    userinfo, at, hostport = parsed.netloc.rpartition("@")
    netloc = f"{userinfo}{at}{hostport.lower()}"

    path = parsed.path
    if len(path) > 1 and path.endswith("/"):
        path = path[:-1]
    if not path:
        path = "/"

    return urlunsplit((
        parsed.scheme.lower(),
        netloc,
        path,
        parsed.query,
        parsed.fragment,
    ))
