"""
Input shaping for profile fields.

URL rules: upgrade http to https, lowercase host, drop a leading ``www.``,
default ports, ``utm_*`` tracking parameters and trailing slashes, sort
the query string. Other schemes and embedded credentials are rejected.
"""

from typing import List, Union
from urllib.parse import urlsplit, urlunsplit

_DEFAULT_PORTS = {80, 443}
_WEB_SCHEMES = ("http", "https")


def normalize_url(value: str) -> str:
    """
    Canonicalize a user-supplied URL to its https form.

    Blank input is returned as an empty string rather than normalized.
    Raises ValueError when no host can be parsed, or for non-web URLs.

    >>> normalize_url("HTTP://www.Example.com/me/")
    'https://example.com/me'
    >>> normalize_url("twitter.com/dev")
    'https://twitter.com/dev'
    """
    url = (value or "").strip()
    if not url:
        return ""

    if url.startswith("//"):
        url = "https:" + url
    elif "://" not in url:
        url = "https://" + url

    parts = urlsplit(url)
    if parts.scheme not in _WEB_SCHEMES:
        raise ValueError(f"Unsupported URL scheme: {value}")
    if parts.username is not None:
        # mailto:a@b.com ends up here once prefixed
        raise ValueError(f"URL must not contain credentials: {value}")

    try:
        port = parts.port
    except ValueError:
        raise ValueError(f"Invalid URL: {value}")

    host = (parts.hostname or "").lower()
    if not host:
        raise ValueError(f"Invalid URL: {value}")
    if host.startswith("www."):
        host = host[4:]
    if ":" in host:
        host = f"[{host}]"

    netloc = host
    if port and port not in _DEFAULT_PORTS:
        netloc = f"{host}:{port}"

    path = parts.path.rstrip("/")

    # Raw pairs keep their encoding and bare keys (?a stays ?a)
    pairs = [
        pair for pair in parts.query.split("&")
        if pair and not pair.split("=", 1)[0].lower().startswith("utm_")
    ]
    query = "&".join(sorted(pairs, key=lambda pair: pair.split("=", 1)[0]))

    return urlunsplit(("https", netloc, path, query, parts.fragment))


def normalize_skills(value: Union[List[str], str, None]) -> List[str]:
    """
    Turn skills input into an ordered list of trimmed names.

    Accepts a list or a comma-separated string; blank entries are dropped.

    >>> normalize_skills("js, react , node")
    ['js', 'react', 'node']
    """
    if value is None:
        return []

    items = value.split(",") if isinstance(value, str) else value
    return [item.strip() for item in items if isinstance(item, str) and item.strip()]
