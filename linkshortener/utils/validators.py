"""Validation utilities for registration input.

Functions:
    is_absolute_url(url) -> bool
        Check that a URL is absolute and well-formed.
    is_blank(value) -> bool
        Check if an optional alias counts as "not provided".
    is_valid_alias(alias) -> bool
        Check that a custom alias is non-empty and free of whitespace.
"""

import re
from urllib.parse import urlsplit


# RFC 3986 scheme: ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
SCHEME_PATTERN = re.compile(r'^[A-Za-z][A-Za-z0-9+.\-]*$')


def is_absolute_url(url: str) -> bool:
    """Check that `url` is an absolute, well-formed URL.

    A URL is accepted when it has a valid scheme, a non-empty host, a valid
    port (if any) and contains no whitespace. Authority-less URIs such as
    `mailto:` or `urn:` are rejected since they cannot be redirected to.

    Args:
        url (str): candidate target URL

    Returns:
        bool: True if the URL is absolute and well-formed, False otherwise.

    Example:
        >>> is_absolute_url('https://example.com/page')
        True
        >>> is_absolute_url('not-a-url')
        False
        >>> is_absolute_url('https://exa mple.com')
        False
    """
    if not isinstance(url, str) or not url:
        return False
    if any(ch.isspace() for ch in url):
        return False

    try:
        components = urlsplit(url)
        components.port  # raises ValueError on out-of-range or non-numeric ports
    except ValueError:
        return False

    if not SCHEME_PATTERN.match(components.scheme):
        return False
    return bool(components.netloc) and bool(components.hostname)


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def is_valid_alias(alias: str) -> bool:
    """Check that a custom alias is non-empty and contains no whitespace.

    Example:
        >>> is_valid_alias('my-link')
        True
        >>> is_valid_alias('my link')
        False
    """
    return bool(alias) and not any(ch.isspace() for ch in alias)
