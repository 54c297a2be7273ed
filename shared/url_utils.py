"""
URL handling utilities for the link-preview function.

Only http and https URLs are ever fetched. Input without a scheme is assumed
to be https, and anything carrying another scheme is rejected before a
request is made.
"""

import re
from typing import Optional, Tuple
from urllib.parse import urljoin, urlparse

MISSING_URL = 'Missing url'
UNSUPPORTED_SCHEME = 'Only http/https URLs are allowed'

HTTP_SCHEME_RE = re.compile(r'^https?://', re.I)
_EXPLICIT_SCHEME_RE = re.compile(r'^[a-z][a-z0-9+.\-]*://', re.I)
_OPAQUE_SCHEME_RE = re.compile(r'^(?:mailto|javascript|data|tel|file|about):', re.I)
_WWW_PREFIX_RE = re.compile(r'^www\.', re.I)


def is_http_url(url: str) -> bool:
    """True if the string starts with http:// or https:// (any case)."""
    return bool(url) and bool(HTTP_SCHEME_RE.match(url))


def normalize_http_url(raw) -> Tuple[str, Optional[str]]:
    """
    Canonicalize user input into an absolute http(s) URL.

    Args:
        raw: Value received from the client (usually a string, may be None)

    Returns:
        Tuple of (url, error). On success error is None; on failure url is ''
        and error is MISSING_URL or UNSUPPORTED_SCHEME.

    Examples:
        >>> normalize_http_url("example.com/a")
        ('https://example.com/a', None)

        >>> normalize_http_url("  ")
        ('', 'Missing url')

        >>> normalize_http_url("ftp://example.com")
        ('', 'Only http/https URLs are allowed')
    """
    s = '' if raw is None else str(raw).strip()
    if not s:
        return ('', MISSING_URL)

    if is_http_url(s):
        return (s, None)

    if _EXPLICIT_SCHEME_RE.match(s) or _OPAQUE_SCHEME_RE.match(s):
        return ('', UNSUPPORTED_SCHEME)

    url = f'https://{s}'
    if not is_http_url(url):
        return ('', UNSUPPORTED_SCHEME)

    return (url, None)


def get_domain(url: str) -> Optional[str]:
    """
    Hostname of a URL without a leading "www.".

    Examples:
        >>> get_domain("https://www.Example.com/x")
        'example.com'
    """
    if not url:
        return None
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return None
    if not hostname:
        return None
    return _WWW_PREFIX_RE.sub('', hostname)


def absolutize_url(maybe_relative: Optional[str], base_url: str) -> Optional[str]:
    """
    Resolve an image (or any asset) reference against the page URL.

    Absolute http(s) URLs pass through, protocol-relative URLs get https:,
    everything else is joined against base_url. Returns None instead of
    raising when the input or the base is unusable.

    Examples:
        >>> absolutize_url("/img/a.png", "https://site.com/page")
        'https://site.com/img/a.png'

        >>> absolutize_url("//cdn.site.com/a.png", "https://site.com/page")
        'https://cdn.site.com/a.png'
    """
    if not maybe_relative:
        return None
    s = str(maybe_relative).strip()
    if not s:
        return None

    if is_http_url(s):
        return s

    if s.startswith('//'):
        return f'https:{s}'

    try:
        base = urlparse(base_url or '')
        if not base.scheme or not base.netloc:
            return None
        return urljoin(base_url, s)
    except ValueError:
        return None
