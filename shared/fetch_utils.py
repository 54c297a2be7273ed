"""
HTML fetch strategies for the link-preview function.

Both strategies return a (page, error) tuple where exactly one side is set.
Only transport failures count as errors; a 403 or 503 body is still returned
so the caller can judge whether it is usable.

Bodies are streamed: each attempt must finish within config.timeout seconds
overall, and at most config.max_bytes are kept (preview metadata lives in
<head>, so a truncated page is still useful).
"""

import time
from dataclasses import dataclass
from typing import Optional, Tuple

import requests
from requests.compat import chardet

from .config import PreviewConfig
from .url_utils import HTTP_SCHEME_RE

HTML_ACCEPT = 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8'

# Small enough that a trickling server cannot hold one read far past the deadline
READ_CHUNK_SIZE = 1024


@dataclass(frozen=True)
class FetchedPage:
    final_url: str
    html: str


def is_usable_html(html: Optional[str], min_length: int) -> bool:
    """True if html has at least min_length characters once trimmed."""
    if not html:
        return False
    return len(html.strip()) >= min_length


def build_mirror_url(url: str, mirror_base_url: str) -> str:
    """
    Wrap a target URL in the mirror service prefix.

    Examples:
        >>> build_mirror_url("https://example.com/a", "https://r.jina.ai/http://")
        'https://r.jina.ai/http://example.com/a'
    """
    return f"{mirror_base_url}{HTTP_SCHEME_RE.sub('', url)}"


def _decode_body(body: bytes, encoding: Optional[str]) -> str:
    if not encoding and body and chardet is not None:
        encoding = chardet.detect(body).get('encoding')
    try:
        return body.decode(encoding or 'utf-8', errors='replace')
    except LookupError:
        return body.decode('utf-8', errors='replace')


def read_limited_text(response: requests.Response, deadline: float, max_bytes: int) -> str:
    """
    Read a streamed response body as text, stopping at max_bytes.

    Raises requests.exceptions.ReadTimeout once time.monotonic() passes
    deadline, however steadily the server keeps sending data.
    """
    buffer = bytearray()
    for chunk in response.iter_content(chunk_size=READ_CHUNK_SIZE):
        if time.monotonic() > deadline:
            raise requests.exceptions.ReadTimeout(f'Body not received before deadline ({response.url})')
        if not chunk:
            continue
        buffer.extend(chunk)
        if len(buffer) >= max_bytes:
            print(f"Truncated body of {response.url} at {max_bytes} bytes")
            del buffer[max_bytes:]
            break
    return _decode_body(bytes(buffer), response.encoding)


def fetch_html(url: str, config: PreviewConfig) -> Tuple[Optional[FetchedPage], Optional[str]]:
    """Fetch a page directly with browser-like headers. Returns (page, error)."""
    deadline = time.monotonic() + config.timeout
    try:
        headers = {
            'User-Agent': config.user_agent,
            'Accept': HTML_ACCEPT,
            'Accept-Language': 'en-US,en;q=0.5',
        }

        with requests.get(url, headers=headers, timeout=config.timeout, allow_redirects=True, stream=True) as response:
            # Body is read even for non-2xx and non-HTML content types
            html = read_limited_text(response, deadline, config.max_bytes)
            return FetchedPage(final_url=response.url or url, html=html), None

    except requests.exceptions.Timeout:
        return None, 'Request timed out'
    except requests.exceptions.RequestException as e:
        return None, f'Request failed: {str(e)}'


def fetch_html_via_mirror(url: str, config: PreviewConfig) -> Tuple[Optional[FetchedPage], Optional[str]]:
    """
    Fetch a page through the public HTML mirror. Returns (page, error).

    The mirror often gets through bot walls that block direct requests.
    final_url is the original target, never the mirror's own URL.
    """
    mirror_url = build_mirror_url(url, config.mirror_base_url)
    deadline = time.monotonic() + config.timeout

    try:
        with requests.get(mirror_url, timeout=config.timeout, allow_redirects=True, stream=True) as response:
            html = read_limited_text(response, deadline, config.max_bytes)
            return FetchedPage(final_url=url, html=html), None

    except requests.exceptions.Timeout:
        return None, 'Mirror request timed out'
    except requests.exceptions.RequestException as e:
        return None, f'Mirror request failed: {str(e)}'
