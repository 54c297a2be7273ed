"""
Preview assembly for the link-preview function.

resolve_preview() runs the whole pipeline for one URL:

1. Normalize the input (bad input -> RequestError, HTTP 400)
2. Direct fetch
3. Mirror fetch if the direct HTML is missing or too short
4. Still no usable HTML -> Preview(ok=False), HTTP 200
5. Extract metadata -> Preview(ok=True)

Fetch problems never raise past this module; they end up as ok=False.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .config import PreviewConfig
from .fetch_utils import fetch_html, fetch_html_via_mirror, is_usable_html
from .meta_utils import TYPE_UNKNOWN, extract_preview_fields
from .url_utils import get_domain, normalize_http_url
from .youtube_utils import get_youtube_thumbnail

FETCH_FAILED = 'Could not fetch HTML for preview'


@dataclass(frozen=True)
class Preview:
    """Link-sharing summary of a URL, serialized with camelCase keys."""
    ok: bool
    input_url: str
    final_url: str
    domain: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    site_name: Optional[str] = None
    type: str = TYPE_UNKNOWN
    error: Optional[str] = None

    status = 200

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'ok': self.ok,
            'inputUrl': self.input_url,
            'finalUrl': self.final_url,
            'domain': self.domain,
            'title': self.title,
            'description': self.description,
            'image': self.image,
            'siteName': self.site_name,
            'type': self.type,
        }
        if not self.ok:
            data['error'] = self.error
        return data


@dataclass(frozen=True)
class RequestError:
    """Input the caller has to fix; maps to a 4xx response."""
    message: str
    status: int = 400

    def to_dict(self) -> Dict[str, Any]:
        return {'ok': False, 'error': self.message}


def build_preview_from_html(input_url: str, final_url: str, html: str) -> Preview:
    fields = extract_preview_fields(html, final_url)

    image = fields['image']
    if not image:
        image = get_youtube_thumbnail(final_url) or get_youtube_thumbnail(input_url)

    return Preview(
        ok=True,
        input_url=input_url,
        final_url=final_url,
        domain=get_domain(final_url),
        title=fields['title'],
        description=fields['description'],
        image=image,
        site_name=fields['site_name'],
        type=fields['type'],
    )


def resolve_preview(raw_url, config: Optional[PreviewConfig] = None) -> Union[Preview, RequestError]:
    """
    Build a Preview for a user-supplied URL.

    Args:
        raw_url: URL as received in the request body
        config: Fetch settings (defaults to PreviewConfig())

    Returns:
        RequestError for missing/unsupported URLs, otherwise a Preview
        (ok=False when no usable HTML could be fetched)
    """
    config = config or PreviewConfig()

    input_url, url_error = normalize_http_url(raw_url)
    if url_error:
        return RequestError(url_error)

    final_url = input_url
    html = ''

    page, fetch_error = fetch_html(input_url, config)
    if page:
        final_url = page.final_url
        html = page.html
    else:
        print(f"Direct fetch failed for {input_url}: {fetch_error}")

    if not is_usable_html(html, config.min_html_length) and config.mirror_enabled:
        print(f"Trying mirror fetch for {input_url}")
        mirror_page, mirror_error = fetch_html_via_mirror(input_url, config)
        if mirror_page:
            final_url = mirror_page.final_url
            html = mirror_page.html
        else:
            print(f"Mirror fetch failed for {input_url}: {mirror_error}")

    if not is_usable_html(html, config.min_html_length):
        print(f"No usable HTML for {input_url}")
        return Preview(
            ok=False,
            input_url=input_url,
            final_url=final_url,
            domain=get_domain(final_url),
            error=FETCH_FAILED,
        )

    return build_preview_from_html(input_url, final_url, html)
