"""
Open Graph / Twitter Card metadata extraction for link previews.

Field priority (first non-empty value wins):
- title:       og:title -> twitter:title -> <title>
- description: og:description -> twitter:description -> description
- image:       og:image -> twitter:image (made absolute against the page URL)
- site_name:   og:site_name
- type:        "video" when og:video or twitter:player exists, else "website"

Extraction never raises on malformed markup; a missing tag yields None.
"""

import re
from html import unescape
from typing import Dict, Optional

from bs4 import BeautifulSoup

from .url_utils import absolutize_url

TYPE_WEBSITE = 'website'
TYPE_VIDEO = 'video'
TYPE_UNKNOWN = 'unknown'

VIDEO_META_KEYS = ('og:video', 'twitter:player')


def pick_first(*values: Optional[str]) -> Optional[str]:
    """Return the first value that is non-empty after trimming, stripped."""
    for value in values:
        s = (value or '').strip()
        if s:
            return s
    return None


def _meta_key_matcher(key: str):
    # Case-insensitive exact match on the attribute value, tolerant of padding
    return re.compile(rf'^\s*{re.escape(key)}\s*$', re.I)


def extract_meta(soup: BeautifulSoup, key: str) -> Optional[str]:
    """
    Content of the first <meta> whose property or name equals key.

    Tags with an empty content attribute are skipped so a later duplicate
    can still supply the value.
    """
    if not soup:
        return None

    matcher = _meta_key_matcher(key)
    for attr in ('property', 'name'):
        for tag in soup.find_all('meta', attrs={attr: matcher}):
            content = pick_first(tag.get('content'))
            if content:
                return content
    return None


def extract_title_tag(soup: BeautifulSoup) -> Optional[str]:
    """Text of <title>, whitespace collapsed and entities decoded."""
    if not soup:
        return None
    title_tag = soup.find('title')
    if not title_tag:
        return None
    # Newer html.parser versions treat <title> as RCDATA and may leave refs undecoded
    text = re.sub(r'\s+', ' ', unescape(title_tag.get_text())).strip()
    return text or None


def detect_preview_type(soup: BeautifulSoup) -> str:
    for key in VIDEO_META_KEYS:
        if extract_meta(soup, key):
            return TYPE_VIDEO
    return TYPE_WEBSITE


def extract_preview_fields(html: str, base_url: str) -> Dict[str, Optional[str]]:
    """
    Pull preview fields out of raw HTML.

    Args:
        html: Page markup (entities are decoded by the parser)
        base_url: Post-redirect page URL used to absolutize the image

    Returns:
        dict with title, description, image, site_name and type
    """
    soup = BeautifulSoup(html or '', 'html.parser')

    title = pick_first(
        extract_meta(soup, 'og:title'),
        extract_meta(soup, 'twitter:title'),
        extract_title_tag(soup),
    )

    description = pick_first(
        extract_meta(soup, 'og:description'),
        extract_meta(soup, 'twitter:description'),
        extract_meta(soup, 'description'),
    )

    raw_image = pick_first(
        extract_meta(soup, 'og:image'),
        extract_meta(soup, 'twitter:image'),
    )

    return {
        'title': title,
        'description': description,
        'image': absolutize_url(raw_image, base_url),
        'site_name': extract_meta(soup, 'og:site_name'),
        'type': detect_preview_type(soup),
    }
