"""YouTube link helpers used when a page exposes no preview image."""

from typing import Optional
from urllib.parse import parse_qs, urlparse

THUMBNAIL_URL = 'https://img.youtube.com/vi/{video_id}/hqdefault.jpg'


def _youtube_host(url: str) -> Optional[str]:
    """'youtu.be' or 'youtube.com' when the URL's host is YouTube, else None."""
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return None
    if not hostname:
        return None
    if hostname == 'youtu.be':
        return 'youtu.be'
    if hostname == 'youtube.com' or hostname.endswith('.youtube.com'):
        return 'youtube.com'
    return None


def get_youtube_video_id(url: str) -> Optional[str]:
    """
    Extract the video ID from youtu.be, shorts and watch URLs.

    Only the hostname decides whether a URL is YouTube; lookalike hosts and
    query strings mentioning youtube.com do not count.

    Examples:
        >>> get_youtube_video_id("https://youtu.be/abc123?t=10")
        'abc123'

        >>> get_youtube_video_id("https://www.youtube.com/watch?v=abc123&list=x")
        'abc123'

        >>> get_youtube_video_id("https://notyoutube.com/watch?v=abc123") is None
        True
    """
    if not url:
        return None

    url = str(url)
    host = _youtube_host(url)
    if not host:
        return None

    parsed = urlparse(url)
    segments = [s for s in parsed.path.split('/') if s]

    if host == 'youtu.be':
        return segments[0] if segments else None

    if len(segments) >= 2 and segments[0].lower() == 'shorts':
        return segments[1]

    values = parse_qs(parsed.query).get('v')
    return values[0] if values and values[0] else None


def get_youtube_thumbnail(url: str) -> Optional[str]:
    video_id = get_youtube_video_id(url)
    if not video_id:
        return None
    return THUMBNAIL_URL.format(video_id=video_id)
