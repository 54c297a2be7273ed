"""Shared utilities for the link-preview Cloud Function."""

from .config import (
    DEFAULT_MAX_BYTES,
    DEFAULT_MIN_HTML_LENGTH,
    DEFAULT_MIRROR_BASE_URL,
    DEFAULT_TIMEOUT,
    PreviewConfig,
)

from .url_utils import (
    HTTP_SCHEME_RE,
    MISSING_URL,
    UNSUPPORTED_SCHEME,
    absolutize_url,
    get_domain,
    is_http_url,
    normalize_http_url,
)

from .fetch_utils import (
    FetchedPage,
    build_mirror_url,
    fetch_html,
    fetch_html_via_mirror,
    is_usable_html,
    read_limited_text,
)

from .meta_utils import (
    TYPE_UNKNOWN,
    TYPE_VIDEO,
    TYPE_WEBSITE,
    extract_meta,
    extract_preview_fields,
    extract_title_tag,
    pick_first,
)

from .youtube_utils import (
    get_youtube_thumbnail,
    get_youtube_video_id,
)

from .preview_utils import (
    FETCH_FAILED,
    Preview,
    RequestError,
    build_preview_from_html,
    resolve_preview,
)

__all__ = [
    # Configuration
    'DEFAULT_MAX_BYTES',
    'DEFAULT_MIN_HTML_LENGTH',
    'DEFAULT_MIRROR_BASE_URL',
    'DEFAULT_TIMEOUT',
    'PreviewConfig',
    # URL utilities
    'HTTP_SCHEME_RE',
    'MISSING_URL',
    'UNSUPPORTED_SCHEME',
    'absolutize_url',
    'get_domain',
    'is_http_url',
    'normalize_http_url',
    # Fetchers
    'FetchedPage',
    'build_mirror_url',
    'fetch_html',
    'fetch_html_via_mirror',
    'is_usable_html',
    'read_limited_text',
    # Metadata extraction
    'TYPE_UNKNOWN',
    'TYPE_VIDEO',
    'TYPE_WEBSITE',
    'extract_meta',
    'extract_preview_fields',
    'extract_title_tag',
    'pick_first',
    # YouTube helpers
    'get_youtube_thumbnail',
    'get_youtube_video_id',
    # Preview assembly
    'FETCH_FAILED',
    'Preview',
    'RequestError',
    'build_preview_from_html',
    'resolve_preview',
]
