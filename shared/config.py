"""
Runtime configuration for the link-preview Cloud Function.

Values come from Cloud Function environment variables and are read once per
instance by PreviewConfig.from_env(). The resulting object is passed into the
resolver instead of being looked up globally.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_TIMEOUT = 10.0
DEFAULT_MIN_HTML_LENGTH = 200
DEFAULT_MAX_BYTES = 2 * 1024 * 1024
DEFAULT_MIRROR_BASE_URL = 'https://r.jina.ai/http://'
DEFAULT_USER_AGENT = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36'

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}
_FALSE_VALUES = {'0', 'false', 'no', 'off'}


def _env_float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        print(f"Invalid {key}={raw!r}, using {default}")
        return default
    return value if value > 0 else default


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        print(f"Invalid {key}={raw!r}, using {default}")
        return default
    return value if value >= 0 else default


def _env_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = (env.get(key) or '').strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    return default


@dataclass(frozen=True)
class PreviewConfig:
    """
    Settings for fetching and judging preview HTML.

    Attributes:
        timeout: Seconds allowed for each outbound request (direct and mirror),
            including reading the whole body
        min_html_length: Shortest stripped HTML body considered usable
        max_bytes: Most body bytes kept from a single response
        mirror_enabled: Whether to fall back to the mirror service
        mirror_base_url: Prefix the scheme-less target URL is appended to
        user_agent: User-Agent sent on direct fetches
    """
    timeout: float = DEFAULT_TIMEOUT
    min_html_length: int = DEFAULT_MIN_HTML_LENGTH
    max_bytes: int = DEFAULT_MAX_BYTES
    mirror_enabled: bool = True
    mirror_base_url: str = DEFAULT_MIRROR_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'PreviewConfig':
        """Build a config from environment variables, falling back to defaults."""
        if env is None:
            env = os.environ

        return cls(
            timeout=_env_float(env, 'LINK_PREVIEW_TIMEOUT', DEFAULT_TIMEOUT),
            min_html_length=_env_int(env, 'LINK_PREVIEW_MIN_HTML_LENGTH', DEFAULT_MIN_HTML_LENGTH),
            max_bytes=_env_int(env, 'LINK_PREVIEW_MAX_BYTES', DEFAULT_MAX_BYTES) or DEFAULT_MAX_BYTES,
            mirror_enabled=_env_bool(env, 'LINK_PREVIEW_MIRROR_ENABLED', True),
            mirror_base_url=(env.get('LINK_PREVIEW_MIRROR_BASE_URL') or DEFAULT_MIRROR_BASE_URL).strip(),
            user_agent=(env.get('LINK_PREVIEW_USER_AGENT') or DEFAULT_USER_AGENT).strip(),
        )
