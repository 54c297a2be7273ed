"""
Link Preview Cloud Function

Turns a URL posted by the app into a link-sharing preview (title,
description, image, site name, type).

Responsibilities:
- Validate and normalize the URL
- Fetch the page directly, falling back to a public HTML mirror
- Extract Open Graph / Twitter Card / <title> metadata

Does NOT:
- Store previews (the app writes them onto the post)
- Retry, rate limit or cache
- Execute JavaScript on fetched pages

Status codes: 4xx only for malformed requests. Fetch failures and unexpected
errors come back as 200 with ok=false so the app can show the bare link.
"""

import functions_framework
import json
import os
import sys

# Add shared module to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from shared.config import PreviewConfig
from shared.preview_utils import resolve_preview

# Configuration
CONFIG = PreviewConfig.from_env()

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'authorization, x-client-info, apikey, content-type',
}

JSON_HEADERS = {**CORS_HEADERS, 'Content-Type': 'application/json'}


def json_response(payload: dict, status: int = 200) -> tuple:
    return (json.dumps(payload), status, JSON_HEADERS)


def parse_request_body(request):
    """Parse the JSON body. Raises ValueError if it is not valid JSON."""
    body = request.get_json(force=True, silent=True)
    if body is not None:
        return body

    raw_data = request.data
    if isinstance(raw_data, bytes):
        raw_data = raw_data.decode('utf-8')
    return json.loads(raw_data)


@functions_framework.http
def link_preview(request):
    """
    Main Cloud Function entry point.

    Expected JSON input:
    {
        "url": "https://example.com/article"
    }
    """
    # Handle CORS preflight
    if request.method == 'OPTIONS':
        return ('ok', 200, CORS_HEADERS)

    try:
        if request.method != 'POST':
            return json_response({'ok': False, 'error': 'Use POST'}, 405)

        try:
            body = parse_request_body(request)
        except ValueError:
            return json_response({'ok': False, 'error': 'Invalid JSON body'}, 400)

        raw_url = body.get('url') if isinstance(body, dict) else None

        result = resolve_preview(raw_url, CONFIG)
        return json_response(result.to_dict(), result.status)

    except Exception as e:
        print(f"link-preview error: {e}")
        return json_response({'ok': False, 'error': str(e) or 'Unknown error'}, 200)
