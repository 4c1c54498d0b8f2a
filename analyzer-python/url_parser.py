#!/usr/bin/env python3
"""
Share-URL helpers.

Temple planners put the encoded layout in the URL fragment, e.g.
http://localhost:8080/#/atziri-temple?t=<data>
"""

import re
from typing import Optional
from urllib.parse import urlsplit

SHARE_PARAM = re.compile(r'\?t=([^&]+)')


def _split(url):
    """urlsplit() result for an absolute URL, else None."""
    if not isinstance(url, str):
        return None
    try:
        parsed = urlsplit(url.strip())
    except ValueError:
        return None
    if not parsed.scheme:
        return None
    return parsed


def extract_share_data(share_url: str) -> Optional[str]:
    """Encoded temple data from the ?t= parameter of the URL fragment, or None."""
    parsed = _split(share_url)
    if parsed is None:
        return None
    match = SHARE_PARAM.search(parsed.fragment)
    return match.group(1) if match else None


def validate_share_url(url: str) -> bool:
    """True for http(s) URLs carrying temple data. Rejects javascript:, data: and the like."""
    parsed = _split(url)
    if parsed is None:
        return False
    if not parsed.scheme.lower().startswith('http') or not parsed.netloc:
        return False
    return '?t=' in parsed.fragment
