"""Page identifier parsing for the document API."""

import re
from typing import Optional
from urllib.parse import urlparse

PAGE_ID_PATTERN = re.compile(r"^[a-f0-9]{32}$", re.IGNORECASE)
UUID_PATTERN = re.compile(r"^[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}$", re.IGNORECASE)
URL_PAGE_ID_PATTERN = re.compile(r"([a-f0-9]{32})$", re.IGNORECASE)
URL_UUID_PATTERN = re.compile(r"([a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12})$", re.IGNORECASE)


def extract_page_id_from_url(url: str) -> Optional[str]:
    """
    Extract a page id from a page URL.

    Only the path is considered, so query strings and fragments are
    ignored. The id is the trailing 32 hex characters (or a dashed UUID)
    of the path.

    Returns:
        32-character id without dashes, or None
    """
    try:
        parsed = urlparse(url)
    except ValueError:
        return None

    if not parsed.scheme or not parsed.netloc:
        return None

    match = URL_PAGE_ID_PATTERN.search(parsed.path) or URL_UUID_PATTERN.search(parsed.path)
    if match:
        return match.group(1).replace("-", "")
    return None


def parse_page_identifier(value: str) -> Optional[str]:
    """
    Normalize a page id, dashed UUID or page URL to a 32-character id.

    Example:
        >>> parse_page_identifier("1234ABCD-1234-1234-1234-1234567890AB")
        '1234abcd1234123412341234567890ab'
    """
    trimmed = value.strip()

    if PAGE_ID_PATTERN.match(trimmed):
        return trimmed.lower()

    if UUID_PATTERN.match(trimmed):
        return trimmed.replace("-", "").lower()

    if trimmed.startswith("http"):
        return extract_page_id_from_url(trimmed)

    return None
