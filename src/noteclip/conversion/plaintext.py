"""Plain text fallback for HTML that cannot be converted."""

import logging
import re
from typing import Optional

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

TAG_PATTERN = re.compile(r"<[^>]*>")


def strip_html(html: Optional[str]) -> str:
    """
    Strip HTML tags and return the text content.

    Falls back to a blunt tag-removal regex if the markup cannot be
    parsed at all.

    Args:
        html: HTML fragment; None and empty strings give ""

    Returns:
        Plain text (never raises)
    """
    if not html or not isinstance(html, str):
        return ""

    try:
        soup = BeautifulSoup(html, "html.parser")
        text: str = soup.get_text()
        return text
    except Exception as e:
        logger.debug(f"HTML parsing failed, stripping tags with regex: {e}")
        return TAG_PATTERN.sub("", html)
