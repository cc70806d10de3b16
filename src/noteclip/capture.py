"""Formatting of captured page selections."""

import logging
from typing import Optional

from .blocks.parser import MarkdownToBlocks
from .conversion.markdown import HtmlToMarkdown
from .conversion.protocols import BlockParser, MarkdownConverter
from .models.blocks import Block
from .models.config import ConversionConfig

logger = logging.getLogger(__name__)


def format_captured_content(markdown: str, page_title: str, page_url: str) -> str:
    """
    Format a captured selection as a source-link bullet with a nested quote.

    Example:
        >>> format_captured_content("Some text", "Page", "https://example.com")
        '- [Page](https://example.com)\\n  > Some text'

    Args:
        markdown: Markdown of the selection (may be empty)
        page_title: Title of the source page
        page_url: URL of the source page

    Returns:
        Markdown with the source link bullet first
    """
    escaped_title = page_title.replace("[", "\\[").replace("]", "\\]")
    source_link = f"[{escaped_title}]({page_url})"

    if not markdown.strip():
        return f"- {source_link}"

    quoted = "\n".join(f"  > {line}" for line in markdown.split("\n"))
    return f"- {source_link}\n{quoted}"


def clip_to_blocks(
    html: Optional[str],
    page_title: str,
    page_url: str,
    config: Optional[ConversionConfig] = None,
    converter: Optional[MarkdownConverter] = None,
    parser: Optional[BlockParser] = None,
) -> list[Block]:
    """
    Run the whole clip pipeline: HTML selection to document blocks.

    Args:
        html: Selected HTML fragment
        page_title: Title of the source page
        page_url: URL of the source page
        config: Conversion settings
        converter: HTML to Markdown stage (uses HtmlToMarkdown if None)
        parser: Markdown to blocks stage (uses MarkdownToBlocks if None)

    Returns:
        Blocks ready for the document API, normally a single bullet
        whose child quote holds the selection
    """
    config = config or ConversionConfig()
    converter = converter or HtmlToMarkdown(base_url=config.base_url or page_url)
    parser = parser or MarkdownToBlocks(config)

    markdown = converter.convert(html)
    content = format_captured_content(markdown, page_title, page_url)
    logger.debug(f"Captured {len(markdown)} characters of Markdown from {page_url}")
    return parser.parse(content)
