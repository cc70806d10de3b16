"""
noteclip - Convert captured web page HTML to Markdown and Markdown to document blocks.

Usage:
    from noteclip import html_to_markdown, markdown_to_blocks

    markdown = html_to_markdown("<p>Some <strong>bold</strong> text</p>")
    blocks = markdown_to_blocks(markdown)
    requests = blocks_to_request(blocks)
"""

__version__ = "1.0.0"

from .blocks import MarkdownToBlocks, markdown_to_blocks, normalize_language, segment
from .capture import clip_to_blocks, format_captured_content
from .conversion import HtmlToMarkdown, html_to_markdown, strip_html
from .identifiers import extract_page_id_from_url, parse_page_identifier
from .logging_config import setup_logging
from .models import (
    Annotations,
    Block,
    BlockType,
    ConversionConfig,
    InlineMode,
    RichTextSpan,
    append_children_request,
    blocks_to_request,
)

__all__ = [
    "__version__",
    # HTML to Markdown
    "HtmlToMarkdown",
    "html_to_markdown",
    "strip_html",
    # Markdown to blocks
    "MarkdownToBlocks",
    "markdown_to_blocks",
    "normalize_language",
    "segment",
    # Capture
    "clip_to_blocks",
    "format_captured_content",
    "extract_page_id_from_url",
    "parse_page_identifier",
    # Models
    "Annotations",
    "Block",
    "BlockType",
    "RichTextSpan",
    "append_children_request",
    "blocks_to_request",
    # Config
    "ConversionConfig",
    "InlineMode",
    "setup_logging",
]
