"""Content conversion for noteclip (HTML to Markdown, plain text fallback)."""

from .markdown import HtmlToMarkdown, TagRule, build_rule_table, html_to_markdown
from .plaintext import strip_html
from .protocols import BlockParser, MarkdownConverter

__all__ = [
    # Protocols
    "BlockParser",
    "MarkdownConverter",
    # Implementations
    "HtmlToMarkdown",
    "TagRule",
    "build_rule_table",
    "html_to_markdown",
    "strip_html",
]
