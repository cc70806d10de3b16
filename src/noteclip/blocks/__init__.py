"""Markdown to document block parsing."""

from .inline import segment
from .languages import CANONICAL_LANGUAGES, LANGUAGE_ALIASES, PLAIN_TEXT, normalize_language
from .parser import MarkdownToBlocks, markdown_to_blocks

__all__ = [
    "CANONICAL_LANGUAGES",
    "LANGUAGE_ALIASES",
    "PLAIN_TEXT",
    "MarkdownToBlocks",
    "markdown_to_blocks",
    "normalize_language",
    "segment",
]
