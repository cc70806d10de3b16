"""Protocol definitions for content conversion."""

from typing import Optional, Protocol

from ..models.blocks import Block


class MarkdownConverter(Protocol):
    """
    Protocol for converting captured HTML to Markdown.

    Implementations must be total: every input, including None and
    malformed markup, yields a string.
    """

    def convert(self, html: Optional[str]) -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: HTML fragment string

        Returns:
            Markdown string
        """
        ...


class BlockParser(Protocol):
    """
    Protocol for parsing Markdown into document blocks.

    Implementations degrade malformed constructs to text instead of
    raising.
    """

    def parse(self, markdown: str) -> list[Block]:
        """
        Parse Markdown into blocks.

        Args:
            markdown: Markdown text

        Returns:
            Ordered list of blocks
        """
        ...
