"""Markdown to document blocks."""

import logging
import re
from typing import Optional

from ..models.blocks import HEADING_TYPES, Block, BlockType, RichTextSpan
from ..models.config import ConversionConfig
from .inline import segment
from .languages import PLAIN_TEXT, normalize_language

logger = logging.getLogger(__name__)

FENCE = "```"
HEADING_PATTERN = re.compile(r"^(#{1,3}) ")
BULLET_PATTERN = re.compile(r"^[-*]\s")
NESTED_BULLET_PATTERN = re.compile(r"^\s{2,}[-*]\s")
NESTED_QUOTE_PATTERN = re.compile(r"^\s+>\s?")
NUMBERED_PATTERN = re.compile(r"^\d+\.\s")
QUOTE_MARKER = "> "


def _is_blank(line: str) -> bool:
    return line.strip() == ""


def _starts_block(line: str) -> bool:
    """True if the line opens a fence, heading, list or quote."""
    return bool(
        line.startswith(FENCE)
        or HEADING_PATTERN.match(line)
        or BULLET_PATTERN.match(line)
        or NUMBERED_PATTERN.match(line)
        or line.startswith(QUOTE_MARKER)
    )


class MarkdownToBlocks:
    """
    Parses Markdown text into document blocks.

    Supports a practical subset of Markdown: fenced code, headings up to
    level three, bulleted lists (with one level of nested bullets or an
    indented quote under an item), numbered lists, quotes and paragraphs.
    Anything else is kept as paragraph text.

    Example:
        parser = MarkdownToBlocks()
        blocks = parser.parse("# Title\\n\\nSome **bold** text")
    """

    def __init__(self, config: Optional[ConversionConfig] = None):
        self._config = config or ConversionConfig()

    def _spans(self, text: str) -> tuple[RichTextSpan, ...]:
        return tuple(segment(text, self._config.inline_mode))

    def _text_block(self, block_type: BlockType, text: str) -> Block:
        return Block(type=block_type, rich_text=self._spans(text))

    def parse(self, markdown: str) -> list[Block]:
        """
        Parse Markdown into blocks.

        Args:
            markdown: Markdown text

        Returns:
            Ordered list of blocks; empty for empty input
        """
        if not markdown:
            return []

        lines = markdown.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        blocks: list[Block] = []
        i = 0

        while i < len(lines):
            line = lines[i]

            if _is_blank(line):
                i += 1
                continue

            if line.startswith(FENCE):
                block, i = self._parse_code(lines, i)
                blocks.append(block)
                continue

            heading = HEADING_PATTERN.match(line)
            if heading:
                level = len(heading.group(1))
                blocks.append(self._text_block(HEADING_TYPES[level], line[heading.end() :]))
                i += 1
                continue

            if BULLET_PATTERN.match(line):
                i = self._parse_bullets(lines, i, blocks)
                continue

            if NUMBERED_PATTERN.match(line):
                while i < len(lines) and NUMBERED_PATTERN.match(lines[i]):
                    item = NUMBERED_PATTERN.sub("", lines[i], count=1)
                    blocks.append(self._text_block(BlockType.NUMBERED_LIST_ITEM, item))
                    i += 1
                continue

            if line.startswith(QUOTE_MARKER):
                quote_lines = []
                while i < len(lines) and lines[i].startswith(QUOTE_MARKER):
                    quote_lines.append(lines[i][len(QUOTE_MARKER) :])
                    i += 1
                blocks.append(self._text_block(BlockType.QUOTE, "\n".join(quote_lines)))
                continue

            # Paragraph: the current line always belongs to it, so marker
            # look-alikes such as "#### x" still make progress
            paragraph_lines = [line]
            i += 1
            while i < len(lines) and not _is_blank(lines[i]) and not _starts_block(lines[i]):
                paragraph_lines.append(lines[i])
                i += 1
            blocks.append(self._text_block(BlockType.PARAGRAPH, " ".join(paragraph_lines)))

        logger.debug(f"Parsed {len(lines)} lines into {len(blocks)} blocks")
        return blocks

    def _parse_code(self, lines: list[str], i: int) -> tuple[Block, int]:
        """Consume a fenced code block starting at line i."""
        raw_language = lines[i][len(FENCE) :].strip() or PLAIN_TEXT
        i += 1

        code_lines = []
        while i < len(lines) and not lines[i].startswith(FENCE):
            code_lines.append(lines[i])
            i += 1

        if i >= len(lines):
            logger.debug("Unterminated code fence consumed to end of input")
        # Skip the closing fence
        i += 1

        block = Block(
            type=BlockType.CODE,
            rich_text=(RichTextSpan("\n".join(code_lines)),),
            language=normalize_language(raw_language, self._config.language_aliases),
        )
        return block, i

    def _parse_bullets(self, lines: list[str], i: int, blocks: list[Block]) -> int:
        """Consume a run of bullet items, each with optional nested content."""
        while i < len(lines) and BULLET_PATTERN.match(lines[i]):
            item_text = lines[i][2:]
            i += 1

            children: list[Block] = []
            while i < len(lines) and NESTED_BULLET_PATTERN.match(lines[i]):
                sub_item = NESTED_BULLET_PATTERN.sub("", lines[i], count=1)
                children.append(self._text_block(BlockType.BULLETED_LIST_ITEM, sub_item))
                i += 1

            quote_lines = []
            while i < len(lines) and NESTED_QUOTE_PATTERN.match(lines[i]):
                quote_lines.append(NESTED_QUOTE_PATTERN.sub("", lines[i], count=1))
                i += 1
            if quote_lines:
                children.append(self._text_block(BlockType.QUOTE, "\n".join(quote_lines)))

            blocks.append(
                Block(
                    type=BlockType.BULLETED_LIST_ITEM,
                    rich_text=self._spans(item_text),
                    children=tuple(children),
                )
            )
        return i


def markdown_to_blocks(markdown: str, config: Optional[ConversionConfig] = None) -> list[Block]:
    """Parse Markdown into blocks; see MarkdownToBlocks."""
    return MarkdownToBlocks(config).parse(markdown)
