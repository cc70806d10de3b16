"""Block and rich text models for the Markdown to blocks stage."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class BlockType(str, Enum):
    """Block types understood by the document API."""

    PARAGRAPH = "paragraph"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    BULLETED_LIST_ITEM = "bulleted_list_item"
    NUMBERED_LIST_ITEM = "numbered_list_item"
    CODE = "code"
    QUOTE = "quote"


HEADING_TYPES = {
    1: BlockType.HEADING_1,
    2: BlockType.HEADING_2,
    3: BlockType.HEADING_3,
}


@dataclass(frozen=True)
class Annotations:
    """Inline formatting flags for a span of text."""

    bold: bool = False
    italic: bool = False
    code: bool = False

    @property
    def is_plain(self) -> bool:
        return not (self.bold or self.italic or self.code)

    def to_request(self) -> dict[str, Any]:
        return {
            "bold": self.bold,
            "italic": self.italic,
            "code": self.code,
            "strikethrough": False,
            "underline": False,
            "color": "default",
        }


PLAIN = Annotations()


@dataclass(frozen=True)
class RichTextSpan:
    """
    A contiguous run of text sharing one set of annotations.

    Attributes:
        content: Text of the span, formatting markers removed
        annotations: Bold/italic/code flags
        link: Optional URL the span links to
    """

    content: str
    annotations: Annotations = PLAIN
    link: Optional[str] = None

    @property
    def is_plain(self) -> bool:
        return self.annotations.is_plain and self.link is None

    def to_request(self) -> dict[str, Any]:
        """Serialize to a document API rich text item."""
        text: dict[str, Any] = {"content": self.content}
        if self.link:
            text["link"] = {"url": self.link}
        return {
            "type": "text",
            "text": text,
            "annotations": self.annotations.to_request(),
        }


@dataclass(frozen=True)
class Block:
    """
    One top-level structural unit of content.

    Only bulleted list items carry children, and children never carry
    children of their own. Code blocks carry a single plain span and a
    canonical language tag.
    """

    type: BlockType
    rich_text: tuple[RichTextSpan, ...] = ()
    children: tuple[Block, ...] = field(default_factory=tuple)
    language: Optional[str] = None

    @property
    def plain_text(self) -> str:
        """Concatenated span contents."""
        return "".join(span.content for span in self.rich_text)

    def to_request(self) -> dict[str, Any]:
        """Serialize to a document API block request."""
        body: dict[str, Any] = {
            "rich_text": [span.to_request() for span in self.rich_text],
        }
        if self.children:
            body["children"] = [child.to_request() for child in self.children]
        if self.type == BlockType.CODE:
            body["language"] = self.language
        return {"type": self.type.value, self.type.value: body}


def blocks_to_request(blocks: list[Block]) -> list[dict[str, Any]]:
    """Serialize a block sequence to document API block requests."""
    return [block.to_request() for block in blocks]


def append_children_request(page_id: str, blocks: list[Block]) -> dict[str, Any]:
    """
    Build the request body for appending blocks to a page.

    Args:
        page_id: Normalized 32-character page id
        blocks: Blocks to append, in order

    Returns:
        Request body dict with ``block_id`` and ``children``
    """
    return {"block_id": page_id, "children": blocks_to_request(blocks)}
